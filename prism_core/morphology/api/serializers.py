# prism_core/morphology/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from prism_core.common.api.serializers import VisitKeySerializer, VisitScopedModelSerializer
from prism_core.morphology.models import Morphology


class MorphologySaveSerializer(VisitKeySerializer):
    report = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)


class MorphologySerializer(VisitScopedModelSerializer):
    class Meta:
        model = Morphology
        fields = ["id", "record_number", "visit_id", "report", "locked", "created_at", "updated_at"]
        read_only_fields = fields
