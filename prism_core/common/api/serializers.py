# prism_core/common/api/serializers.py
from __future__ import annotations

from rest_framework import serializers


class VisitKeySerializer(serializers.Serializer):
    """Identifies the visit a stage write targets."""
    record_number = serializers.CharField(max_length=12)
    visit_id = serializers.CharField(max_length=32)


class UnlockRequestSerializer(VisitKeySerializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class UnlockResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    unlock_event_id = serializers.IntegerField()


class VisitScopedModelSerializer(serializers.ModelSerializer):
    """Exposes the visit key of a child record instead of the internal FK."""
    record_number = serializers.CharField(source="visit.record_number", read_only=True)
    visit_id = serializers.CharField(source="visit.visit_id", read_only=True)
