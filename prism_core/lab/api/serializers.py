# prism_core/lab/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from prism_core.common.api.serializers import VisitKeySerializer, VisitScopedModelSerializer
from prism_core.lab.models import LabAcceptance, LabResults


class AcceptanceSaveSerializer(VisitKeySerializer):
    unique_lab_id = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True, default=None)
    panel_status = serializers.JSONField(required=False, default=dict)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ResultsSaveSerializer(VisitKeySerializer):
    panel_results = serializers.JSONField(required=False, default=dict)


class ExportQuerySerializer(serializers.Serializer):
    date_from = serializers.DateField()
    date_to = serializers.DateField()

    def validate(self, attrs):
        if attrs["date_from"] > attrs["date_to"]:
            raise serializers.ValidationError("'from' must not be after 'to'.")
        return attrs


class LabAcceptanceSerializer(VisitScopedModelSerializer):
    class Meta:
        model = LabAcceptance
        fields = [
            "id", "record_number", "visit_id", "lab_kind",
            "unique_lab_id", "panel_status", "notes",
            "locked", "locked_at", "locked_by",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class LabResultsSerializer(VisitScopedModelSerializer):
    class Meta:
        model = LabResults
        fields = [
            "id", "record_number", "visit_id", "lab_kind",
            "panel_results",
            "locked", "locked_at", "locked_by",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class AcceptedPairSerializer(serializers.Serializer):
    record_number = serializers.CharField(source="visit__record_number")
    visit_id = serializers.CharField(source="visit__visit_id")


class ExportRowSerializer(serializers.Serializer):
    record_number = serializers.CharField()
    visit_id = serializers.CharField()
    panels = serializers.JSONField()
    order_date = serializers.DateTimeField()
    name = serializers.CharField()
    age = serializers.IntegerField()
    sex = serializers.CharField()
    date_received = serializers.DateField()
    suspicion = serializers.CharField()
    faculty = serializers.CharField()
    jr = serializers.CharField()
    sr = serializers.CharField()
    sample = serializers.CharField()
    tlc = serializers.FloatField(allow_null=True)
    bm_quality = serializers.CharField()
    blasts = serializers.FloatField(allow_null=True)
    eos = serializers.FloatField(allow_null=True)
    plasma = serializers.FloatField(allow_null=True)
    right_imprint = serializers.CharField()
    left_imprint = serializers.CharField()
    unique_lab_id = serializers.CharField(allow_null=True)
    panel_status = serializers.JSONField(allow_null=True)
    acceptance_notes = serializers.CharField(allow_null=True)
    panel_results = serializers.JSONField(allow_null=True)
    locked = serializers.BooleanField(allow_null=True)


class LockRowSerializer(serializers.Serializer):
    lab_kind = serializers.CharField()
    locked = serializers.BooleanField()
    locked_at = serializers.DateTimeField(allow_null=True)
    locked_by = serializers.CharField(allow_blank=True)


class LockStatusSerializer(serializers.Serializer):
    record_number = serializers.CharField()
    visit_id = serializers.CharField()
    morphology_locked = serializers.BooleanField()
    acceptance = LockRowSerializer(many=True)
    results = LockRowSerializer(many=True)
