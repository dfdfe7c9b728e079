# prism_core/audit/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from prism_core.audit.models import AuditEntry, UnlockEvent


class AuditEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = AuditEntry
        fields = [
            "id", "role", "action", "record_number", "visit_id", "lab_kind",
            "old_data", "new_data", "origin", "created_at",
        ]
        read_only_fields = fields


class UnlockEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = UnlockEvent
        fields = [
            "id", "record_number", "visit_id", "target_table", "lab_kind",
            "reason", "unlocked_by", "created_at",
        ]
        read_only_fields = fields


class AuditHistorySerializer(serializers.Serializer):
    record_number = serializers.CharField()
    entries = AuditEntrySerializer(many=True)


class UnlockLogSerializer(serializers.Serializer):
    entries = UnlockEventSerializer(many=True)
