# prism_core/orders/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from prism_core.common.api.serializers import VisitKeySerializer, VisitScopedModelSerializer
from prism_core.common.labs import VALID_PAYMENT, lab_label, panels_for
from prism_core.orders.models import LabOrder


class OrderSaveSerializer(VisitKeySerializer):
    """
    Expects the target lab in context["lab_kind"] to check panel names.
    """
    panels = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    payment = serializers.ChoiceField(choices=VALID_PAYMENT, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_panels(self, value):
        lab_kind = self.context["lab_kind"]
        allowed = panels_for(lab_kind)
        unknown = [p for p in value if p not in allowed]
        if unknown:
            raise serializers.ValidationError(
                f"Unknown {lab_label(lab_kind)} panel(s): {', '.join(unknown)}"
            )
        # keep first occurrence order, drop repeats
        return list(dict.fromkeys(value))


class LabOrderSerializer(VisitScopedModelSerializer):
    class Meta:
        model = LabOrder
        fields = ["id", "record_number", "visit_id", "lab_kind", "panels", "payment", "notes", "created_at", "updated_at"]
        read_only_fields = fields


class LabOrderWithVisitSerializer(LabOrderSerializer):
    """Order row joined with the demographics a lab bench needs."""
    name = serializers.CharField(source="visit.name", read_only=True)
    age = serializers.IntegerField(source="visit.age", read_only=True)
    sex = serializers.CharField(source="visit.sex", read_only=True)
    date_received = serializers.DateField(source="visit.date_received", read_only=True)
    sample = serializers.CharField(source="visit.sample", read_only=True)
    faculty = serializers.CharField(source="visit.faculty", read_only=True)
    jr = serializers.CharField(source="visit.jr", read_only=True)
    sr = serializers.CharField(source="visit.sr", read_only=True)
    tlc = serializers.FloatField(source="visit.tlc", read_only=True)
    bm_quality = serializers.CharField(source="visit.bm_quality", read_only=True)
    blasts = serializers.FloatField(source="visit.blasts", read_only=True)
    eos = serializers.FloatField(source="visit.eos", read_only=True)
    plasma = serializers.FloatField(source="visit.plasma", read_only=True)
    right_imprint = serializers.CharField(source="visit.right_imprint", read_only=True)
    left_imprint = serializers.CharField(source="visit.left_imprint", read_only=True)
    suspicion = serializers.CharField(source="visit.suspicion", read_only=True)

    class Meta(LabOrderSerializer.Meta):
        fields = LabOrderSerializer.Meta.fields + [
            "name", "age", "sex", "date_received", "sample", "faculty", "jr", "sr",
            "tlc", "bm_quality", "blasts", "eos", "plasma",
            "right_imprint", "left_imprint", "suspicion",
        ]
        read_only_fields = fields
