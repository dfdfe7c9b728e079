# prism_core/visits/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from prism_core.lab.api.serializers import LabAcceptanceSerializer, LabResultsSerializer
from prism_core.morphology.api.serializers import MorphologySerializer
from prism_core.orders.api.serializers import LabOrderSerializer
from prism_core.visits.models import Visit


class RegistrationRequestSerializer(serializers.Serializer):
    """
    Registration contract, documented for the schema. Validation itself runs
    through validators.validate_registration so every violation is reported.
    """
    record_number = serializers.CharField(help_text="Exactly 12 digits")
    visit_id = serializers.CharField(help_text="A_<seq>_<year> or P_<seq>_<year>")
    date_received = serializers.DateField()
    name = serializers.CharField()
    age = serializers.IntegerField(min_value=0)
    sex = serializers.CharField()
    faculty = serializers.CharField()
    jr = serializers.CharField(required=False, allow_blank=True)
    sr = serializers.CharField(required=False, allow_blank=True)
    sample = serializers.CharField()
    tlc = serializers.FloatField(required=False, allow_null=True)
    bm_quality = serializers.CharField(required=False, allow_blank=True)
    blasts = serializers.FloatField(required=False, allow_null=True)
    eos = serializers.FloatField(required=False, allow_null=True)
    plasma = serializers.FloatField(required=False, allow_null=True)
    right_imprint = serializers.CharField(required=False, allow_blank=True)
    left_imprint = serializers.CharField(required=False, allow_blank=True)
    suspicion = serializers.CharField(required=False, allow_blank=True)


class VisitSerializer(serializers.ModelSerializer):
    class Meta:
        model = Visit
        fields = [
            "id", "record_number", "visit_id", "date_received",
            "name", "age", "sex", "faculty", "jr", "sr", "sample",
            "tlc", "bm_quality", "blasts", "eos", "plasma",
            "right_imprint", "left_imprint", "suspicion",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class RegistrationResponseSerializer(serializers.Serializer):
    visit = VisitSerializer()
    created = serializers.BooleanField()
    is_new_visit = serializers.BooleanField(help_text="Record number already had other visits")
    existing_visit_ids = serializers.ListField(child=serializers.CharField())


class VisitBundleSerializer(serializers.Serializer):
    record_number = serializers.CharField()
    active_visit_id = serializers.CharField()
    visits = VisitSerializer(many=True)
    morphology = MorphologySerializer(many=True)
    orders = LabOrderSerializer(many=True)
    acceptance = LabAcceptanceSerializer(many=True)
    results = LabResultsSerializer(many=True)


class SearchHitSerializer(serializers.ModelSerializer):
    class Meta:
        model = Visit
        fields = ["record_number", "visit_id", "name", "date_received", "faculty", "suspicion", "age", "sex"]
        read_only_fields = fields


class SearchResponseSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    results = SearchHitSerializer(many=True)
