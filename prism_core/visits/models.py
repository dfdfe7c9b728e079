# prism_core/visits/models.py
from django.db import models

from prism_core.common.models import TimeStampedModel


class Visit(TimeStampedModel):
    """
    One registration of a patient (record number) for one bone-marrow sample
    (visit id). Every downstream stage hangs off a visit. Never deleted.
    """
    record_number = models.CharField(max_length=12, db_index=True)
    visit_id = models.CharField(max_length=32)

    date_received = models.DateField()
    name = models.CharField(max_length=255)
    age = models.PositiveIntegerField()
    sex = models.CharField(max_length=16)
    faculty = models.CharField(max_length=128)
    jr = models.CharField(max_length=128, blank=True, default="")
    sr = models.CharField(max_length=128, blank=True, default="")
    sample = models.CharField(max_length=64)

    tlc = models.FloatField(null=True, blank=True)
    bm_quality = models.CharField(max_length=64, blank=True, default="")
    blasts = models.FloatField(null=True, blank=True)
    eos = models.FloatField(null=True, blank=True)
    plasma = models.FloatField(null=True, blank=True)

    right_imprint = models.TextField(blank=True, default="")
    left_imprint = models.TextField(blank=True, default="")
    suspicion = models.TextField(blank=True, default="")

    class Meta:
        db_table = "visits_visit"
        constraints = [
            models.UniqueConstraint(
                fields=["record_number", "visit_id"],
                name="uq_visit_record_visit_id",
            ),
        ]
        indexes = [
            models.Index(fields=["record_number", "date_received"]),
            models.Index(fields=["name"]),
        ]

    def __str__(self) -> str:
        return f"{self.record_number}/{self.visit_id}"
