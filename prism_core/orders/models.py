# prism_core/orders/models.py
from django.db import models

from prism_core.common.labs import LAB_CHOICES
from prism_core.common.models import TimeStampedModel
from prism_core.visits.models import Visit


class LabOrder(TimeStampedModel):
    """
    Panels requested from one lab for one visit. Freely editable, never locked.
    """
    visit = models.ForeignKey(Visit, on_delete=models.PROTECT, related_name="lab_orders")
    lab_kind = models.CharField(max_length=16, choices=LAB_CHOICES)
    panels = models.JSONField(default=list, blank=True)
    payment = models.CharField(max_length=32, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders_lab_order"
        constraints = [
            models.UniqueConstraint(fields=["visit", "lab_kind"], name="uq_lab_order_visit_lab"),
        ]
        indexes = [
            models.Index(fields=["lab_kind", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.lab_kind} order {self.visit}"
