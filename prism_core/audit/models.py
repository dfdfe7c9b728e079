# prism_core/audit/models.py
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from prism_core.common.labs import LAB_CHOICES
from prism_core.common.models import AppendOnlyModel


class AuditEntry(AppendOnlyModel):
    """
    Immutable record of one accepted write or unlock.
    """
    role = models.CharField(max_length=32)
    action = models.CharField(max_length=64, db_index=True)  # e.g. "save_acceptance"
    record_number = models.CharField(max_length=12, db_index=True)
    visit_id = models.CharField(max_length=32, blank=True, default="")
    lab_kind = models.CharField(max_length=16, choices=LAB_CHOICES, null=True, blank=True)

    old_data = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    new_data = models.JSONField(null=True, blank=True, encoder=DjangoJSONEncoder)
    origin = models.GenericIPAddressField(null=True, blank=True)

    class Meta:
        db_table = "audit_entry"
        indexes = [
            models.Index(fields=["record_number", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.record_number}/{self.visit_id} by {self.role}"


class UnlockEvent(AppendOnlyModel):
    """
    Immutable record of an administrator unlocking a locked row.
    """
    TARGET_ACCEPTANCE = "lab_acceptance"
    TARGET_RESULTS = "lab_results"
    TARGET_MORPHOLOGY = "morphology"
    TARGET_CHOICES = [
        (TARGET_ACCEPTANCE, "Lab acceptance"),
        (TARGET_RESULTS, "Lab results"),
        (TARGET_MORPHOLOGY, "Morphology"),
    ]

    record_number = models.CharField(max_length=12, db_index=True)
    visit_id = models.CharField(max_length=32)
    target_table = models.CharField(max_length=32, choices=TARGET_CHOICES)
    lab_kind = models.CharField(max_length=16, choices=LAB_CHOICES, null=True, blank=True)
    reason = models.TextField(blank=True, default="")
    unlocked_by = models.CharField(max_length=32)

    class Meta:
        db_table = "audit_unlock_event"
        indexes = [
            models.Index(fields=["target_table", "lab_kind"]),
        ]

    def __str__(self) -> str:
        return f"unlock {self.target_table} {self.record_number}/{self.visit_id}"
