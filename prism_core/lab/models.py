# prism_core/lab/models.py
from django.db import models
from django.db.models import Q

from prism_core.common.labs import LAB_CHOICES
from prism_core.common.models import LockProvenanceModel
from prism_core.visits.models import Visit


class LabAcceptance(LockProvenanceModel):
    """
    A lab's receipt of the sample for a visit. Locks on first save.
    """
    visit = models.ForeignKey(Visit, on_delete=models.PROTECT, related_name="lab_acceptances")
    lab_kind = models.CharField(max_length=16, choices=LAB_CHOICES)

    # Lab accession id; NULL when not assigned so several blanks never collide.
    unique_lab_id = models.CharField(max_length=64, null=True, blank=True)
    panel_status = models.JSONField(default=dict, blank=True)
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "lab_acceptance"
        constraints = [
            models.UniqueConstraint(fields=["visit", "lab_kind"], name="uq_lab_acceptance_visit_lab"),
            models.UniqueConstraint(
                fields=["lab_kind", "unique_lab_id"],
                condition=Q(unique_lab_id__isnull=False),
                name="uq_lab_acceptance_accession",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.lab_kind} acceptance {self.visit}"


class LabResults(LockProvenanceModel):
    """
    A lab's results for a visit. Requires acceptance; locks on first save.
    """
    visit = models.ForeignKey(Visit, on_delete=models.PROTECT, related_name="lab_results")
    lab_kind = models.CharField(max_length=16, choices=LAB_CHOICES)
    panel_results = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "lab_results"
        verbose_name_plural = "lab results"
        constraints = [
            models.UniqueConstraint(fields=["visit", "lab_kind"], name="uq_lab_results_visit_lab"),
        ]

    def __str__(self) -> str:
        return f"{self.lab_kind} results {self.visit}"
