# prism_core/morphology/models.py
from django.db import models

from prism_core.common.models import LockableModel
from prism_core.visits.models import Visit


class Morphology(LockableModel):
    """
    Bone-marrow morphology report for a visit. Locks on first save; only the
    flag is kept, not who locked it or when.
    """
    visit = models.OneToOneField(Visit, on_delete=models.PROTECT, related_name="morphology")
    report = models.TextField(blank=True, default="")

    class Meta:
        db_table = "morphology_report"

    def __str__(self) -> str:
        return f"Morphology {self.visit}"
