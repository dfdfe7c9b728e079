# prism_core/common/gates.py
"""
Workflow gates: each stage may only be written once the stage before it exists.

    registration -> morphology | order | acceptance -> results
"""
from __future__ import annotations

from prism_core.common.errors import PrerequisiteMissing

STAGE_VISIT = "visit"
STAGE_ACCEPTANCE = "acceptance"


def require_visit(record_number: str, visit_id: str):
    """Return the registered visit or fail with missing_stage=visit."""
    from prism_core.visits.selectors import find_visit

    visit = find_visit(record_number, visit_id)
    if visit is None:
        raise PrerequisiteMissing(
            "Patient visit not found. Complete registration first.",
            missing_stage=STAGE_VISIT,
        )
    return visit


def require_acceptance(visit, lab_kind: str):
    """Return the lab's acceptance row for the visit or fail with missing_stage=acceptance."""
    from prism_core.lab.models import LabAcceptance

    acceptance = LabAcceptance.objects.filter(visit=visit, lab_kind=lab_kind).first()
    if acceptance is None:
        raise PrerequisiteMissing(
            "Lab acceptance must be saved before entering results.",
            missing_stage=STAGE_ACCEPTANCE,
        )
    return acceptance
