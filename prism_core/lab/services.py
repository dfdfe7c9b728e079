# prism_core/lab/services.py
from __future__ import annotations

from typing import Any

from django.db import IntegrityError

from prism_core.audit.models import UnlockEvent
from prism_core.audit.services import AuditService, snapshot
from prism_core.common.errors import ConflictError
from prism_core.common.gates import require_acceptance, require_visit
from prism_core.common.labs import lab_label
from prism_core.iam.policy import assert_lab_scope
from prism_core.lab.locking import SaveOutcome, UnlockOutcome, save_locked, unlock
from prism_core.lab.models import LabAcceptance, LabResults
from prism_core.visits.selectors import resolve_visit


def _accession(value: Any) -> str | None:
    text = "" if value is None else str(value).strip()
    return text or None


def find_accession_clash(*, lab_kind: str, unique_lab_id: str | None, visit) -> LabAcceptance | None:
    """
    Another visit's acceptance in the same lab already holding this accession id.
    The visit being saved never clashes with itself.
    """
    if not unique_lab_id:
        return None
    return (
        LabAcceptance.objects.filter(lab_kind=lab_kind, unique_lab_id=unique_lab_id)
        .exclude(visit=visit)
        .select_related("visit")
        .first()
    )


def _conflict(lab_kind: str, unique_lab_id: str, clash: LabAcceptance | None) -> ConflictError:
    if clash is None:
        return ConflictError(
            f"Unique Lab ID '{unique_lab_id}' already exists for {lab_label(lab_kind)}.",
            details={"conflicting_record_number": None},
        )
    return ConflictError(
        f"Unique Lab ID '{unique_lab_id}' already exists for {lab_label(lab_kind)} "
        f"(record number: {clash.visit.record_number}).",
        details={
            "conflicting_record_number": clash.visit.record_number,
            "conflicting_visit_id": clash.visit.visit_id,
        },
    )


class LabService:
    """
    Acceptance and results writes for a lab.
    - scope: lab roles only write their own lab
    - gates: acceptance needs the visit, results need the acceptance
    - locking: first save locks, admin overrides and unlocks
    """

    # ----------------------------
    # Acceptance
    # ----------------------------
    @staticmethod
    def save_acceptance(
        *,
        lab_kind: str,
        record_number: str,
        visit_id: str,
        actor,
        unique_lab_id: str | None = None,
        panel_status: dict | None = None,
        notes: str = "",
        origin: str | None = None,
    ) -> SaveOutcome:
        assert_lab_scope(actor, lab_kind)
        visit = require_visit(record_number, visit_id)
        accession = _accession(unique_lab_id)

        def reject_duplicate_accession() -> None:
            clash = find_accession_clash(lab_kind=lab_kind, unique_lab_id=accession, visit=visit)
            if clash is not None:
                raise _conflict(lab_kind, accession, clash)

        try:
            outcome = save_locked(
                LabAcceptance,
                key={"visit": visit, "lab_kind": lab_kind},
                values={
                    "unique_lab_id": accession,
                    "panel_status": panel_status or {},
                    "notes": notes or "",
                },
                actor=actor,
                precheck=reject_duplicate_accession,
            )
        except IntegrityError:
            # Accession constraint tripped by a concurrent save.
            if accession is None:
                raise
            raise _conflict(
                lab_kind,
                accession,
                find_accession_clash(lab_kind=lab_kind, unique_lab_id=accession, visit=visit),
            )

        AuditService.log(
            role=actor.role,
            action="save_acceptance",
            record_number=record_number,
            visit_id=visit_id,
            lab_kind=lab_kind,
            old_data=outcome.previous,
            new_data=snapshot(outcome.record),
            origin=origin,
        )
        return outcome

    @staticmethod
    def unlock_acceptance(
        *,
        lab_kind: str,
        record_number: str,
        visit_id: str,
        actor,
        reason: str = "",
        origin: str | None = None,
    ) -> UnlockOutcome:
        visit = resolve_visit(record_number, visit_id)
        outcome = unlock(
            LabAcceptance,
            key={"visit": visit, "lab_kind": lab_kind},
            actor=actor,
            target_table=UnlockEvent.TARGET_ACCEPTANCE,
            lab_kind=lab_kind,
            reason=reason,
        )
        AuditService.log(
            role=actor.role,
            action="unlock_acceptance",
            record_number=record_number,
            visit_id=visit_id,
            lab_kind=lab_kind,
            old_data=outcome.previous,
            new_data={"reason": reason or ""},
            origin=origin,
        )
        return outcome

    # ----------------------------
    # Results
    # ----------------------------
    @staticmethod
    def save_results(
        *,
        lab_kind: str,
        record_number: str,
        visit_id: str,
        actor,
        panel_results: dict | None = None,
        origin: str | None = None,
    ) -> SaveOutcome:
        assert_lab_scope(actor, lab_kind)
        visit = require_visit(record_number, visit_id)
        require_acceptance(visit, lab_kind)

        outcome = save_locked(
            LabResults,
            key={"visit": visit, "lab_kind": lab_kind},
            values={"panel_results": panel_results or {}},
            actor=actor,
        )

        AuditService.log(
            role=actor.role,
            action="save_results",
            record_number=record_number,
            visit_id=visit_id,
            lab_kind=lab_kind,
            old_data=outcome.previous,
            new_data=snapshot(outcome.record),
            origin=origin,
        )
        return outcome

    @staticmethod
    def unlock_results(
        *,
        lab_kind: str,
        record_number: str,
        visit_id: str,
        actor,
        reason: str = "",
        origin: str | None = None,
    ) -> UnlockOutcome:
        visit = resolve_visit(record_number, visit_id)
        outcome = unlock(
            LabResults,
            key={"visit": visit, "lab_kind": lab_kind},
            actor=actor,
            target_table=UnlockEvent.TARGET_RESULTS,
            lab_kind=lab_kind,
            reason=reason,
        )
        AuditService.log(
            role=actor.role,
            action="unlock_results",
            record_number=record_number,
            visit_id=visit_id,
            lab_kind=lab_kind,
            old_data=outcome.previous,
            new_data={"reason": reason or ""},
            origin=origin,
        )
        return outcome
