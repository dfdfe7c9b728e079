# prism_core/morphology/services.py
from __future__ import annotations

from prism_core.audit.models import UnlockEvent
from prism_core.audit.services import AuditService, snapshot
from prism_core.common.gates import require_visit
from prism_core.lab.locking import SaveOutcome, UnlockOutcome, save_locked, unlock
from prism_core.morphology.models import Morphology
from prism_core.visits.selectors import resolve_visit


class MorphologyService:
    @staticmethod
    def save_report(
        *,
        record_number: str,
        visit_id: str,
        report: str,
        actor,
        origin: str | None = None,
    ) -> SaveOutcome:
        visit = require_visit(record_number, visit_id)
        outcome = save_locked(
            Morphology,
            key={"visit": visit},
            values={"report": report or ""},
            actor=actor,
            tracks_provenance=False,
        )
        AuditService.log(
            role=actor.role,
            action="save_morph",
            record_number=record_number,
            visit_id=visit_id,
            old_data=outcome.previous,
            new_data=snapshot(outcome.record),
            origin=origin,
        )
        return outcome

    @staticmethod
    def unlock_report(
        *,
        record_number: str,
        visit_id: str,
        actor,
        reason: str = "",
        origin: str | None = None,
    ) -> UnlockOutcome:
        visit = resolve_visit(record_number, visit_id)
        outcome = unlock(
            Morphology,
            key={"visit": visit},
            actor=actor,
            target_table=UnlockEvent.TARGET_MORPHOLOGY,
            reason=reason,
        )
        AuditService.log(
            role=actor.role,
            action="unlock_morph",
            record_number=record_number,
            visit_id=visit_id,
            old_data=outcome.previous,
            new_data={"reason": reason or ""},
            origin=origin,
        )
        return outcome
