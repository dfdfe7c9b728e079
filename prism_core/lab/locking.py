# prism_core/lab/locking.py
"""
Record lock state machine shared by acceptance, results and morphology.

    (none) --save--> LOCKED
    UNLOCKED --save--> LOCKED            content replaced, provenance refreshed
    LOCKED --save (non-admin)--> 423     content unchanged
    LOCKED --save (admin)--> LOCKED      content replaced, provenance kept
    LOCKED --unlock (admin)--> UNLOCKED  one UnlockEvent written

The lock check and the write happen in one transaction while holding the
row lock, so two writers cannot both observe the row as unlocked.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from prism_core.audit.models import UnlockEvent
from prism_core.audit.services import snapshot
from prism_core.common.errors import RecordLocked
from prism_core.iam.policy import ADMIN, authorize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveOutcome:
    record: Any
    created: bool
    previous: Optional[Dict[str, Any]]


@dataclass(frozen=True)
class UnlockOutcome:
    record: Any
    event: UnlockEvent
    previous: Optional[Dict[str, Any]]


def _provenance(actor, tracks_provenance: bool) -> dict:
    if not tracks_provenance:
        return {}
    return {"locked_at": timezone.now(), "locked_by": actor.role}


def save_locked(
    model,
    *,
    key: Dict[str, Any],
    values: Dict[str, Any],
    actor,
    tracks_provenance: bool = True,
    precheck: Callable[[], None] | None = None,
) -> SaveOutcome:
    """
    Insert or overwrite the row identified by `key`, leaving it locked.

    `precheck` runs after the lock check and before the write, inside the
    same transaction; it may raise to abort the save.
    """
    with transaction.atomic():
        row = model.objects.select_for_update().filter(**key).first()

        if row is None:
            if precheck is not None:
                precheck()
            try:
                with transaction.atomic():
                    created = model.objects.create(
                        **key, **values, locked=True, **_provenance(actor, tracks_provenance)
                    )
                return SaveOutcome(record=created, created=True, previous=None)
            except IntegrityError:
                # Lost the insert race on the key: continue against the winner's row.
                row = model.objects.select_for_update().filter(**key).first()
                if row is None:
                    raise
                logger.info("Concurrent first save on %s %s; retrying as update.", model.__name__, key)

        if row.locked and not actor.is_admin:
            raise RecordLocked()

        if precheck is not None:
            precheck()

        previous = snapshot(row)
        was_locked = row.locked

        for name, value in values.items():
            setattr(row, name, value)
        row.locked = True
        if not was_locked:
            for name, value in _provenance(actor, tracks_provenance).items():
                setattr(row, name, value)
        row.save()

    return SaveOutcome(record=row, created=False, previous=previous)


def unlock(
    model,
    *,
    key: Dict[str, Any],
    actor,
    target_table: str,
    lab_kind: str | None = None,
    reason: str = "",
) -> UnlockOutcome:
    """
    Clear the lock flag and record who did it. Administrators only.
    """
    authorize(actor, {ADMIN})

    with transaction.atomic():
        row = model.objects.select_for_update().filter(**key).first()
        if row is None:
            raise NotFound("Record not found.")

        previous = snapshot(row)
        row.locked = False
        row.save(update_fields=["locked", "updated_at"])

        visit = row.visit
        event = UnlockEvent.objects.create(
            record_number=visit.record_number,
            visit_id=visit.visit_id,
            target_table=target_table,
            lab_kind=lab_kind,
            reason=reason or "",
            unlocked_by=actor.role,
        )

    logger.info("%s unlocked %s for %s", actor.role, target_table, visit)
    return UnlockOutcome(record=row, event=event, previous=previous)
