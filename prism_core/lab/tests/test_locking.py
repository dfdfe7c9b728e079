import pytest
from rest_framework.exceptions import NotFound, PermissionDenied

from prism_core.audit.models import UnlockEvent
from prism_core.common.errors import RecordLocked
from prism_core.lab.locking import save_locked, unlock
from prism_core.lab.models import LabAcceptance

pytestmark = pytest.mark.django_db


def _save(visit, actor, notes, **kw):
    return save_locked(
        LabAcceptance,
        key={"visit": visit, "lab_kind": "fish"},
        values={"notes": notes},
        actor=actor,
        **kw,
    )


def test_insert_locks_with_provenance(visit, fish):
    outcome = _save(visit, fish, "a")
    assert outcome.created is True
    assert outcome.previous is None

    row = outcome.record
    assert row.locked is True
    assert row.locked_by == "fish"
    assert row.locked_at is not None


def test_locked_row_rejects_non_admin_and_keeps_content(visit, fish):
    _save(visit, fish, "a")
    with pytest.raises(RecordLocked):
        _save(visit, fish, "b")
    assert LabAcceptance.objects.get().notes == "a"


def test_admin_overwrite_preserves_provenance(visit, fish, admin):
    first = _save(visit, fish, "a").record

    outcome = _save(visit, admin, "b")
    row = outcome.record
    assert outcome.created is False
    assert outcome.previous["notes"] == "a"
    assert row.notes == "b"
    assert row.locked is True
    assert row.locked_by == "fish"
    assert row.locked_at == first.locked_at


def test_save_after_unlock_refreshes_provenance(visit, fish, admin):
    _save(visit, admin, "a")
    unlock(LabAcceptance, key={"visit": visit, "lab_kind": "fish"}, actor=admin, target_table="lab_acceptance")

    row = _save(visit, fish, "b").record
    assert row.locked is True
    assert row.locked_by == "fish"

    with pytest.raises(RecordLocked):
        _save(visit, fish, "c")


def test_precheck_runs_after_lock_check(visit, fish):
    _save(visit, fish, "a")
    calls = []

    with pytest.raises(RecordLocked):
        _save(visit, fish, "b", precheck=lambda: calls.append(1))
    assert calls == []


def test_precheck_can_abort_write(visit, fish):
    def reject():
        raise ValueError("no")

    with pytest.raises(ValueError):
        _save(visit, fish, "a", precheck=reject)
    assert not LabAcceptance.objects.exists()


def test_unlock_writes_exactly_one_event(visit, fish, admin):
    _save(visit, fish, "a")
    outcome = unlock(
        LabAcceptance,
        key={"visit": visit, "lab_kind": "fish"},
        actor=admin,
        target_table="lab_acceptance",
        lab_kind="fish",
        reason="wrong panel",
    )

    assert outcome.record.locked is False
    assert LabAcceptance.objects.get().locked is False
    event = UnlockEvent.objects.get()
    assert event.id == outcome.event.id
    assert (event.record_number, event.visit_id) == (visit.record_number, visit.visit_id)
    assert event.reason == "wrong panel"


def test_unlock_missing_row_is_not_found(visit, admin):
    with pytest.raises(NotFound):
        unlock(LabAcceptance, key={"visit": visit, "lab_kind": "fish"}, actor=admin, target_table="lab_acceptance")
    assert not UnlockEvent.objects.exists()


def test_unlock_is_admin_only(visit, fish):
    _save(visit, fish, "a")
    with pytest.raises(PermissionDenied):
        unlock(LabAcceptance, key={"visit": visit, "lab_kind": "fish"}, actor=fish, target_table="lab_acceptance")
    assert LabAcceptance.objects.get().locked is True
