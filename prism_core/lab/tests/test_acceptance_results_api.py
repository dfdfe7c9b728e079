import datetime

import pytest

from prism_core.audit.models import AuditEntry, UnlockEvent
from prism_core.lab.models import LabAcceptance, LabResults
from prism_core.tests.helpers import error_of, visit_key

pytestmark = pytest.mark.django_db

ACCEPT = "/api/v1/acceptance/{lab}/"
RESULTS = "/api/v1/results/{lab}/"


def _accept(client, visit, lab="fish", **body):
    return client.post(ACCEPT.format(lab=lab), visit_key(visit, **body), format="json")


def _results(client, visit, lab="fish", **body):
    return client.post(RESULTS.format(lab=lab), visit_key(visit, **body), format="json")


def test_acceptance_first_save_locks(fish_client, visit):
    res = _accept(fish_client, visit, unique_lab_id="F-1", panel_status={"MDS": "received"})
    assert res.status_code == 201, res.json()
    body = res.json()
    assert body["locked"] is True
    assert body["locked_by"] == "fish"
    assert body["panel_status"] == {"MDS": "received"}


def test_acceptance_second_save_is_423(fish_client, visit):
    _accept(fish_client, visit, notes="first")
    res = _accept(fish_client, visit, notes="second")
    assert res.status_code == 423
    assert error_of(res)["code"] == "locked"
    assert LabAcceptance.objects.get().notes == "first"


def test_acceptance_needs_visit(fish_client):
    res = fish_client.post(
        ACCEPT.format(lab="fish"), {"record_number": "000000000001", "visit_id": "A_1_2026"}, format="json"
    )
    assert res.status_code == 422
    assert error_of(res)["details"]["missing_stage"] == "visit"


def test_results_before_acceptance_is_prerequisite_missing(fish_client, visit):
    res = _results(fish_client, visit, panel_results={"MDS": "normal"})
    assert res.status_code == 422
    err = error_of(res)
    assert err["code"] == "prerequisite_missing"
    assert err["details"] == {"missing_stage": "acceptance"}
    assert not LabResults.objects.exists()


def test_results_after_acceptance_lock(fish_client, visit):
    _accept(fish_client, visit)
    res = _results(fish_client, visit, panel_results={"MDS": "del(5q)"})
    assert res.status_code == 201
    assert res.json()["locked"] is True

    again = _results(fish_client, visit, panel_results={"MDS": "changed"})
    assert again.status_code == 423
    assert LabResults.objects.get().panel_results == {"MDS": "del(5q)"}


def test_lab_scope_isolation(fish_client, api_client_for, visit):
    api_client_for("fcm").post(ACCEPT.format(lab="fcm"), visit_key(visit), format="json")

    res = _results(fish_client, visit, lab="fcm", panel_results={})
    assert res.status_code == 403
    err = error_of(res)
    assert err["code"] == "scope_violation"
    assert err["details"] == {"own_lab": "fish", "lab_kind": "fcm"}

    assert _accept(fish_client, visit, lab="fcm").status_code == 403


def test_scope_checked_before_visit_exists(fish_client):
    res = fish_client.post(
        ACCEPT.format(lab="fcm"), {"record_number": "000000000001", "visit_id": "A_1_2026"}, format="json"
    )
    assert res.status_code == 403
    assert error_of(res)["code"] == "scope_violation"


def test_admin_writes_any_lab(admin_client, visit):
    assert _accept(admin_client, visit, lab="ngsh9").status_code == 201


@pytest.mark.parametrize("role", ["resident", "consultant"])
def test_non_lab_roles_cannot_accept(api_client_for, role, visit):
    res = _accept(api_client_for(role), visit)
    assert res.status_code == 403
    assert error_of(res)["code"] == "permission_denied"


def test_duplicate_accession_names_first_record_number(make_visit, fish_client):
    first = make_visit(record_number="000000000001", visit_id="A_100_2026")
    second = make_visit(record_number="000000000002", visit_id="A_100_2026")

    assert _accept(fish_client, first, unique_lab_id="X1").status_code == 201
    res = _accept(fish_client, second, unique_lab_id="X1")

    assert res.status_code == 409
    err = error_of(res)
    assert err["code"] == "conflict"
    assert "000000000001" in err["message"]
    assert err["details"]["conflicting_record_number"] == "000000000001"
    assert not LabAcceptance.objects.filter(visit=second).exists()


def test_accession_unique_only_within_lab(make_visit, admin_client):
    first = make_visit(record_number="000000000001")
    second = make_visit(record_number="000000000002")

    assert _accept(admin_client, first, lab="fish", unique_lab_id="X1").status_code == 201
    assert _accept(admin_client, second, lab="fcm", unique_lab_id="X1").status_code == 201


def test_accession_resave_by_same_visit_is_not_a_conflict(admin_client, visit):
    _accept(admin_client, visit, unique_lab_id="X1", notes="a")
    res = _accept(admin_client, visit, unique_lab_id="X1", notes="b")
    assert res.status_code == 200


def test_blank_accessions_never_collide(make_visit, fish_client):
    first = make_visit(record_number="000000000001")
    second = make_visit(record_number="000000000002")
    assert _accept(fish_client, first, unique_lab_id="").status_code == 201
    assert _accept(fish_client, second, unique_lab_id="  ").status_code == 201
    assert list(LabAcceptance.objects.values_list("unique_lab_id", flat=True)) == [None, None]


def test_lock_check_precedes_duplicate_check(make_visit, fish_client):
    first = make_visit(record_number="000000000001")
    second = make_visit(record_number="000000000002")
    _accept(fish_client, first, unique_lab_id="X1")
    _accept(fish_client, second, unique_lab_id="X2")

    res = _accept(fish_client, second, unique_lab_id="X1")
    assert res.status_code == 423


def test_acceptance_unlock_flow(fish_client, admin_client, visit):
    _accept(fish_client, visit, notes="first")

    res = admin_client.post(ACCEPT.format(lab="fish") + "unlock/", visit_key(visit, reason="rework"), format="json")
    assert res.status_code == 200
    assert res.json()["detail"] == f"FISH acceptance unlocked for {visit.visit_id}"

    event = UnlockEvent.objects.get()
    assert (event.target_table, event.lab_kind, event.unlocked_by) == ("lab_acceptance", "fish", "admin")

    assert _accept(fish_client, visit, notes="second").status_code == 200
    assert _accept(fish_client, visit, notes="third").status_code == 423
    assert LabAcceptance.objects.get().notes == "second"


def test_results_unlock_missing_row_is_404(admin_client, visit):
    res = admin_client.post(RESULTS.format(lab="fish") + "unlock/", visit_key(visit), format="json")
    assert res.status_code == 404
    assert not UnlockEvent.objects.exists()


def test_results_unlock_requires_admin(fish_client, visit):
    _accept(fish_client, visit)
    _results(fish_client, visit)
    res = fish_client.post(RESULTS.format(lab="fish") + "unlock/", visit_key(visit), format="json")
    assert res.status_code == 403
    assert LabResults.objects.get().locked is True


def test_writes_and_unlocks_are_audited(fish_client, admin_client, visit):
    _accept(fish_client, visit, unique_lab_id="F-9")
    _results(fish_client, visit, panel_results={"MDS": "ok"})
    admin_client.post(RESULTS.format(lab="fish") + "unlock/", visit_key(visit, reason="r"), format="json")

    actions = list(AuditEntry.objects.order_by("id").values_list("action", "lab_kind"))
    assert actions == [("save_acceptance", "fish"), ("save_results", "fish"), ("unlock_results", "fish")]

    unlock_entry = AuditEntry.objects.get(action="unlock_results")
    assert unlock_entry.new_data == {"reason": "r"}


def test_rejected_writes_are_not_audited(fish_client, visit):
    _accept(fish_client, visit)
    _accept(fish_client, visit)
    assert AuditEntry.objects.filter(action="save_acceptance").count() == 1


def test_export_merges_stages_within_date_range(resident_client, fish_client, admin_client, make_visit):
    visit = make_visit(name="Exported")
    resident_client.post("/api/v1/orders/fish/", visit_key(visit, panels=["MDS"]), format="json")
    _accept(fish_client, visit, unique_lab_id="F-1")
    _results(fish_client, visit, panel_results={"MDS": "normal"})

    today = datetime.date.today()
    res = admin_client.get(
        RESULTS.format(lab="fish"),
        {"from": (today - datetime.timedelta(days=1)).isoformat(), "to": (today + datetime.timedelta(days=1)).isoformat()},
    )
    assert res.status_code == 200, res.json()
    rows = res.json()
    assert len(rows) == 1
    row = rows[0]
    assert row["name"] == "Exported"
    assert row["panels"] == ["MDS"]
    assert row["unique_lab_id"] == "F-1"
    assert row["panel_results"] == {"MDS": "normal"}
    assert row["locked"] is True


def test_export_excludes_orders_outside_range(resident_client, admin_client, visit):
    resident_client.post("/api/v1/orders/fish/", visit_key(visit, panels=["MDS"]), format="json")
    res = admin_client.get(RESULTS.format(lab="fish"), {"from": "2000-01-01", "to": "2000-01-31"})
    assert res.status_code == 200
    assert res.json() == []


def test_export_requires_both_dates(admin_client):
    res = admin_client.get(RESULTS.format(lab="fish"), {"from": "2026-01-01"})
    assert res.status_code == 400


def test_export_is_admin_only(fish_client):
    res = fish_client.get(RESULTS.format(lab="fish"), {"from": "2026-01-01", "to": "2026-01-31"})
    assert res.status_code == 403
