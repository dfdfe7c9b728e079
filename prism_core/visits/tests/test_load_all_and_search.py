import datetime

import pytest

from prism_core.lab.models import LabAcceptance, LabResults
from prism_core.morphology.models import Morphology
from prism_core.orders.models import LabOrder
from prism_core.tests.helpers import error_of
from prism_core.visits.selectors import load_all, search_visits

pytestmark = pytest.mark.django_db


def test_active_visit_is_latest_date_received(make_visit):
    make_visit(visit_id="A_2_2026", date_received=datetime.date(2026, 5, 1))
    make_visit(visit_id="A_1_2026", date_received=datetime.date(2026, 1, 1))

    bundle = load_all("000000000001")
    assert [v.visit_id for v in bundle.visits] == ["A_1_2026", "A_2_2026"]
    assert bundle.active_visit_id == "A_2_2026"


def test_same_day_visits_fall_back_to_insertion_order(make_visit):
    make_visit(visit_id="A_1_2026")
    make_visit(visit_id="A_9_2026")
    assert load_all("000000000001").active_visit_id == "A_9_2026"


def test_load_all_gathers_every_stage(visit):
    Morphology.objects.create(visit=visit, report="r", locked=True)
    LabOrder.objects.create(visit=visit, lab_kind="fish", panels=["MDS"])
    LabAcceptance.objects.create(visit=visit, lab_kind="fish", locked=True)
    LabResults.objects.create(visit=visit, lab_kind="fish", locked=True)

    bundle = load_all(visit.record_number)
    assert len(bundle.morphology) == 1
    assert len(bundle.orders) == 1
    assert len(bundle.acceptance) == 1
    assert len(bundle.results) == 1


def test_load_all_other_record_numbers_are_excluded(visit, make_visit):
    other = make_visit(record_number="000000000002")
    LabOrder.objects.create(visit=other, lab_kind="fish")
    assert load_all(visit.record_number).orders == []


def test_load_all_api_unknown_record_is_404(resident_client):
    res = resident_client.get("/api/v1/visits/000000000099/")
    assert res.status_code == 404
    assert error_of(res)["code"] == "not_found"


def test_load_all_api_malformed_record_is_400(resident_client):
    res = resident_client.get("/api/v1/visits/12345/")
    assert res.status_code == 400


def test_load_all_api_open_to_consultant_not_lab_roles(api_client_for, visit):
    assert api_client_for("consultant").get(f"/api/v1/visits/{visit.record_number}/").status_code == 200
    assert api_client_for("fish").get(f"/api/v1/visits/{visit.record_number}/").status_code == 403


def test_search_returns_latest_visit_per_record_number(make_visit):
    make_visit(visit_id="A_1_2026", date_received=datetime.date(2026, 1, 1), name="Asha Rani")
    make_visit(visit_id="A_2_2026", date_received=datetime.date(2026, 2, 1), name="Asha Rani")
    make_visit(record_number="000000000002", visit_id="P_5_2026", name="Other")

    hits = search_visits("asha")
    assert [(h.record_number, h.visit_id) for h in hits] == [("000000000001", "A_2_2026")]


def test_search_matches_record_number_and_visit_id(make_visit):
    make_visit(record_number="123456789012", visit_id="P_77_2025")
    assert len(search_visits("345678")) == 1
    assert len(search_visits("p_77")) == 1


def test_search_is_bounded(make_visit, settings):
    settings.PRISM_SEARCH_LIMIT = 3
    for i in range(5):
        make_visit(record_number=f"00000000001{i}", visit_id=f"A_{i}_2026", name="Same Name")
    assert len(search_visits("same")) == 3


def test_search_query_too_short_is_400(api_client_for):
    res = api_client_for("fish").get("/api/v1/search/", {"q": " a "})
    assert res.status_code == 400
    assert error_of(res)["code"] == "validation_error"


def test_search_api_open_to_every_role(api_client_for, visit):
    for role in ("resident", "fish", "consultant", "admin"):
        res = api_client_for(role).get("/api/v1/search/", {"q": "test"})
        assert res.status_code == 200
        assert res.json()["count"] == 1
