# prism_core/conftest.py
import datetime

import pytest
from rest_framework.test import APIClient

from prism_core.iam.identity import RoleIdentity
from prism_core.visits.models import Visit

RECORD_NUMBER = "000000000001"
VISIT_ID = "A_100_2026"


def registration_payload(**overrides):
    """A complete, valid registration body."""
    payload = {
        "record_number": RECORD_NUMBER,
        "visit_id": VISIT_ID,
        "date_received": "2026-01-10",
        "name": "Test Patient",
        "age": 42,
        "sex": "M",
        "faculty": "Dr Faculty",
        "jr": "Dr Junior",
        "sr": "Dr Senior",
        "sample": "BM aspirate",
        "tlc": 12.5,
        "bm_quality": "Adequate",
        "blasts": 30,
        "eos": 2,
        "plasma": 1.5,
        "right_imprint": "Hypercellular",
        "left_imprint": "",
        "suspicion": "AML",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def api_client_for(db):
    """
    Factory: APIClient authenticated as a role.

    force_authenticate bypasses the JWT authentication class; tests that
    exercise the token flow use a real login instead.
    """
    def _make(role: str) -> APIClient:
        c = APIClient()
        c.force_authenticate(user=RoleIdentity(role=role))
        return c

    return _make


@pytest.fixture
def resident_client(api_client_for):
    return api_client_for("resident")


@pytest.fixture
def admin_client(api_client_for):
    return api_client_for("admin")


@pytest.fixture
def fish_client(api_client_for):
    return api_client_for("fish")


@pytest.fixture
def resident():
    return RoleIdentity(role="resident")


@pytest.fixture
def admin():
    return RoleIdentity(role="admin")


@pytest.fixture
def fish():
    return RoleIdentity(role="fish")


@pytest.fixture
def visit(db):
    return Visit.objects.create(
        record_number=RECORD_NUMBER,
        visit_id=VISIT_ID,
        date_received=datetime.date(2026, 1, 10),
        name="Test Patient",
        age=42,
        sex="M",
        faculty="Dr Faculty",
        sample="BM aspirate",
    )


@pytest.fixture
def make_visit(db):
    def _make(record_number=RECORD_NUMBER, visit_id=VISIT_ID, date_received=datetime.date(2026, 1, 10), **extra):
        values = {
            "name": "Test Patient",
            "age": 42,
            "sex": "M",
            "faculty": "Dr Faculty",
            "sample": "BM aspirate",
        }
        values.update(extra)
        return Visit.objects.create(
            record_number=record_number,
            visit_id=visit_id,
            date_received=date_received,
            **values,
        )

    return _make
