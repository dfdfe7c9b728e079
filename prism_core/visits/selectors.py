# prism_core/visits/selectors.py
from __future__ import annotations

from dataclasses import dataclass, field

from django.conf import settings
from django.db.models import Q
from rest_framework.exceptions import NotFound, ValidationError

from prism_core.lab.models import LabAcceptance, LabResults
from prism_core.morphology.models import Morphology
from prism_core.orders.models import LabOrder
from prism_core.visits.models import Visit
from prism_core.visits.validators import is_record_number

MIN_SEARCH_CHARS = 2


@dataclass(frozen=True)
class VisitBundle:
    """Everything recorded against one record number, across all of its visits."""
    record_number: str
    active_visit_id: str
    visits: list = field(default_factory=list)
    morphology: list = field(default_factory=list)
    orders: list = field(default_factory=list)
    acceptance: list = field(default_factory=list)
    results: list = field(default_factory=list)


def find_visit(record_number: str, visit_id: str) -> Visit | None:
    return Visit.objects.filter(record_number=record_number, visit_id=visit_id).first()


def resolve_visit(record_number: str, visit_id: str) -> Visit:
    visit = find_visit(record_number, visit_id)
    if visit is None:
        raise NotFound("Patient visit not found. Complete registration first.")
    return visit


def visits_for_record(record_number: str):
    # date_received, then insertion order: the last row is the active visit
    return Visit.objects.filter(record_number=record_number).order_by("date_received", "id")


def load_all(record_number: str) -> VisitBundle:
    """
    Gather every stage for a record number.

    The five category reads are independent queries issued one after
    another on the request's connection; none of them joins another.
    """
    if not is_record_number(record_number):
        raise ValidationError({"detail": "Record number must be exactly 12 digits."})

    visits = list(visits_for_record(record_number))
    if not visits:
        raise NotFound(f"No visits registered for record number {record_number}.")

    by_record = {"visit__record_number": record_number}
    morphology = list(Morphology.objects.filter(**by_record).select_related("visit").order_by("id"))
    orders = list(LabOrder.objects.filter(**by_record).select_related("visit").order_by("id"))
    acceptance = list(LabAcceptance.objects.filter(**by_record).select_related("visit").order_by("id"))
    results = list(LabResults.objects.filter(**by_record).select_related("visit").order_by("id"))

    return VisitBundle(
        record_number=record_number,
        active_visit_id=visits[-1].visit_id,
        visits=visits,
        morphology=morphology,
        orders=orders,
        acceptance=acceptance,
        results=results,
    )


def search_visits(q: str | None, *, limit: int | None = None) -> list[Visit]:
    """
    Case-insensitive substring search over record number, visit id and name.
    Returns the latest visit of each matching record number.
    """
    qv = (q or "").strip()
    if len(qv) < MIN_SEARCH_CHARS:
        raise ValidationError({"detail": f"Search query must be at least {MIN_SEARCH_CHARS} characters."})

    if limit is None:
        limit = int(getattr(settings, "PRISM_SEARCH_LIMIT", 20))

    qs = (
        Visit.objects.filter(
            Q(record_number__icontains=qv)
            | Q(visit_id__icontains=qv)
            | Q(name__icontains=qv)
        )
        .order_by("record_number", "-date_received", "-id")
    )

    latest: list[Visit] = []
    seen: set[str] = set()
    for visit in qs.iterator():
        if visit.record_number in seen:
            continue
        seen.add(visit.record_number)
        latest.append(visit)
        if len(latest) >= limit:
            break
    return latest
