# prism_core/lab/selectors.py
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any

from django.db.models import QuerySet
from django.utils import timezone

from prism_core.lab.models import LabAcceptance, LabResults
from prism_core.morphology.models import Morphology
from prism_core.orders.models import LabOrder


def list_accepted_for_lab(lab_kind: str) -> QuerySet:
    """(record_number, visit_id) of every visit this lab has accepted."""
    return (
        LabAcceptance.objects.filter(lab_kind=lab_kind)
        .order_by("id")
        .values("visit__record_number", "visit__visit_id")
    )


def _day_start(day: date) -> datetime:
    return timezone.make_aware(datetime.combine(day, time.min))


def export_results(lab_kind: str, date_from: date, date_to: date) -> list[dict[str, Any]]:
    """
    Orders of one lab placed between the two dates (both inclusive), newest
    first, each merged with the visit, the acceptance and the results.
    """
    orders = list(
        LabOrder.objects.filter(
            lab_kind=lab_kind,
            created_at__gte=_day_start(date_from),
            created_at__lt=_day_start(date_to + timedelta(days=1)),
        )
        .select_related("visit")
        .order_by("-created_at", "-id")
    )

    visit_ids = [o.visit_id for o in orders]
    acceptance = {
        a.visit_id: a for a in LabAcceptance.objects.filter(lab_kind=lab_kind, visit_id__in=visit_ids)
    }
    results = {
        r.visit_id: r for r in LabResults.objects.filter(lab_kind=lab_kind, visit_id__in=visit_ids)
    }

    rows: list[dict[str, Any]] = []
    for order in orders:
        visit = order.visit
        acc = acceptance.get(order.visit_id)
        res = results.get(order.visit_id)
        rows.append({
            "record_number": visit.record_number,
            "visit_id": visit.visit_id,
            "panels": order.panels,
            "order_date": order.created_at,
            "name": visit.name,
            "age": visit.age,
            "sex": visit.sex,
            "date_received": visit.date_received,
            "suspicion": visit.suspicion,
            "faculty": visit.faculty,
            "jr": visit.jr,
            "sr": visit.sr,
            "sample": visit.sample,
            "tlc": visit.tlc,
            "bm_quality": visit.bm_quality,
            "blasts": visit.blasts,
            "eos": visit.eos,
            "plasma": visit.plasma,
            "right_imprint": visit.right_imprint,
            "left_imprint": visit.left_imprint,
            "unique_lab_id": acc.unique_lab_id if acc else None,
            "panel_status": acc.panel_status if acc else None,
            "acceptance_notes": acc.notes if acc else None,
            "panel_results": res.panel_results if res else None,
            "locked": res.locked if res else None,
        })
    return rows


def lock_status(visit) -> dict[str, Any]:
    """Morphology flag plus per-lab acceptance/results lock metadata for one visit."""
    fields = ("lab_kind", "locked", "locked_at", "locked_by")
    morphology = Morphology.objects.filter(visit=visit).only("locked").first()
    return {
        "record_number": visit.record_number,
        "visit_id": visit.visit_id,
        "morphology_locked": bool(morphology and morphology.locked),
        "acceptance": list(LabAcceptance.objects.filter(visit=visit).order_by("lab_kind").values(*fields)),
        "results": list(LabResults.objects.filter(visit=visit).order_by("lab_kind").values(*fields)),
    }
