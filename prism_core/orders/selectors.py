# prism_core/orders/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from prism_core.orders.models import LabOrder


def list_orders_for_lab(lab_kind: str) -> QuerySet[LabOrder]:
    return (
        LabOrder.objects.filter(lab_kind=lab_kind)
        .select_related("visit")
        .order_by("-created_at", "-id")
    )
