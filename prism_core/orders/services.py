# prism_core/orders/services.py
from __future__ import annotations

from django.db import transaction

from prism_core.audit.services import AuditService, snapshot
from prism_core.common.gates import require_visit
from prism_core.orders.models import LabOrder


class OrderService:
    @staticmethod
    def save_order(
        *,
        lab_kind: str,
        record_number: str,
        visit_id: str,
        actor,
        panels: list[str] | None = None,
        payment: str = "",
        notes: str = "",
        origin: str | None = None,
    ) -> LabOrder:
        """
        Create or replace the order a visit has with one lab. Orders never lock.
        """
        visit = require_visit(record_number, visit_id)

        with transaction.atomic():
            current = LabOrder.objects.select_for_update().filter(visit=visit, lab_kind=lab_kind).first()
            old_data = snapshot(current)
            order, _ = LabOrder.objects.update_or_create(
                visit=visit,
                lab_kind=lab_kind,
                defaults={
                    "panels": list(panels or []),
                    "payment": payment or "",
                    "notes": notes or "",
                },
            )

        AuditService.log(
            role=actor.role,
            action="save_order",
            record_number=record_number,
            visit_id=visit_id,
            lab_kind=lab_kind,
            old_data=old_data,
            new_data=snapshot(order),
            origin=origin,
        )
        return order
