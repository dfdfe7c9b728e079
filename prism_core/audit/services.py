# prism_core/audit/services.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.db import DatabaseError, transaction
from django.forms.models import model_to_dict

from prism_core.audit.models import AuditEntry

logger = logging.getLogger(__name__)


def snapshot(instance) -> Optional[Dict[str, Any]]:
    """
    Plain-dict copy of a row's content for old/new audit data.
    """
    if instance is None:
        return None
    data = model_to_dict(instance)
    data.pop("id", None)
    for name in ("created_at", "updated_at", "locked_at"):
        if hasattr(instance, name):
            data[name] = getattr(instance, name)
    return data


class AuditService:
    """
    Central audit writer.

    Best-effort: a failed audit insert is logged and dropped, it never
    fails the write it describes.
    """

    @staticmethod
    def log(
        *,
        role: str,
        action: str,
        record_number: str,
        visit_id: str = "",
        lab_kind: str | None = None,
        old_data: Optional[Dict[str, Any]] = None,
        new_data: Optional[Dict[str, Any]] = None,
        origin: str | None = None,
    ) -> AuditEntry | None:
        try:
            with transaction.atomic():
                return AuditEntry.objects.create(
                    role=role or "unknown",
                    action=action,
                    record_number=record_number,
                    visit_id=visit_id or "",
                    lab_kind=lab_kind,
                    old_data=old_data,
                    new_data=new_data,
                    origin=origin or None,
                )
        except DatabaseError:
            logger.exception("Audit write for %s on %s/%s failed (ignored).", action, record_number, visit_id)
            return None
