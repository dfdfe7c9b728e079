# prism_core/audit/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from prism_core.audit.models import AuditEntry, UnlockEvent

AUDIT_DEFAULT_LIMIT = 200
AUDIT_MAX_LIMIT = 500
UNLOCK_DEFAULT_LIMIT = 100


def audit_history(record_number: str) -> QuerySet[AuditEntry]:
    return AuditEntry.objects.filter(record_number=record_number).order_by("-created_at", "-id")


def list_unlock_events() -> QuerySet[UnlockEvent]:
    return UnlockEvent.objects.all().order_by("-created_at", "-id")
