# prism_core/visits/services.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from django.db import transaction

from prism_core.audit.services import AuditService, snapshot
from prism_core.common.errors import RegistrationInvalid
from prism_core.visits.models import Visit
from prism_core.visits.validators import validate_registration

# Every registration replaces all of these on the stored row.
REGISTRATION_FIELDS = (
    "date_received", "name", "age", "sex", "faculty", "jr", "sr", "sample",
    "tlc", "bm_quality", "blasts", "eos", "plasma",
    "right_imprint", "left_imprint", "suspicion",
)
_NUMERIC_FIELDS = ("tlc", "blasts", "eos", "plasma")


@dataclass(frozen=True)
class RegistrationOutcome:
    visit: Visit
    created: bool
    is_new_visit: bool
    existing_visit_ids: list[str] = field(default_factory=list)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _number(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _clean(data: Mapping[str, Any]) -> dict[str, Any]:
    raw_date = data["date_received"]
    values = {name: _text(data.get(name)) for name in REGISTRATION_FIELDS}
    values["date_received"] = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date))
    values["age"] = int(data["age"])
    for name in _NUMERIC_FIELDS:
        values[name] = _number(data.get(name))
    return values


class VisitService:
    @staticmethod
    def register_visit(*, data: Mapping[str, Any], actor, origin: str | None = None) -> RegistrationOutcome:
        """
        Create or fully replace the visit keyed by (record_number, visit_id).

        Also reports whether this is another visit for a record number that
        already has visits; that hint never blocks registration.
        """
        errors = validate_registration(data)
        if errors:
            raise RegistrationInvalid(errors)

        record_number = data["record_number"]
        visit_id = data["visit_id"]
        values = _clean(data)

        with transaction.atomic():
            existing_ids = list(
                Visit.objects.filter(record_number=record_number)
                .order_by("date_received", "id")
                .values_list("visit_id", flat=True)
            )
            current = (
                Visit.objects.select_for_update()
                .filter(record_number=record_number, visit_id=visit_id)
                .first()
            )
            old_data = snapshot(current)

            visit, created = Visit.objects.update_or_create(
                record_number=record_number,
                visit_id=visit_id,
                defaults=values,
            )

        AuditService.log(
            role=actor.role,
            action="register" if created else "update_registration",
            record_number=record_number,
            visit_id=visit_id,
            old_data=old_data,
            new_data=snapshot(visit),
            origin=origin,
        )

        return RegistrationOutcome(
            visit=visit,
            created=created,
            is_new_visit=bool(existing_ids) and visit_id not in existing_ids,
            existing_visit_ids=[vid for vid in existing_ids if vid != visit_id],
        )
