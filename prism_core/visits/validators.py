# prism_core/visits/validators.py
"""
Syntactic checks on registration input. Pure functions, no storage access.
"""
from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Mapping

RECORD_NUMBER_RE = re.compile(r"^[0-9]{12}$")
VISIT_ID_RE = re.compile(r"^[AP]_[0-9]+_[0-9]{4}$")
AGE_RE = re.compile(r"^[0-9]+$")

# visits.Visit.visit_id column width
VISIT_ID_MAX_LENGTH = 32

COUNT_FIELDS = (
    ("tlc", "TLC"),
    ("blasts", "Blasts"),
    ("eos", "Eosinophils"),
    ("plasma", "Plasma cells"),
)

# Column widths of the bounded text fields on visits.Visit
TEXT_LIMITS = (
    ("name", "Patient name", 255),
    ("sex", "Sex", 16),
    ("faculty", "Faculty", 128),
    ("jr", "JR", 128),
    ("sr", "SR", 128),
    ("sample", "Sample type", 64),
    ("bm_quality", "BM quality", 64),
)

# PositiveIntegerField upper bound on PostgreSQL
AGE_MAX = 2147483647


def is_record_number(value: Any) -> bool:
    return isinstance(value, str) and bool(RECORD_NUMBER_RE.fullmatch(value))


def is_visit_id(value: Any) -> bool:
    return (
        isinstance(value, str)
        and len(value) <= VISIT_ID_MAX_LENGTH
        and bool(VISIT_ID_RE.fullmatch(value))
    )


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_iso_date(value: Any) -> bool:
    if isinstance(value, date):
        return True
    try:
        date.fromisoformat(str(value))
    except ValueError:
        return False
    return True


def _is_age(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 <= value <= AGE_MAX
    if not isinstance(value, str) or not AGE_RE.fullmatch(value.strip()):
        return False
    return int(value) <= AGE_MAX


def _is_count(value: Any) -> bool:
    """A finite int/float, or a string float() parses to one."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if not isinstance(value, str):
        return False
    try:
        number = float(value)
    except ValueError:
        return False
    return math.isfinite(number)


def validate_registration(data: Mapping[str, Any]) -> list[str]:
    """
    Return every rule the payload violates, in a fixed order. Empty list = valid.
    """
    errors: list[str] = []

    record_number = data.get("record_number")
    if _blank(record_number):
        errors.append("Record number is required")
    elif not is_record_number(record_number):
        errors.append("Record number must be exactly 12 digits")

    visit_id = data.get("visit_id")
    if _blank(visit_id):
        errors.append("Visit ID is required")
    elif not is_visit_id(visit_id):
        errors.append("Visit ID format invalid (expected A_100_2026 or P_100_2026)")

    date_received = data.get("date_received")
    if _blank(date_received):
        errors.append("Date received is required")
    elif not _is_iso_date(date_received):
        errors.append("Date received must be an ISO date (YYYY-MM-DD)")

    if _blank(data.get("name")):
        errors.append("Patient name is required")

    age = data.get("age")
    if age is None or age == "":
        errors.append("Age is required")
    elif not _is_age(age):
        errors.append("Age must be a non-negative whole number")

    if _blank(data.get("sex")):
        errors.append("Sex is required")
    if _blank(data.get("faculty")):
        errors.append("Faculty is required")
    if _blank(data.get("sample")):
        errors.append("Sample type is required")

    for name, label in COUNT_FIELDS:
        value = data.get(name)
        if value is None or value == "":
            continue
        if not _is_count(value):
            errors.append(f"{label} must be a number")

    for name, label, limit in TEXT_LIMITS:
        value = data.get(name)
        if value is not None and len(str(value).strip()) > limit:
            errors.append(f"{label} must be at most {limit} characters")

    return errors
