# prism_core/iam/policy.py
"""
Role-access policy.

Every role maps to a fixed set of capability categories; lab roles also own
exactly one lab. Both tables are frozen at import and never change at runtime.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

from rest_framework.exceptions import PermissionDenied

from prism_core.common.errors import ScopeViolation

# Categories
VISIT_WRITE = "visit-write"
MORPHOLOGY_WRITE = "morphology-write"
ORDER_WRITE = "order-write"
ACCEPTANCE_WRITE = "acceptance-write"
RESULTS_WRITE = "results-write"
READ_ONLY = "read-only"
ADMIN = "admin"

ALL_CATEGORIES = frozenset({
    VISIT_WRITE, MORPHOLOGY_WRITE, ORDER_WRITE,
    ACCEPTANCE_WRITE, RESULTS_WRITE, READ_ONLY, ADMIN,
})

# Roles
ROLE_RESIDENT = "resident"
ROLE_CONSULTANT = "consultant"
ROLE_ADMIN = "admin"
LAB_ROLES = ("fish", "fcm", "rtpcr", "ngsh12", "ngsh9", "tcr")

_LAB_CATEGORIES = frozenset({ACCEPTANCE_WRITE, RESULTS_WRITE})

ROLE_ACCESS = MappingProxyType({
    ROLE_RESIDENT: frozenset({VISIT_WRITE, MORPHOLOGY_WRITE, ORDER_WRITE}),
    **{role: _LAB_CATEGORIES for role in LAB_ROLES},
    ROLE_CONSULTANT: frozenset({READ_ONLY}),
    ROLE_ADMIN: ALL_CATEGORIES,
})

# Each lab role owns the lab of the same name.
ROLE_LAB = MappingProxyType({role: role for role in LAB_ROLES})

VALID_ROLES: tuple[str, ...] = tuple(ROLE_ACCESS.keys())


def categories_for(role: str) -> frozenset[str]:
    return ROLE_ACCESS.get(role, frozenset())


def is_permitted(role: str, required: Iterable[str]) -> bool:
    """True when the role holds at least one of the required categories."""
    return bool(categories_for(role) & frozenset(required))


def authorize(identity, required_categories: Iterable[str]) -> None:
    """
    Raise PermissionDenied unless the identity's role grants one of the categories.
    """
    if not identity.categories & frozenset(required_categories):
        raise PermissionDenied(f"Role '{identity.role}' does not have permission for this action.")


def assert_lab_scope(identity, lab_kind: str) -> None:
    """
    Lab roles may only write into their own lab. Admin writes anywhere.
    Roles without an owned lab are rejected earlier by the category check.
    """
    if identity.is_admin:
        return
    own_lab = identity.own_lab
    if own_lab != lab_kind:
        raise ScopeViolation(
            f"Role '{identity.role}' can only write {own_lab or 'no'} lab records.",
            details={"own_lab": own_lab, "lab_kind": lab_kind},
        )
