# prism_core/iam/identity.py
from __future__ import annotations

from dataclasses import dataclass

from prism_core.iam.policy import ROLE_ADMIN, ROLE_LAB, categories_for


@dataclass(frozen=True)
class RoleIdentity:
    """
    Authenticated caller. There are no user accounts: a session is a role.

    Stands in for request.user, so it carries the attributes DRF and Django
    look for on a user object.
    """
    role: str

    is_authenticated = True
    is_anonymous = False
    is_active = True

    @property
    def pk(self) -> str:
        return self.role

    @property
    def own_lab(self) -> str | None:
        return ROLE_LAB.get(self.role)

    @property
    def categories(self) -> frozenset[str]:
        return categories_for(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __str__(self) -> str:
        return self.role
