# prism_core/common/permissions.py

from __future__ import annotations

from rest_framework.permissions import BasePermission

from prism_core.iam.policy import is_permitted


class CategoryPermission(BasePermission):
    """
    Category-based access control.

    Views declare which capability categories an HTTP method needs:

        required_categories_per_method = {"GET": {READ_ONLY}, "POST": {VISIT_WRITE}}

    or a single `required_categories` set for every method. A role passes
    when it holds at least one of the required categories. A view that
    declares nothing only needs an authenticated identity.
    """
    message = "Your role does not have permission for this action."

    def _required(self, request, view) -> set[str] | None:
        per_method = getattr(view, "required_categories_per_method", None)
        if per_method is not None:
            method = request.method.upper()
            if method in ("HEAD", "OPTIONS"):
                method = "GET"
            # Unknown method => deny by default
            return per_method.get(method, set())
        return getattr(view, "required_categories", None)

    def has_permission(self, request, view) -> bool:
        identity = request.user
        if not identity or not getattr(identity, "is_authenticated", False):
            return False

        required = self._required(request, view)
        if required is None:
            return True

        role = getattr(identity, "role", None)
        if role is None:
            return False
        return is_permitted(role, required)

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)
