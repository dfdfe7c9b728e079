# prism_core/common/api/params.py
from __future__ import annotations

from rest_framework.exceptions import ValidationError

from prism_core.common.labs import VALID_LABS


def lab_or_400(lab: str) -> str:
    """Lab kinds come from the URL; anything outside the configured labs is a 400."""
    if lab not in VALID_LABS:
        raise ValidationError({"detail": f"Invalid lab: {lab}"})
    return lab


def client_origin(request) -> str | None:
    return request.META.get("REMOTE_ADDR") or None
