# prism_core/common/errors.py
"""
Business-rule failures raised by services.

Only rest_framework.exceptions is imported here: policy and authentication
modules load while DRF itself is still initialising its views.
"""
from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.exceptions import APIException


class WorkflowError(APIException):
    """
    Business-rule failure with machine-readable details.

    `details` is emitted verbatim in the envelope (DRF would otherwise
    stringify nested values into ErrorDetail objects).
    """
    details: dict[str, Any] | None = None

    def __init__(self, detail=None, code=None, *, details: dict[str, Any] | None = None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)
        if details is not None:
            self.details = details


class RegistrationInvalid(WorkflowError):
    """
    400 carrying the first violated rule as message and every violation in details.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "validation_error"

    def __init__(self, errors: list[str]):
        super().__init__(detail=errors[0], details={"all_errors": list(errors)})


class ScopeViolation(WorkflowError):
    """
    403 raised when a lab role writes to a lab it does not own.
    Kept distinct from PermissionDenied (role lacks the category).
    """
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Your role cannot write records for this lab."
    default_code = "scope_violation"


class PrerequisiteMissing(WorkflowError):
    """
    422 raised by workflow gates when an earlier stage has not been recorded.
    """
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "A prerequisite workflow stage is missing."
    default_code = "prerequisite_missing"

    def __init__(self, detail=None, *, missing_stage: str):
        super().__init__(detail=detail, details={"missing_stage": missing_stage})


class ConflictError(WorkflowError):
    """
    409 Conflict that still flows through the global exception handler.
    Use when business rules block an action (e.g. accession id already claimed).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class RecordLocked(WorkflowError):
    """
    423 raised when a non-administrator writes to a locked record.
    """
    status_code = status.HTTP_423_LOCKED
    default_detail = "Record is locked. Contact admin to unlock."
    default_code = "locked"
    details = {"locked": True}
