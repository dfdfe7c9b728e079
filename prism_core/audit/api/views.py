# prism_core/audit/api/views.py
from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from prism_core.audit.api.serializers import (
    AuditEntrySerializer,
    AuditHistorySerializer,
    UnlockEventSerializer,
    UnlockLogSerializer,
)
from prism_core.audit.filters import UnlockEventFilter
from prism_core.audit.models import UnlockEvent
from prism_core.audit.selectors import (
    AUDIT_DEFAULT_LIMIT,
    AUDIT_MAX_LIMIT,
    UNLOCK_DEFAULT_LIMIT,
    audit_history,
    list_unlock_events,
)
from prism_core.common.permissions import CategoryPermission
from prism_core.iam.policy import ADMIN
from prism_core.lab.api.serializers import LockStatusSerializer
from prism_core.lab.selectors import lock_status
from prism_core.visits.selectors import resolve_visit

_LIMIT_PARAM = OpenApiParameter(
    name="limit",
    type=OpenApiTypes.INT,
    location=OpenApiParameter.QUERY,
    required=False,
    description=f"Maximum rows (1-{AUDIT_MAX_LIMIT}).",
)


def _limit(request, default: int) -> int:
    raw = request.query_params.get("limit")
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({"limit": "Must be an integer."})
    if not 1 <= value <= AUDIT_MAX_LIMIT:
        raise ValidationError({"limit": f"Must be between 1 and {AUDIT_MAX_LIMIT}."})
    return value


class AuditHistoryView(APIView):
    """Audit trail of one record number, newest first."""
    permission_classes = [CategoryPermission]
    required_categories = {ADMIN}

    @extend_schema(tags=["Admin"], responses={200: AuditHistorySerializer}, parameters=[_LIMIT_PARAM])
    def get(self, request, record_number: str):
        entries = audit_history(record_number)[: _limit(request, AUDIT_DEFAULT_LIMIT)]
        return Response(
            {"record_number": record_number, "entries": AuditEntrySerializer(entries, many=True).data},
            status=status.HTTP_200_OK,
        )


class UnlockLogView(generics.GenericAPIView):
    """Recent unlocks, newest first; filter by lab_kind, target_table, record_number."""
    permission_classes = [CategoryPermission]
    required_categories = {ADMIN}

    serializer_class = UnlockEventSerializer
    queryset = UnlockEvent.objects.none()
    filter_backends = [DjangoFilterBackend]
    filterset_class = UnlockEventFilter

    def get_queryset(self):
        return list_unlock_events()

    @extend_schema(tags=["Admin"], responses={200: UnlockLogSerializer}, parameters=[_LIMIT_PARAM])
    def get(self, request):
        qs = self.filter_queryset(self.get_queryset())[: _limit(request, UNLOCK_DEFAULT_LIMIT)]
        return Response({"entries": self.get_serializer(qs, many=True).data}, status=status.HTTP_200_OK)


class LockStatusView(APIView):
    """Lock state of every stage of one visit."""
    permission_classes = [CategoryPermission]
    required_categories = {ADMIN}

    @extend_schema(tags=["Admin"], responses={200: LockStatusSerializer})
    def get(self, request, record_number: str, visit_id: str):
        visit = resolve_visit(record_number, visit_id)
        return Response(LockStatusSerializer(lock_status(visit)).data, status=status.HTTP_200_OK)
