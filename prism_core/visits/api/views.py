# prism_core/visits/api/views.py
from __future__ import annotations

from collections.abc import Mapping

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from prism_core.common.api.params import client_origin
from prism_core.common.permissions import CategoryPermission
from prism_core.iam.policy import READ_ONLY, VISIT_WRITE
from prism_core.visits.api.serializers import (
    RegistrationRequestSerializer,
    RegistrationResponseSerializer,
    SearchHitSerializer,
    SearchResponseSerializer,
    VisitBundleSerializer,
    VisitSerializer,
)
from prism_core.visits.models import Visit
from prism_core.visits.selectors import load_all, search_visits
from prism_core.visits.services import VisitService


class VisitViewSet(viewsets.ViewSet):
    """
    Registration (POST) and the full record for a record number (GET).
    """
    permission_classes = [CategoryPermission]
    required_categories_per_method = {
        "GET": {VISIT_WRITE, READ_ONLY},
        "POST": {VISIT_WRITE},
    }

    lookup_field = "record_number"
    serializer_class = VisitSerializer
    queryset = Visit.objects.none()

    @extend_schema(
        request=RegistrationRequestSerializer,
        responses={200: RegistrationResponseSerializer, 201: RegistrationResponseSerializer},
        tags=["Visits"],
    )
    def create(self, request):
        if not isinstance(request.data, Mapping):
            raise ValidationError({"detail": "Expected a JSON object."})

        outcome = VisitService.register_visit(
            data=request.data,
            actor=request.user,
            origin=client_origin(request),
        )

        out = RegistrationResponseSerializer({
            "visit": outcome.visit,
            "created": outcome.created,
            "is_new_visit": outcome.is_new_visit,
            "existing_visit_ids": outcome.existing_visit_ids,
        }).data
        return Response(out, status=status.HTTP_201_CREATED if outcome.created else status.HTTP_200_OK)

    @extend_schema(responses={200: VisitBundleSerializer}, tags=["Visits"])
    def retrieve(self, request, record_number=None):
        bundle = load_all(record_number)
        return Response(VisitBundleSerializer(bundle).data, status=status.HTTP_200_OK)


class SearchView(APIView):
    """Bounded search; open to every signed-in role."""
    permission_classes = [CategoryPermission]

    @extend_schema(
        tags=["Visits"],
        responses={200: SearchResponseSerializer},
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description="At least 2 characters; matches record number, visit id or name.",
            ),
        ],
    )
    def get(self, request):
        hits = search_visits(request.query_params.get("q"))
        return Response(
            {"count": len(hits), "results": SearchHitSerializer(hits, many=True).data},
            status=status.HTTP_200_OK,
        )
