# prism_core/lab/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from prism_core.common.api.params import client_origin, lab_or_400
from prism_core.common.api.serializers import UnlockRequestSerializer, UnlockResponseSerializer
from prism_core.common.labs import lab_label
from prism_core.common.permissions import CategoryPermission
from prism_core.iam.policy import ACCEPTANCE_WRITE, ADMIN, RESULTS_WRITE
from prism_core.lab.api.serializers import (
    AcceptanceSaveSerializer,
    ExportQuerySerializer,
    ExportRowSerializer,
    LabAcceptanceSerializer,
    LabResultsSerializer,
    ResultsSaveSerializer,
)
from prism_core.lab.selectors import export_results
from prism_core.lab.services import LabService


def _saved(serializer_class, outcome) -> Response:
    return Response(
        serializer_class(outcome.record).data,
        status=status.HTTP_201_CREATED if outcome.created else status.HTTP_200_OK,
    )


def _unlocked(what: str, lab_kind: str, visit_id: str, outcome) -> Response:
    return Response(
        {
            "detail": f"{lab_label(lab_kind)} {what} unlocked for {visit_id}",
            "unlock_event_id": outcome.event.id,
        },
        status=status.HTTP_200_OK,
    )


class AcceptanceSaveView(APIView):
    permission_classes = [CategoryPermission]
    required_categories = {ACCEPTANCE_WRITE}

    @extend_schema(
        request=AcceptanceSaveSerializer,
        responses={200: LabAcceptanceSerializer, 201: LabAcceptanceSerializer},
        tags=["Lab"],
    )
    def post(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        ser = AcceptanceSaveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        outcome = LabService.save_acceptance(
            lab_kind=lab_kind,
            **ser.validated_data,
            actor=request.user,
            origin=client_origin(request),
        )
        return _saved(LabAcceptanceSerializer, outcome)


class AcceptanceUnlockView(APIView):
    permission_classes = [CategoryPermission]
    required_categories = {ADMIN}

    @extend_schema(request=UnlockRequestSerializer, responses={200: UnlockResponseSerializer}, tags=["Lab"])
    def post(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        ser = UnlockRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        outcome = LabService.unlock_acceptance(
            lab_kind=lab_kind,
            **ser.validated_data,
            actor=request.user,
            origin=client_origin(request),
        )
        return _unlocked("acceptance", lab_kind, ser.validated_data["visit_id"], outcome)


class ResultsView(APIView):
    """
    GET: admin export of a lab's cases ordered within [from, to].
    POST: save results (needs acceptance first).
    """
    permission_classes = [CategoryPermission]
    required_categories_per_method = {
        "GET": {ADMIN},
        "POST": {RESULTS_WRITE},
    }

    @extend_schema(
        tags=["Lab"],
        responses={200: ExportRowSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="from", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=True),
            OpenApiParameter(name="to", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=True),
        ],
    )
    def get(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        ser = ExportQuerySerializer(data={
            "date_from": request.query_params.get("from"),
            "date_to": request.query_params.get("to"),
        })
        ser.is_valid(raise_exception=True)

        rows = export_results(lab_kind, ser.validated_data["date_from"], ser.validated_data["date_to"])
        return Response(ExportRowSerializer(rows, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=ResultsSaveSerializer,
        responses={200: LabResultsSerializer, 201: LabResultsSerializer},
        tags=["Lab"],
    )
    def post(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        ser = ResultsSaveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        outcome = LabService.save_results(
            lab_kind=lab_kind,
            **ser.validated_data,
            actor=request.user,
            origin=client_origin(request),
        )
        return _saved(LabResultsSerializer, outcome)


class ResultsUnlockView(APIView):
    permission_classes = [CategoryPermission]
    required_categories = {ADMIN}

    @extend_schema(request=UnlockRequestSerializer, responses={200: UnlockResponseSerializer}, tags=["Lab"])
    def post(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        ser = UnlockRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        outcome = LabService.unlock_results(
            lab_kind=lab_kind,
            **ser.validated_data,
            actor=request.user,
            origin=client_origin(request),
        )
        return _unlocked("results", lab_kind, ser.validated_data["visit_id"], outcome)
