# prism_core/morphology/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from prism_core.common.api.params import client_origin
from prism_core.common.api.serializers import UnlockRequestSerializer, UnlockResponseSerializer
from prism_core.common.permissions import CategoryPermission
from prism_core.iam.policy import ADMIN, MORPHOLOGY_WRITE
from prism_core.morphology.api.serializers import MorphologySaveSerializer, MorphologySerializer
from prism_core.morphology.services import MorphologyService


class MorphologySaveView(APIView):
    permission_classes = [CategoryPermission]
    required_categories = {MORPHOLOGY_WRITE}

    @extend_schema(
        request=MorphologySaveSerializer,
        responses={200: MorphologySerializer, 201: MorphologySerializer},
        tags=["Morphology"],
    )
    def post(self, request):
        ser = MorphologySaveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        outcome = MorphologyService.save_report(
            **ser.validated_data,
            actor=request.user,
            origin=client_origin(request),
        )
        return Response(
            MorphologySerializer(outcome.record).data,
            status=status.HTTP_201_CREATED if outcome.created else status.HTTP_200_OK,
        )


class MorphologyUnlockView(APIView):
    permission_classes = [CategoryPermission]
    required_categories = {ADMIN}

    @extend_schema(request=UnlockRequestSerializer, responses={200: UnlockResponseSerializer}, tags=["Morphology"])
    def post(self, request):
        ser = UnlockRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        outcome = MorphologyService.unlock_report(
            **ser.validated_data,
            actor=request.user,
            origin=client_origin(request),
        )
        return Response(
            {
                "detail": f"Morphology unlocked for {ser.validated_data['visit_id']}",
                "unlock_event_id": outcome.event.id,
            },
            status=status.HTTP_200_OK,
        )
