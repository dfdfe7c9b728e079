# prism_core/orders/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from prism_core.common.api.params import client_origin, lab_or_400
from prism_core.common.permissions import CategoryPermission
from prism_core.iam.policy import ACCEPTANCE_WRITE, ORDER_WRITE
from prism_core.lab.api.serializers import AcceptedPairSerializer
from prism_core.lab.selectors import list_accepted_for_lab
from prism_core.orders.api.serializers import LabOrderSerializer, LabOrderWithVisitSerializer, OrderSaveSerializer
from prism_core.orders.selectors import list_orders_for_lab
from prism_core.orders.services import OrderService


class LabOrdersView(APIView):
    """
    GET: a lab's worklist (orders with demographics, newest first).
    POST: create or replace a visit's order with the lab.
    """
    permission_classes = [CategoryPermission]
    required_categories_per_method = {
        "GET": {ACCEPTANCE_WRITE},
        "POST": {ORDER_WRITE},
    }

    @extend_schema(responses={200: LabOrderWithVisitSerializer(many=True)}, tags=["Orders"])
    def get(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        qs = list_orders_for_lab(lab_kind)
        return Response(LabOrderWithVisitSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(request=OrderSaveSerializer, responses={200: LabOrderSerializer}, tags=["Orders"])
    def post(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        ser = OrderSaveSerializer(data=request.data, context={"lab_kind": lab_kind})
        ser.is_valid(raise_exception=True)

        order = OrderService.save_order(
            lab_kind=lab_kind,
            **ser.validated_data,
            actor=request.user,
            origin=client_origin(request),
        )
        return Response(LabOrderSerializer(order).data, status=status.HTTP_200_OK)


class AcceptedForLabView(APIView):
    """Visits a lab has already accepted, as (record_number, visit_id) pairs."""
    permission_classes = [CategoryPermission]
    required_categories = {ACCEPTANCE_WRITE}

    @extend_schema(responses={200: AcceptedPairSerializer(many=True)}, tags=["Orders"])
    def get(self, request, lab: str):
        lab_kind = lab_or_400(lab)
        rows = list_accepted_for_lab(lab_kind)
        return Response(AcceptedPairSerializer(rows, many=True).data, status=status.HTTP_200_OK)
