# prism_core/common/views.py
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class PingView(APIView):
    """Liveness probe; no auth, no database."""
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(responses={200: dict}, tags=["Health"])
    def get(self, request):
        return Response({"status": "ok", "service": "PRISM API", "ts": timezone.now().isoformat()})
