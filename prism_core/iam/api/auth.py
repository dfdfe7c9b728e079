# prism_core/iam/api/auth.py

from __future__ import annotations

import hmac
import logging
from datetime import timedelta

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import AccessToken

from prism_core.iam.api.serializers import LoginRequestSerializer, LoginResponseSerializer
from prism_core.iam.auth import ROLE_CLAIM

logger = logging.getLogger(__name__)


class LoginNotConfigured(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server configuration error."
    default_code = "config_error"


def _access_lifetime_seconds() -> int:
    lifetime = (getattr(settings, "SIMPLE_JWT", {}) or {}).get("ACCESS_TOKEN_LIFETIME", timedelta(hours=12))
    return int(lifetime.total_seconds())


def _set_auth_cookie(response: Response, *, access: str) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    response.set_cookie(
        jwt_cfg.get("AUTH_COOKIE", "prism_access"),
        access,
        max_age=_access_lifetime_seconds(),
        httponly=True,
        secure=bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False)),
        samesite=jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax"),
        path="/",
    )


def issue_token(role: str) -> str:
    token = AccessToken()
    token[ROLE_CLAIM] = role
    return str(token)


class LoginView(APIView):
    """
    Exchange a role and its shared password for a signed access token.
    """
    permission_classes = [AllowAny]
    # Stale tokens must not block a fresh login.
    authentication_classes = []

    def get_authenticate_header(self, request):
        # Keeps a wrong password a 401 rather than 403.
        return 'Bearer realm="api"'

    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: LoginResponseSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        role = serializer.validated_data["role"]
        password = serializer.validated_data["password"]

        expected = (getattr(settings, "PRISM_ROLE_PASSWORDS", {}) or {}).get(role)
        if not expected:
            logger.error("Password not configured for role: %s", role)
            raise LoginNotConfigured()

        # Same message whichever part is wrong.
        if not hmac.compare_digest(password.encode(), expected.encode()):
            raise AuthenticationFailed("Incorrect password.")

        access = issue_token(role)
        logger.info("Login ok for role %s", role)

        res = Response(
            {"access": access, "role": role, "expires_in": _access_lifetime_seconds()},
            status=status.HTTP_200_OK,
        )
        _set_auth_cookie(res, access=access)
        return res
