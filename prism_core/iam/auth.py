# prism_core/iam/auth.py

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from prism_core.iam.identity import RoleIdentity
from prism_core.iam.policy import VALID_ROLES

ROLE_CLAIM = "role"


class RoleJWTAuthentication(JWTAuthentication):
    """
    Authenticate using:
      1) Authorization: Bearer <access>
      2) cookie containing the access token

    The token carries a role claim instead of a user id; the resolved
    request.user is a RoleIdentity.
    """

    def authenticate(self, request):
        # 1) Prefer Authorization header
        header = self.get_header(request)
        if header:
            return super().authenticate(request)

        # 2) Cookie access token
        cookie_name = settings.SIMPLE_JWT.get("AUTH_COOKIE", "prism_access")
        raw_token = request.COOKIES.get(cookie_name)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token

    def get_user(self, validated_token):
        role = validated_token.get(ROLE_CLAIM)
        if role not in VALID_ROLES:
            raise InvalidToken("Token contained no recognizable role.")
        return RoleIdentity(role=role)
