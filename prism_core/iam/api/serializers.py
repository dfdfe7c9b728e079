# prism_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from prism_core.iam.policy import VALID_ROLES


class LoginRequestSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=VALID_ROLES)
    password = serializers.CharField(trim_whitespace=False)


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    role = serializers.CharField()
    expires_in = serializers.IntegerField(help_text="Token lifetime in seconds")
