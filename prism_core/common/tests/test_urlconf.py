import importlib

from django.urls import resolve


def test_root_urlconf_imports_and_routes():
    urls = importlib.import_module("config.urls")
    assert urls.urlpatterns

    assert resolve("/api/v1/visits/").url_name == "visits-list"
    assert resolve("/api/v1/acceptance/fish/").func.view_class.__name__ == "AcceptanceSaveView"


def test_auth_class_loads_with_policy_and_errors():
    from rest_framework.settings import api_settings

    from prism_core.iam.auth import RoleJWTAuthentication

    assert RoleJWTAuthentication in api_settings.DEFAULT_AUTHENTICATION_CLASSES
