# config/settings/base.py
from pathlib import Path
import os
from dotenv import load_dotenv
from datetime import timedelta


BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "unsafe-dev-key")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    "drf_spectacular",
    "django_filters",

    # Domain apps
    "prism_core.common.apps.CommonConfig",
    "prism_core.iam.apps.IamConfig",
    "prism_core.visits.apps.VisitsConfig",
    "prism_core.morphology.apps.MorphologyConfig",
    "prism_core.orders.apps.OrdersConfig",
    "prism_core.lab.apps.LabConfig",
    "prism_core.audit.apps.AuditConfig",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",

    # Request line + slow/failing query diagnostics
    "prism_core.common.middleware.QueryDiagnosticsMiddleware",

    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]


ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "prism"),
        "USER": os.getenv("DB_USER", "prism"),
        "PASSWORD": os.getenv("DB_PASSWORD", "prism"),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": os.getenv("DB_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", "60")),
        "OPTIONS": {"connect_timeout": 5},
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "prism_core.iam.auth.RoleJWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",

    # Standard error envelope
    "EXCEPTION_HANDLER": "prism_core.common.api.exceptions.api_exception_handler",

    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
    ],
}

SPECTACULAR_SETTINGS = {
    "TITLE": "PRISM Registry API",
    "DESCRIPTION": "Haematopathology registry: visits, morphology, lab orders, acceptance and results",
    "VERSION": "0.1.0",
    "COMPONENT_SPLIT_REQUEST": True,
    "SORT_OPERATIONS": True,
    "SECURITY": [
        {"BearerOrCookieJWT": []}
    ],
}

PRISM_TOKEN_HOURS = int(os.getenv("PRISM_TOKEN_HOURS", "12"))

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=PRISM_TOKEN_HOURS),
    "SIGNING_KEY": os.getenv("JWT_SECRET", SECRET_KEY),
    "UPDATE_LAST_LOGIN": False,

    # Cookie settings
    "AUTH_COOKIE": "prism_access",
    "AUTH_COOKIE_SECURE": False,   # set True in production (HTTPS)
    "AUTH_COOKIE_SAMESITE": "Lax",
}

# Shared role passwords, one per role. A role without a password cannot log in.
PRISM_ROLE_PASSWORDS = {
    role: os.getenv(f"PWD_{role.upper()}")
    for role in (
        "resident", "fish", "fcm", "rtpcr", "ngsh12", "ngsh9", "tcr", "consultant", "admin",
    )
}

PRISM_SLOW_QUERY_MS = int(os.getenv("PRISM_SLOW_QUERY_MS", "500"))
PRISM_SEARCH_LIMIT = int(os.getenv("PRISM_SEARCH_LIMIT", "20"))

# CORS settings
ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "https://drssreejesh.github.io")
CORS_ALLOWED_ORIGINS = [
    ALLOWED_ORIGIN,
    "http://localhost:3000",
    "http://localhost:5500",
    "http://127.0.0.1:5500",
]
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_CREDENTIALS = False

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "prism_core": {
            "handlers": ["console"],
            "level": os.getenv("PRISM_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
