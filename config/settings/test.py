# config/settings/test.py
from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

PRISM_ROLE_PASSWORDS = {
    "resident": "resident-pass",
    "fish": "fish-pass",
    "fcm": "fcm-pass",
    "rtpcr": "rtpcr-pass",
    "ngsh12": "ngsh12-pass",
    "ngsh9": "ngsh9-pass",
    "tcr": "tcr-pass",
    "consultant": "consultant-pass",
    "admin": "admin-pass",
}

LOGGING["loggers"]["prism_core"]["level"] = "DEBUG"
# let pytest's caplog see records
LOGGING["loggers"]["prism_core"]["propagate"] = True
