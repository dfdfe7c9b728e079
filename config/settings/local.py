# config/settings/local.py
from .base import *  # noqa

DEBUG = True

# Development
CORS_ALLOW_ALL_ORIGINS = True  # Only for development!
