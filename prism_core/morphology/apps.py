from django.apps import AppConfig


class MorphologyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "prism_core.morphology"
