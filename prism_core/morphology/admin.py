# prism_core/morphology/admin.py
from __future__ import annotations

from django.contrib import admin

from prism_core.morphology.models import Morphology


@admin.register(Morphology)
class MorphologyAdmin(admin.ModelAdmin):
    list_display = ("id", "visit", "locked", "updated_at")
    list_filter = ("locked",)
    search_fields = ("visit__record_number", "visit__visit_id")
    autocomplete_fields = ("visit",)
    ordering = ("-updated_at",)
