# prism_core/visits/admin.py
from __future__ import annotations

from django.contrib import admin

from prism_core.visits.models import Visit


@admin.register(Visit)
class VisitAdmin(admin.ModelAdmin):
    list_display = ("record_number", "visit_id", "name", "age", "sex", "faculty", "date_received", "created_at")
    list_filter = ("faculty", "sex", "date_received")
    search_fields = ("record_number", "visit_id", "name")
    ordering = ("-date_received", "-id")
