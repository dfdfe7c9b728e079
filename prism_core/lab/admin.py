# prism_core/lab/admin.py
from __future__ import annotations

from django.contrib import admin

from prism_core.lab.models import LabAcceptance, LabResults


@admin.register(LabAcceptance)
class LabAcceptanceAdmin(admin.ModelAdmin):
    list_display = ("id", "visit", "lab_kind", "unique_lab_id", "locked", "locked_by", "locked_at", "created_at")
    list_filter = ("lab_kind", "locked")
    search_fields = ("visit__record_number", "visit__visit_id", "unique_lab_id")
    autocomplete_fields = ("visit",)
    ordering = ("-created_at",)


@admin.register(LabResults)
class LabResultsAdmin(admin.ModelAdmin):
    list_display = ("id", "visit", "lab_kind", "locked", "locked_by", "locked_at", "created_at")
    list_filter = ("lab_kind", "locked")
    search_fields = ("visit__record_number", "visit__visit_id")
    autocomplete_fields = ("visit",)
    ordering = ("-created_at",)
