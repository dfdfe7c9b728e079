# prism_core/orders/admin.py
from __future__ import annotations

from django.contrib import admin

from prism_core.orders.models import LabOrder


@admin.register(LabOrder)
class LabOrderAdmin(admin.ModelAdmin):
    list_display = ("id", "visit", "lab_kind", "payment", "created_at")
    list_filter = ("lab_kind", "payment")
    search_fields = ("visit__record_number", "visit__visit_id")
    autocomplete_fields = ("visit",)
    ordering = ("-created_at",)
