# prism_core/audit/admin.py
from django.contrib import admin

from prism_core.audit.models import AuditEntry, UnlockEvent


@admin.register(AuditEntry)
class AuditEntryAdmin(admin.ModelAdmin):
    list_display = ("action", "role", "record_number", "visit_id", "lab_kind", "origin", "created_at")
    list_filter = ("action", "role", "lab_kind")
    search_fields = ("record_number", "visit_id")
    readonly_fields = ("created_at",)
    ordering = ("-created_at",)


@admin.register(UnlockEvent)
class UnlockEventAdmin(admin.ModelAdmin):
    list_display = ("target_table", "lab_kind", "record_number", "visit_id", "unlocked_by", "created_at")
    list_filter = ("target_table", "lab_kind")
    search_fields = ("record_number", "visit_id", "reason")
    readonly_fields = ("created_at",)
    ordering = ("-created_at",)
