"""Admin registration for the settlement ledger."""

from __future__ import annotations

from django.contrib import admin

from .models import PartnerTransaction


@admin.register(PartnerTransaction)
class PartnerTransactionAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "sender_tenant",
        "receiver_tenant",
        "total_price",
        "currency",
        "status",
        "deletion_status",
    )
    list_filter = ("status", "deletion_status", "currency")
    search_fields = ("sender_tenant__name", "receiver_tenant__name")
    readonly_fields = [field.name for field in PartnerTransaction._meta.fields]

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
