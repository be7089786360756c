"""Admin registration for reservation requests."""

from __future__ import annotations

from django.contrib import admin

from .models import ReservationRequest


@admin.register(ReservationRequest)
class ReservationRequestAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "owner_tenant",
        "origin_tenant",
        "activity",
        "date",
        "time",
        "guests",
        "status",
        "origin_kind",
    )
    list_filter = ("status", "origin_kind", "payment_collection_type")
    search_fields = ("customer_name", "customer_phone", "notes")
    readonly_fields = ("processed_by", "processed_at", "created_at", "updated_at")
