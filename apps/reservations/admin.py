"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("id", "tenant", "activity", "customer_name", "date", "time", "quantity", "status", "source")
    list_filter = ("status", "source", "date")
    search_fields = ("customer_name", "customer_phone", "external_id", "tracking_token")
    readonly_fields = ("tracking_token", "tracking_token_expires_at", "source_request", "created_at", "updated_at")
