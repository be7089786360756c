"""Admin registration for capacity slots."""

from __future__ import annotations

from django.contrib import admin

from .models import CapacitySlot


@admin.register(CapacitySlot)
class CapacitySlotAdmin(admin.ModelAdmin):
    list_display = ("activity", "tenant", "date", "time", "booked_slots", "total_slots", "version")
    list_filter = ("date", "tenant")
    search_fields = ("activity__name", "tenant__name")
    readonly_fields = ("booked_slots", "version", "created_at", "updated_at")
