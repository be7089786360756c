"""Admin registration for partnerships."""

from __future__ import annotations

from django.contrib import admin

from .models import ActivityShare, Partnership


class ActivityShareInline(admin.TabularInline):
    model = ActivityShare
    extra = 0


@admin.register(Partnership)
class PartnershipAdmin(admin.ModelAdmin):
    list_display = ("tenant", "partner_tenant", "status", "accepted_at", "revoked_at")
    list_filter = ("status",)
    search_fields = ("tenant__name", "partner_tenant__name", "invite_code")
    readonly_fields = ("invite_code", "created_at", "updated_at")
    inlines = [ActivityShareInline]


@admin.register(ActivityShare)
class ActivityShareAdmin(admin.ModelAdmin):
    list_display = ("activity", "partnership", "partner_unit_price", "currency")
    search_fields = ("activity__name",)
