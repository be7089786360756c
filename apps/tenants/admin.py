"""Admin registration for tenants and activities."""

from __future__ import annotations

from django.contrib import admin

from .models import Activity, Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "contact_phone", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "slug", "contact_email")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("name", "tenant", "price", "currency", "default_capacity", "is_active")
    list_filter = ("is_active", "currency")
    search_fields = ("name", "tenant__name")
