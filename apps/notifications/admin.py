from django.contrib import admin

from .models import NotificationLog


@admin.register(NotificationLog)
class NotificationLogAdmin(admin.ModelAdmin):
    list_display = ("event", "phone", "status", "tenant", "created_at")
    list_filter = ("status", "event", "channel")
    search_fields = ("phone", "message")
