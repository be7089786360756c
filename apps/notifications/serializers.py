"""Serializers for the notification log."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import NotificationLog


class NotificationLogSerializer(serializers.ModelSerializer):
    requestId = serializers.IntegerField(source="reservation_request_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = NotificationLog
        fields = ["id", "requestId", "event", "channel", "phone", "message", "status", "error", "createdAt"]
        read_only_fields = fields
