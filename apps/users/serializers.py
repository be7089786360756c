"""Serializers for the current user session."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import CustomUser


class CurrentUserSerializer(serializers.ModelSerializer):
    """Kimlik, rol ve acente bilgisi. İstemci rolü buradan okur, kendisi belirlemez."""

    displayName = serializers.CharField(source="display_name", read_only=True)
    tenantId = serializers.IntegerField(source="tenant_id", read_only=True)
    tenantName = serializers.CharField(source="tenant.name", read_only=True, default=None)

    class Meta:
        model = CustomUser
        fields = ["id", "email", "displayName", "phone", "role", "tenantId", "tenantName"]
        read_only_fields = fields
