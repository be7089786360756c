"""Serializers for partnerships and activity shares."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.tenants.models import Activity, Tenant

from .models import ActivityShare, Partnership


class PartnershipSerializer(serializers.ModelSerializer):
    tenantId = serializers.IntegerField(source="tenant_id", read_only=True)
    tenantName = serializers.CharField(source="tenant.name", read_only=True)
    partnerTenantId = serializers.PrimaryKeyRelatedField(
        source="partner_tenant",
        queryset=Tenant.objects.filter(is_active=True),
    )
    partnerTenantName = serializers.CharField(source="partner_tenant.name", read_only=True)
    inviteCode = serializers.SerializerMethodField()
    acceptedAt = serializers.DateTimeField(source="accepted_at", read_only=True)
    revokedAt = serializers.DateTimeField(source="revoked_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Partnership
        fields = [
            "id",
            "tenantId",
            "tenantName",
            "partnerTenantId",
            "partnerTenantName",
            "status",
            "inviteCode",
            "acceptedAt",
            "revokedAt",
            "createdAt",
        ]
        read_only_fields = ["id", "status"]

    def get_inviteCode(self, obj: Partnership):  # type: ignore
        # Only the inviter hands the code over; the invitee types it in
        request = self.context.get("request")
        tenant_id = getattr(getattr(request, "user", None), "tenant_id", None)
        if obj.tenant_id == tenant_id and obj.status == Partnership.Status.PENDING:
            return obj.invite_code
        return None


class AcceptPartnershipSerializer(serializers.Serializer):
    inviteCode = serializers.CharField(max_length=32)


class ActivityShareSerializer(serializers.ModelSerializer):
    activityId = serializers.PrimaryKeyRelatedField(source="activity", queryset=Activity.objects.all())
    activityName = serializers.CharField(source="activity.name", read_only=True)
    partnershipId = serializers.PrimaryKeyRelatedField(source="partnership", queryset=Partnership.objects.all())
    partnerUnitPrice = serializers.DecimalField(
        source="partner_unit_price",
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True,
    )
    currency = serializers.CharField(max_length=3, required=False, allow_blank=True)
    unitPrice = serializers.DecimalField(source="unit_price", max_digits=12, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = ActivityShare
        fields = [
            "id",
            "activityId",
            "activityName",
            "partnershipId",
            "partnerUnitPrice",
            "currency",
            "unitPrice",
            "createdAt",
        ]
        # Sharing again updates the price instead of failing on the unique pair
        validators: list = []

    def __init__(self, *args, **kwargs):  # type: ignore
        super().__init__(*args, **kwargs)
        request = self.context.get("request")
        tenant = getattr(getattr(request, "user", None), "tenant", None)
        # Owners share only their own activities, through their own partnerships
        self.fields["activityId"].queryset = Activity.objects.filter(tenant=tenant)
        self.fields["partnershipId"].queryset = Partnership.objects.involving(tenant)


class AvailabilityQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField()
    endDate = serializers.DateField()
