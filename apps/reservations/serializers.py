"""Serializers for reservations."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.tenants.models import Activity

from .models import Reservation


class ReservationSerializer(serializers.ModelSerializer):
    """Rezervasyon detayı."""

    tenantId = serializers.IntegerField(source="tenant_id", read_only=True)
    activityId = serializers.IntegerField(source="activity_id", read_only=True)
    activityName = serializers.CharField(source="activity.name", read_only=True)
    customerName = serializers.CharField(source="customer_name")
    customerPhone = serializers.CharField(source="customer_phone")
    customerEmail = serializers.EmailField(source="customer_email")
    time = serializers.TimeField(format="%H:%M")
    externalId = serializers.CharField(source="external_id")
    requestId = serializers.IntegerField(source="source_request_id")
    trackingToken = serializers.CharField(source="tracking_token")
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = Reservation
        fields = [
            "id",
            "tenantId",
            "activityId",
            "activityName",
            "customerName",
            "customerPhone",
            "customerEmail",
            "date",
            "time",
            "quantity",
            "price",
            "currency",
            "status",
            "source",
            "externalId",
            "requestId",
            "trackingToken",
            "createdAt",
        ]
        read_only_fields = fields


class ReservationCreateSerializer(serializers.Serializer):
    activityId = serializers.PrimaryKeyRelatedField(queryset=Activity.objects.all())
    date = serializers.DateField()
    time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])
    customerName = serializers.CharField(max_length=255)
    customerPhone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    customerEmail = serializers.EmailField(required=False, allow_blank=True, default="")
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    currency = serializers.CharField(max_length=3, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def __init__(self, *args, **kwargs):  # type: ignore
        super().__init__(*args, **kwargs)
        request = self.context.get("request")
        tenant = getattr(getattr(request, "user", None), "tenant", None)
        self.fields["activityId"].queryset = Activity.objects.filter(tenant=tenant, is_active=True)

    def to_service_kwargs(self) -> dict:
        data = self.validated_data
        kwargs = {
            "slot_date": data["date"],
            "slot_time": data["time"],
            "customer_name": data["customerName"],
            "customer_phone": data["customerPhone"],
            "customer_email": data["customerEmail"],
            "quantity": data["quantity"],
            "currency": data["currency"],
            "notes": data["notes"],
        }
        if "price" in data:
            kwargs["price"] = data["price"]
        return kwargs


class ReservationImportSerializer(ReservationCreateSerializer):
    externalId = serializers.CharField(max_length=100)
