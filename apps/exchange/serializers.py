"""Serializers for reservation requests.

Field names follow the exchange's public contract (camelCase).
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.tenants.models import Activity

from .models import ReservationRequest


class ReservationRequestSerializer(serializers.ModelSerializer):
    ownerTenantId = serializers.IntegerField(source="owner_tenant_id", read_only=True)
    originTenantId = serializers.IntegerField(source="origin_tenant_id", read_only=True)
    originTenantName = serializers.SerializerMethodField()
    activityId = serializers.IntegerField(source="activity_id", read_only=True)
    activityName = serializers.CharField(source="activity.name", read_only=True)
    time = serializers.TimeField(format="%H:%M", read_only=True)
    customerName = serializers.CharField(source="customer_name", read_only=True)
    customerPhone = serializers.CharField(source="customer_phone", read_only=True)
    paymentCollectionType = serializers.CharField(source="payment_collection_type", read_only=True)
    amountCollectedBySender = serializers.DecimalField(
        source="amount_collected_by_sender",
        max_digits=12,
        decimal_places=2,
        coerce_to_string=False,
        read_only=True,
    )
    unitPrice = serializers.DecimalField(
        source="unit_price", max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True
    )
    totalPrice = serializers.DecimalField(
        source="total_price", max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True
    )
    requesterType = serializers.CharField(source="requester_type", read_only=True)
    reservationId = serializers.IntegerField(source="converted_reservation_id", read_only=True)
    processNotes = serializers.CharField(source="process_notes", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = ReservationRequest
        fields = [
            "id",
            "ownerTenantId",
            "originTenantId",
            "originTenantName",
            "activityId",
            "activityName",
            "date",
            "time",
            "customerName",
            "customerPhone",
            "guests",
            "notes",
            "status",
            "paymentCollectionType",
            "amountCollectedBySender",
            "unitPrice",
            "currency",
            "totalPrice",
            "requesterType",
            "reservationId",
            "processNotes",
            "createdAt",
        ]
        read_only_fields = fields

    def get_originTenantName(self, obj: ReservationRequest):  # type: ignore
        return obj.origin_tenant.name if obj.origin_tenant_id else None


class ReservationRequestCreateSerializer(serializers.Serializer):
    activityId = serializers.PrimaryKeyRelatedField(queryset=Activity.objects.filter(is_active=True))
    date = serializers.DateField()
    time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])
    customerName = serializers.CharField(max_length=255)
    customerPhone = serializers.CharField(max_length=32)
    guests = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    paymentCollectionType = serializers.ChoiceField(
        choices=ReservationRequest.PaymentCollection.choices,
        default=ReservationRequest.PaymentCollection.RECEIVER_FULL,
    )
    amountCollectedBySender = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    def to_service_kwargs(self) -> dict:
        data = self.validated_data
        return {
            "slot_date": data["date"],
            "slot_time": data["time"],
            "customer_name": data["customerName"],
            "customer_phone": data["customerPhone"],
            "guests": data["guests"],
            "notes": data.get("notes"),
            "payment_collection_type": data["paymentCollectionType"],
            "amount_collected_by_sender": data["amountCollectedBySender"],
        }


class ProcessNotesSerializer(serializers.Serializer):
    processNotes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
