"""Serializers for dispatches and reconciliation."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.reservations.models import Reservation
from apps.tenants.models import Activity

from .models import Dispatch


class DispatchSerializer(serializers.ModelSerializer):
    reservationId = serializers.PrimaryKeyRelatedField(
        source="reservation",
        queryset=Reservation.objects.all(),
        required=False,
        allow_null=True,
    )
    activityId = serializers.PrimaryKeyRelatedField(
        source="activity",
        queryset=Activity.objects.all(),
        required=False,
        allow_null=True,
    )
    dispatchDate = serializers.DateField(source="dispatch_date")
    dispatchTime = serializers.TimeField(
        source="dispatch_time",
        format="%H:%M",
        input_formats=["%H:%M", "%H:%M:%S"],
        required=False,
        allow_null=True,
    )
    customerName = serializers.CharField(source="customer_name", required=False, allow_blank=True)
    guestCount = serializers.IntegerField(source="guest_count", min_value=1, required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Dispatch
        fields = [
            "id",
            "reservationId",
            "activityId",
            "dispatchDate",
            "dispatchTime",
            "customerName",
            "guestCount",
            "notes",
            "createdAt",
        ]

    def __init__(self, *args, **kwargs):  # type: ignore
        super().__init__(*args, **kwargs)
        request = self.context.get("request")
        tenant = getattr(getattr(request, "user", None), "tenant", None)
        self.fields["reservationId"].queryset = Reservation.objects.filter(tenant=tenant)
        self.fields["activityId"].queryset = Activity.objects.filter(tenant=tenant)


class ReconciliationQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField()
    endDate = serializers.DateField()
    strictness = serializers.ChoiceField(
        choices=["strict", "standard", "lenient"],
        required=False,
    )

    def validate(self, attrs):  # type: ignore
        if attrs["endDate"] < attrs["startDate"]:
            raise serializers.ValidationError("Bitiş tarihi başlangıçtan önce olamaz.")
        return attrs
