"""Serializers for capacity slots."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.tenants.models import Activity

from .models import CapacitySlot


class CapacitySlotSerializer(serializers.ModelSerializer):
    activityId = serializers.PrimaryKeyRelatedField(source="activity", queryset=Activity.objects.all())
    time = serializers.TimeField(format="%H:%M", input_formats=["%H:%M", "%H:%M:%S"])
    totalSlots = serializers.IntegerField(source="total_slots", min_value=0)
    bookedSlots = serializers.IntegerField(source="booked_slots", read_only=True)
    availableSlots = serializers.IntegerField(source="available_slots", read_only=True)

    class Meta:
        model = CapacitySlot
        fields = [
            "id",
            "activityId",
            "date",
            "time",
            "totalSlots",
            "bookedSlots",
            "availableSlots",
        ]
        read_only_fields = ["id", "bookedSlots", "availableSlots"]

    def __init__(self, *args, **kwargs):  # type: ignore
        super().__init__(*args, **kwargs)
        request = self.context.get("request")
        tenant = getattr(getattr(request, "user", None), "tenant", None)
        # Slots can only be managed for the acting tenant's own activities
        self.fields["activityId"].queryset = Activity.objects.filter(tenant=tenant)


class CapacityTotalSerializer(serializers.Serializer):
    totalSlots = serializers.IntegerField(min_value=0)
