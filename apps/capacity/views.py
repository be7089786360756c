"""API views for capacity slot management."""

from __future__ import annotations

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.permissions import IsTenantManager

from . import services
from .filters import CapacitySlotFilterSet
from .models import CapacitySlot
from .serializers import CapacitySlotSerializer, CapacityTotalSerializer


class CapacitySlotViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Own-tenant slots. Creating an existing key sets its total instead."""

    serializer_class = CapacitySlotSerializer
    permission_classes = [IsTenantManager]
    filterset_class = CapacitySlotFilterSet

    def get_queryset(self):  # type: ignore
        return CapacitySlot.objects.filter(tenant=self.request.user.tenant).select_related("activity")

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        slot = services.set_total_slots(data["activity"], data["date"], data["time"], data["total_slots"])
        return Response(self.get_serializer(slot).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        slot = self.get_object()
        serializer = CapacityTotalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        slot = services.set_total_slots(slot.activity, slot.date, slot.time, serializer.validated_data["totalSlots"])
        return Response(self.get_serializer(slot).data)
