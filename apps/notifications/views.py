"""API views for notifications."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from rest_framework import viewsets  # type: ignore

from shared.api.permissions import IsTenantMember

from .models import NotificationLog
from .serializers import NotificationLogSerializer


class NotificationLogViewSet(viewsets.ReadOnlyModelViewSet):
    """Delivery attempts concerning the acting tenant's requests, sent or received."""

    serializer_class = NotificationLogSerializer
    permission_classes = [IsTenantMember]
    filterset_fields = ["status", "event"]

    def get_queryset(self):  # type: ignore
        tenant = self.request.user.tenant
        return NotificationLog.objects.filter(
            Q(tenant=tenant) | Q(reservation_request__owner_tenant=tenant)
        ).distinct()
