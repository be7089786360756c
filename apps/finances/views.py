"""API views for the settlement ledger.

Both parties of a partner transaction can read it. Nobody can edit or
delete it directly; the only writes are the deletion protocol actions.
"""

from __future__ import annotations

import logging

from rest_framework import viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.permissions import IsTenantManager

from . import services
from .models import PartnerTransaction
from .serializers import DeletionDecisionSerializer, DeletionRejectSerializer, PartnerTransactionSerializer

logger = logging.getLogger(__name__)


class PartnerTransactionViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = PartnerTransactionSerializer
    permission_classes = [IsTenantManager]
    filterset_fields = ["status", "deletion_status", "currency"]

    def get_queryset(self):  # type: ignore
        return (
            PartnerTransaction.objects.involving(self.request.user.tenant)
            .select_related("sender_tenant", "receiver_tenant")
        )

    @action(detail=False, methods=["get"])
    def summary(self, request):  # type: ignore
        tenant = request.user.tenant
        rows = services.settlement_summary(tenant)
        return Response(
            {
                "partners": [row.to_dict() for row in rows],
                "deletionCounts": services.group_by_deletion_status(
                    PartnerTransaction.objects.involving(tenant)
                ),
            }
        )

    @action(detail=True, methods=["post"], url_path="request-deletion")
    def request_deletion(self, request, pk=None):  # type: ignore
        txn = self.get_object()
        payload = DeletionDecisionSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        txn = services.request_deletion(txn.pk, request.user.tenant, payload.validated_data.get("version"))
        return Response(self.get_serializer(txn).data)

    @action(detail=True, methods=["post"], url_path="approve-deletion")
    def approve_deletion(self, request, pk=None):  # type: ignore
        txn = self.get_object()
        payload = DeletionDecisionSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        txn = services.approve_deletion(txn.pk, request.user.tenant, payload.validated_data.get("version"))
        return Response(self.get_serializer(txn).data)

    @action(detail=True, methods=["post"], url_path="reject-deletion")
    def reject_deletion(self, request, pk=None):  # type: ignore
        txn = self.get_object()
        payload = DeletionRejectSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        txn = services.reject_deletion(
            txn.pk,
            request.user.tenant,
            payload.validated_data["reason"],
            payload.validated_data.get("version"),
        )
        return Response(self.get_serializer(txn).data)
