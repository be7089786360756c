"""Serializers for the settlement ledger."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import PartnerTransaction


class PartnerTransactionSerializer(serializers.ModelSerializer):
    """Partner işlemi."""

    senderTenantId = serializers.IntegerField(source="sender_tenant_id")
    senderTenantName = serializers.CharField(source="sender_tenant.name")
    receiverTenantId = serializers.IntegerField(source="receiver_tenant_id")
    receiverTenantName = serializers.CharField(source="receiver_tenant.name")
    requestId = serializers.IntegerField(source="reservation_request_id")
    reservationId = serializers.IntegerField(source="reservation_id")
    activityId = serializers.IntegerField(source="activity_id")
    guestCount = serializers.IntegerField(source="guest_count")
    unitPrice = serializers.DecimalField(source="unit_price", max_digits=12, decimal_places=2)
    totalPrice = serializers.DecimalField(source="total_price", max_digits=12, decimal_places=2)
    paymentCollectionType = serializers.CharField(source="payment_collection_type")
    amountCollectedBySender = serializers.DecimalField(
        source="amount_collected_by_sender", max_digits=12, decimal_places=2
    )
    outstandingAmount = serializers.DecimalField(source="outstanding_amount", max_digits=12, decimal_places=2)
    deletionStatus = serializers.CharField(source="deletion_status")
    deletionRequestedByTenantId = serializers.IntegerField(source="deletion_requested_by_tenant_id")
    deletionRejectionReason = serializers.CharField(source="deletion_rejection_reason")
    deletionRequestedAt = serializers.DateTimeField(source="deletion_requested_at")
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = PartnerTransaction
        fields = [
            "id",
            "senderTenantId",
            "senderTenantName",
            "receiverTenantId",
            "receiverTenantName",
            "requestId",
            "reservationId",
            "activityId",
            "guestCount",
            "unitPrice",
            "currency",
            "totalPrice",
            "paymentCollectionType",
            "amountCollectedBySender",
            "outstandingAmount",
            "status",
            "deletionStatus",
            "deletionRequestedByTenantId",
            "deletionRejectionReason",
            "deletionRequestedAt",
            "version",
            "createdAt",
        ]
        read_only_fields = fields


class DeletionDecisionSerializer(serializers.Serializer):
    version = serializers.IntegerField(required=False, min_value=0)


class DeletionRejectSerializer(DeletionDecisionSerializer):
    # Presence is enforced by the ledger so the error carries its code
    reason = serializers.CharField(required=False, allow_blank=True, default="")
