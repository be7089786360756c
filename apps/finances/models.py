"""Settlement models for the partner exchange."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class PartnerTransactionQuerySet(models.QuerySet):
    def involving(self, tenant):  # type: ignore
        return self.filter(Q(sender_tenant=tenant) | Q(receiver_tenant=tenant))

    def active(self):  # type: ignore
        return self.filter(status=PartnerTransaction.Status.ACTIVE)


class PartnerTransaction(models.Model):
    """
    Partner işlemi: dönüştürülen her talep için tek bir mutabakat kaydı.

    Kayıt tek taraflı silinemez. Silme iki aşamalıdır: bir taraf talep eder,
    karşı taraf onaylar veya gerekçe ile reddeder. Onaylanan kayıt fiziksel
    olarak silinmez, ``retired`` durumuna geçer.
    """

    class Status(models.TextChoices):
        ACTIVE = "active", _("Aktif")
        RETIRED = "retired", _("Silindi (arşiv)")

    class DeletionStatus(models.TextChoices):
        PENDING = "pending", _("Silme onayı bekliyor")
        APPROVED = "approved", _("Silme onaylandı")
        REJECTED = "rejected", _("Silme reddedildi")

    sender_tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.PROTECT,
        related_name="sent_partner_transactions",
    )
    receiver_tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.PROTECT,
        related_name="received_partner_transactions",
    )
    reservation_request = models.OneToOneField(
        "exchange.ReservationRequest",
        on_delete=models.PROTECT,
        related_name="partner_transaction",
    )
    reservation = models.ForeignKey(
        "reservations.Reservation",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="partner_transactions",
    )
    activity = models.ForeignKey(
        "tenants.Activity",
        on_delete=models.PROTECT,
        related_name="partner_transactions",
    )
    guest_count = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="TRY")
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    payment_collection_type = models.CharField(max_length=16)
    amount_collected_by_sender = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    deletion_status = models.CharField(
        max_length=16,
        choices=DeletionStatus.choices,
        null=True,
        blank=True,
    )
    deletion_requested_by_tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    deletion_rejection_reason = models.TextField(null=True, blank=True)
    deletion_requested_at = models.DateTimeField(null=True, blank=True)
    deletion_resolved_at = models.DateTimeField(null=True, blank=True)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PartnerTransactionQuerySet.as_manager()

    class Meta:
        verbose_name = _("Partner işlemi")
        verbose_name_plural = _("Partner işlemleri")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["sender_tenant", "status"], name="ptx_sender_status"),
            models.Index(fields=["receiver_tenant", "status"], name="ptx_receiver_status"),
        ]

    def __str__(self) -> str:
        return f"PartnerTransaction #{self.pk} {self.sender_tenant_id} -> {self.receiver_tenant_id}"

    @property
    def outstanding_amount(self) -> Decimal:
        """Amount still owed to the receiver once the sender's collection is deducted."""
        return self.total_price - self.amount_collected_by_sender

    def is_party(self, tenant) -> bool:  # type: ignore
        tenant_id = getattr(tenant, "pk", tenant)
        return tenant_id in (self.sender_tenant_id, self.receiver_tenant_id)

    def counterparty_id(self, tenant) -> int:  # type: ignore
        tenant_id = getattr(tenant, "pk", tenant)
        return self.receiver_tenant_id if tenant_id == self.sender_tenant_id else self.sender_tenant_id
