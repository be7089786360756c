"""Reservation request models for the partner exchange."""

from __future__ import annotations

import re
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class OriginKind(models.TextChoices):
    VIEWER = "viewer", _("İzleyici")
    PARTNER = "partner", _("Partner")
    UNKNOWN = "unknown", _("Bilinmiyor")


# Markers older clients embedded in the notes, e.g. "[Partner: Ege Tur]"
_VIEWER_MARKER = re.compile(r"\[(?:Viewer|İzleyici)\s*:", re.IGNORECASE)
_PARTNER_MARKER = re.compile(r"\[Partner\s*:", re.IGNORECASE)


def classify_requester(notes: str | None) -> str:
    """
    Infer the origin of a request from its free-text notes.

    Only used for rows created before ``origin_kind`` existed. A request
    without a recognised marker is ``unknown``, never discarded.
    """

    if not notes:
        return OriginKind.UNKNOWN
    if _PARTNER_MARKER.search(notes):
        return OriginKind.PARTNER
    if _VIEWER_MARKER.search(notes):
        return OriginKind.VIEWER
    return OriginKind.UNKNOWN


class ReservationRequest(models.Model):
    """
    Başka bir acentenin kontenjanına müşteri yerleştirme talebi.

    pending -> approved -> converted
    pending -> rejected | cancelled | deleted
    approved -> cancelled
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Beklemede")
        APPROVED = "approved", _("Onaylandı")
        REJECTED = "rejected", _("Reddedildi")
        CONVERTED = "converted", _("Rezervasyona dönüştürüldü")
        CANCELLED = "cancelled", _("İptal edildi")
        DELETED = "deleted", _("Silindi")

    class PaymentCollection(models.TextChoices):
        RECEIVER_FULL = "receiver_full", _("Tamamı alıcı acentede")
        SENDER_FULL = "sender_full", _("Tamamı gönderen acentede")
        SENDER_PARTIAL = "sender_partial", _("Kısmi ödeme gönderen acentede")

    TERMINAL_STATUSES = (Status.REJECTED, Status.CONVERTED, Status.CANCELLED, Status.DELETED)

    owner_tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="incoming_requests",
    )
    activity = models.ForeignKey(
        "tenants.Activity",
        on_delete=models.PROTECT,
        related_name="reservation_requests",
    )
    date = models.DateField()
    time = models.TimeField()
    customer_name = models.CharField(max_length=255)
    customer_phone = models.CharField(max_length=32)
    guests = models.PositiveIntegerField()
    notes = models.TextField(null=True, blank=True)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_collection_type = models.CharField(
        max_length=16,
        choices=PaymentCollection.choices,
        default=PaymentCollection.RECEIVER_FULL,
    )
    amount_collected_by_sender = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Talep anındaki partner kişi başı fiyatı."),
    )
    currency = models.CharField(max_length=3, default="TRY")
    origin_kind = models.CharField(
        max_length=16,
        choices=OriginKind.choices,
        default=OriginKind.UNKNOWN,
    )
    origin_tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="outgoing_requests",
    )
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sent_reservation_requests",
    )
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="processed_reservation_requests",
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    process_notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Rezervasyon talebi")
        verbose_name_plural = _("Rezervasyon talepleri")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner_tenant", "status"], name="request_owner_status"),
            models.Index(fields=["origin_tenant", "status"], name="request_origin_status"),
        ]

    def __str__(self) -> str:
        return f"Request #{self.pk} {self.customer_name} -> tenant {self.owner_tenant_id} ({self.status})"

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.guests

    @property
    def requester_type(self) -> str:
        if self.origin_kind != OriginKind.UNKNOWN:
            return self.origin_kind
        return classify_requester(self.notes)

    @property
    def converted_reservation_id(self) -> int | None:
        if self.status != self.Status.CONVERTED:
            return None
        reservation = getattr(self, "reservation", None)
        return reservation.pk if reservation is not None else None

    def is_sent_by(self, tenant) -> bool:  # type: ignore
        tenant_id = getattr(tenant, "pk", tenant)
        return self.origin_tenant_id is not None and self.origin_tenant_id == tenant_id
