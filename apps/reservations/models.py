"""Reservation models for Turlink."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Reservation(models.Model):
    """Rezervasyon: acentenin kendi kontenjanındaki kesin kayıt."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Beklemede")
        CONFIRMED = "confirmed", _("Onaylandı")
        CANCELLED = "cancelled", _("İptal edildi")

    class Source(models.TextChoices):
        DIRECT = "direct", _("Doğrudan")
        EXTERNAL = "external", _("Harici kanal")
        PARTNER = "partner", _("Partner talebi")

    # Statuses that hold seats in the capacity ledger
    ACTIVE_STATUSES = (Status.PENDING, Status.CONFIRMED)

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    activity = models.ForeignKey(
        "tenants.Activity",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    customer_name = models.CharField(max_length=255)
    customer_phone = models.CharField(max_length=32, blank=True)
    customer_email = models.EmailField(blank=True)
    date = models.DateField()
    time = models.TimeField()
    quantity = models.PositiveIntegerField(default=1)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Toplam tutar."),
    )
    currency = models.CharField(max_length=3, default="TRY")
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    source = models.CharField(
        max_length=16,
        choices=Source.choices,
        default=Source.DIRECT,
    )
    external_id = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text=_("Harici satış kanalındaki sipariş numarası."),
    )
    source_request = models.OneToOneField(
        "exchange.ReservationRequest",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reservation",
    )
    notes = models.TextField(blank=True)
    tracking_token = models.CharField(max_length=32, unique=True, null=True, blank=True, editable=False)
    tracking_token_expires_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Rezervasyon")
        verbose_name_plural = _("Rezervasyonlar")
        ordering = ["-date", "-time"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "external_id"],
                name="reservation_unique_external_id",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "activity", "date", "time"], name="reservation_slot_key"),
            models.Index(fields=["status"], name="reservation_status"),
        ]

    def __str__(self) -> str:
        return f"Reservation #{self.pk} {self.customer_name} {self.date} {self.time:%H:%M}"

    @staticmethod
    def generate_tracking_token() -> str:
        return secrets.token_hex(16)

    def starts_at(self) -> datetime:
        naive = datetime.combine(self.date, self.time)
        return timezone.make_aware(naive) if settings.USE_TZ else naive

    def issue_tracking_token(self) -> None:
        self.tracking_token = self.generate_tracking_token()
        self.tracking_token_expires_at = self.starts_at() + timedelta(hours=settings.TRACKING_TOKEN_TTL_HOURS)

    @property
    def is_active(self) -> bool:
        return self.status in self.ACTIVE_STATUSES

    def tracking_expired(self, now: datetime | None = None) -> bool:
        # Links issued without a validity window never lapse
        if self.tracking_token_expires_at is None:
            return False
        return (now or timezone.now()) > self.tracking_token_expires_at
