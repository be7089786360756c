"""Tenant and activity models for Turlink."""

from __future__ import annotations

from datetime import time
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Tenant(models.Model):
    """Tur operatörü / acente hesabı."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100, unique=True)
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)
    timezone = models.CharField(max_length=64, default="Europe/Istanbul")
    language = models.CharField(max_length=8, default="tr")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Acente")
        verbose_name_plural = _("Acenteler")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


def _default_times() -> list[str]:
    return []


class Activity(models.Model):
    """Bookable tour activity owned by a tenant."""

    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name="activities",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Kişi başı herkese açık fiyat."),
    )
    currency = models.CharField(max_length=3, default="TRY")
    duration_minutes = models.PositiveIntegerField(default=60)
    default_times = models.JSONField(
        default=_default_times,
        blank=True,
        help_text=_('Günlük seans saatleri, ör. ["09:00", "14:00"].'),
    )
    default_capacity = models.PositiveIntegerField(
        default=10,
        help_text=_("Kayıtlı kontenjanı olmayan seanslar için varsayılan kişi sayısı."),
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Aktivite")
        verbose_name_plural = _("Aktiviteler")
        ordering = ["tenant_id", "name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.tenant_id})"

    def clean(self) -> None:
        for value in self.default_times or []:
            try:
                time.fromisoformat(value)
            except (TypeError, ValueError):
                raise ValidationError(_("Geçersiz seans saati: %(value)s") % {"value": value})

    def session_times(self) -> list[time]:
        """Default daily start times, sorted and de-duplicated."""
        parsed = set()
        for value in self.default_times or []:
            try:
                parsed.add(time.fromisoformat(value))
            except (TypeError, ValueError):
                continue
        return sorted(parsed)

    @property
    def display_currency(self) -> str:
        return self.currency or settings.DEFAULT_CURRENCY
