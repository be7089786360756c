"""Dispatch (operational fulfillment) records."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Dispatch(models.Model):
    """
    Operasyon kaydı: müşterinin turdan fiilen yararlandığını gösterir.

    Rezervasyondan bağımsız girilir; ``reservation`` bağlantısı çoğu zaman
    boştur.
    """

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="dispatches",
    )
    reservation = models.ForeignKey(
        "reservations.Reservation",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="dispatches",
    )
    activity = models.ForeignKey(
        "tenants.Activity",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="dispatches",
    )
    dispatch_date = models.DateField()
    dispatch_time = models.TimeField(null=True, blank=True)
    customer_name = models.CharField(max_length=255, blank=True)
    guest_count = models.PositiveIntegerField(default=1)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Operasyon kaydı")
        verbose_name_plural = _("Operasyon kayıtları")
        ordering = ["-dispatch_date", "-created_at"]
        indexes = [
            models.Index(fields=["tenant", "dispatch_date"], name="dispatch_tenant_date"),
        ]

    def __str__(self) -> str:
        return f"Dispatch #{self.pk} {self.dispatch_date} {self.customer_name}"
