"""Notification delivery log.

Every attempt to reach a tenant through WhatsApp leaves one row here,
successful or not. Delivery failures never undo the transition that
triggered them; this log is how operators find out about them.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class NotificationLog(models.Model):
    class Status(models.TextChoices):
        SENT = "sent", _("Gönderildi")
        FAILED = "failed", _("Başarısız")
        SKIPPED = "skipped", _("Atlandı")

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notification_logs",
    )
    reservation_request = models.ForeignKey(
        "exchange.ReservationRequest",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notification_logs",
    )
    event = models.CharField(max_length=32)
    channel = models.CharField(max_length=16, default="whatsapp")
    phone = models.CharField(max_length=32, blank=True)
    message = models.TextField()
    status = models.CharField(max_length=16, choices=Status.choices)
    error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Bildirim kaydı")
        verbose_name_plural = _("Bildirim kayıtları")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.event} -> {self.phone} ({self.status})"
