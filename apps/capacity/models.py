"""Capacity slot model."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CapacitySlot(models.Model):
    """Kontenjan: (acente, aktivite, tarih, saat) için toplam ve dolu kişi sayısı."""

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="capacity_slots",
    )
    activity = models.ForeignKey(
        "tenants.Activity",
        on_delete=models.CASCADE,
        related_name="capacity_slots",
    )
    date = models.DateField()
    time = models.TimeField()
    total_slots = models.PositiveIntegerField()
    booked_slots = models.PositiveIntegerField(default=0)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Kontenjan")
        verbose_name_plural = _("Kontenjanlar")
        ordering = ["date", "time"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "activity", "date", "time"],
                name="capacity_slot_unique_key",
            ),
            models.CheckConstraint(
                condition=models.Q(booked_slots__lte=models.F("total_slots")),
                name="capacity_slot_not_overbooked",
            ),
        ]
        indexes = [
            models.Index(fields=["activity", "date"], name="capacity_slot_activity_date"),
        ]

    def __str__(self) -> str:
        return f"{self.activity_id} {self.date} {self.time:%H:%M} ({self.booked_slots}/{self.total_slots})"

    @property
    def available_slots(self) -> int:
        return max(self.total_slots - self.booked_slots, 0)
