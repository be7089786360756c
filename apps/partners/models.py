"""Partnership and activity sharing models for Turlink."""

from __future__ import annotations

import secrets

from django.db import models  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class PartnershipQuerySet(models.QuerySet):
    def involving(self, tenant):  # type: ignore
        return self.filter(Q(tenant=tenant) | Q(partner_tenant=tenant))

    def between(self, first, second):  # type: ignore
        return self.filter(
            Q(tenant=first, partner_tenant=second) | Q(tenant=second, partner_tenant=first)
        )

    def active(self):  # type: ignore
        return self.filter(status=Partnership.Status.ACTIVE)


class Partnership(models.Model):
    """
    İki acente arasındaki ortaklık.

    ``tenant`` daveti gönderen, ``partner_tenant`` daveti kabul eden taraftır.
    Ortaklık aktif olduktan sonra ilişki iki yönlüdür: her iki taraf da
    paylaştığı aktiviteleri diğerine açabilir.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Onay bekliyor")
        ACTIVE = "active", _("Aktif")
        REVOKED = "revoked", _("İptal edildi")

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="sent_partnerships",
    )
    partner_tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="received_partnerships",
    )
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    invite_code = models.CharField(max_length=32, unique=True, editable=False)
    accepted_at = models.DateTimeField(null=True, blank=True)
    revoked_at = models.DateTimeField(null=True, blank=True)
    revoked_by = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PartnershipQuerySet.as_manager()

    class Meta:
        verbose_name = _("Ortaklık")
        verbose_name_plural = _("Ortaklıklar")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "partner_tenant"],
                name="partnership_unique_pair",
            ),
            models.CheckConstraint(
                condition=~Q(tenant=models.F("partner_tenant")),
                name="partnership_distinct_tenants",
            ),
        ]

    def __str__(self) -> str:
        return f"Partnership {self.tenant_id} <-> {self.partner_tenant_id} ({self.status})"

    def save(self, *args, **kwargs):  # type: ignore
        if not self.invite_code:
            self.invite_code = self.generate_invite_code()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_invite_code() -> str:
        return secrets.token_hex(8).upper()

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    def involves(self, tenant) -> bool:  # type: ignore
        tenant_id = getattr(tenant, "pk", tenant)
        return tenant_id in (self.tenant_id, self.partner_tenant_id)

    def other_party_id(self, tenant) -> int:  # type: ignore
        tenant_id = getattr(tenant, "pk", tenant)
        return self.partner_tenant_id if tenant_id == self.tenant_id else self.tenant_id


class ActivityShare(models.Model):
    """An activity's capacity exposed to the other side of a partnership."""

    activity = models.ForeignKey(
        "tenants.Activity",
        on_delete=models.CASCADE,
        related_name="shares",
    )
    partnership = models.ForeignKey(
        Partnership,
        on_delete=models.CASCADE,
        related_name="shares",
    )
    partner_unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Ortağa özel kişi başı fiyat. Boşsa aktivitenin fiyatı kullanılır."),
    )
    currency = models.CharField(max_length=3, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Paylaşılan aktivite")
        verbose_name_plural = _("Paylaşılan aktiviteler")
        ordering = ["activity_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["activity", "partnership"],
                name="activity_share_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"Share activity {self.activity_id} via partnership {self.partnership_id}"

    @property
    def unit_price(self):  # type: ignore
        if self.partner_unit_price is not None:
            return self.partner_unit_price
        return self.activity.price

    @property
    def effective_currency(self) -> str:
        return self.currency or self.activity.display_currency
