"""Partner share registry services.

A partnership is the authorization boundary of the exchange: capacity of
another tenant is visible only through an ActivityShare whose partnership
is active. Revoking hides the shares without deleting them, so accepting
the partnership again restores what was shared before.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.capacity import services as capacity
from shared.db import lock_queryset_if_possible
from shared.exceptions import InvalidInput, InvalidStateTransition, UnauthorizedParty

from .models import ActivityShare, Partnership

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.tenants.models import Activity, Tenant

logger = logging.getLogger(__name__)

MAX_AVAILABILITY_DAYS = 62


@transaction.atomic
def invite_partner(by_tenant: "Tenant", partner_tenant: "Tenant") -> Partnership:
    """
    Open a pending partnership towards ``partner_tenant``.

    Inviting a tenant you already have a revoked partnership with reopens
    that row, so previously shared activities come back on acceptance.
    """

    if by_tenant.pk == partner_tenant.pk:
        raise InvalidInput("Kendi acentenizle ortaklık kuramazsınız.")

    existing = lock_queryset_if_possible(Partnership.objects.between(by_tenant, partner_tenant)).first()
    if existing is None:
        partnership = Partnership.objects.create(tenant=by_tenant, partner_tenant=partner_tenant)
        logger.info(f"Partnership {partnership.pk} invited: {by_tenant.pk} -> {partner_tenant.pk}")
        return partnership

    if existing.status != Partnership.Status.REVOKED:
        raise InvalidStateTransition(
            "Bu acenteyle zaten bir ortaklık var.",
            partnership_id=existing.pk,
            status=existing.status,
        )

    existing.tenant = by_tenant
    existing.partner_tenant = partner_tenant
    existing.status = Partnership.Status.PENDING
    existing.invite_code = Partnership.generate_invite_code()
    existing.accepted_at = None
    existing.revoked_at = None
    existing.revoked_by = None
    existing.save()
    logger.info(f"Partnership {existing.pk} re-invited: {by_tenant.pk} -> {partner_tenant.pk}")
    return existing


@transaction.atomic
def accept_partnership(invite_code: str, by_tenant: "Tenant") -> Partnership:
    code = (invite_code or "").strip().upper()
    partnership = lock_queryset_if_possible(Partnership.objects.filter(invite_code=code)).first()
    if partnership is None:
        raise InvalidInput("Davet kodu geçersiz.", invite_code=code)
    if partnership.partner_tenant_id != by_tenant.pk:
        raise UnauthorizedParty("Bu davet sizin acentenize gönderilmedi.", partnership_id=partnership.pk)
    if partnership.status != Partnership.Status.PENDING:
        raise InvalidStateTransition(
            "Davet artık geçerli değil.",
            partnership_id=partnership.pk,
            status=partnership.status,
        )

    partnership.status = Partnership.Status.ACTIVE
    partnership.accepted_at = timezone.now()
    partnership.save(update_fields=["status", "accepted_at", "updated_at"])
    logger.info(f"Partnership {partnership.pk} accepted by tenant {by_tenant.pk}")
    return partnership


@transaction.atomic
def revoke_partnership(partnership_id: int, by_tenant: "Tenant") -> Partnership:
    """Either party may end the partnership. Shares are kept but stop being visible."""

    partnership = lock_queryset_if_possible(Partnership.objects.filter(pk=partnership_id)).first()
    if partnership is None or not partnership.involves(by_tenant):
        raise UnauthorizedParty("Bu ortaklığın tarafı değilsiniz.", partnership_id=partnership_id)
    if partnership.status == Partnership.Status.REVOKED:
        raise InvalidStateTransition(
            "Ortaklık zaten iptal edilmiş.",
            partnership_id=partnership.pk,
            status=partnership.status,
        )

    partnership.status = Partnership.Status.REVOKED
    partnership.revoked_at = timezone.now()
    partnership.revoked_by = by_tenant
    partnership.save(update_fields=["status", "revoked_at", "revoked_by", "updated_at"])
    logger.info(f"Partnership {partnership.pk} revoked by tenant {by_tenant.pk}")
    return partnership


def share_activity(
    activity: "Activity",
    partnership: Partnership,
    price: Optional[Decimal] = None,
    currency: Optional[str] = None,
) -> ActivityShare:
    """
    Expose ``activity`` to the other party of ``partnership``.

    Sharing an already shared activity updates its partner price/currency.
    """

    if not partnership.involves(activity.tenant_id):
        raise UnauthorizedParty(
            "Aktivite bu ortaklığın taraflarından birine ait değil.",
            activity_id=activity.pk,
            partnership_id=partnership.pk,
        )
    if partnership.status == Partnership.Status.REVOKED:
        raise InvalidStateTransition(
            "İptal edilmiş bir ortaklıkla aktivite paylaşılamaz.",
            partnership_id=partnership.pk,
            status=partnership.status,
        )
    if price is not None and price < 0:
        raise InvalidInput("Fiyat negatif olamaz.", price=str(price))

    share, created = ActivityShare.objects.update_or_create(
        activity=activity,
        partnership=partnership,
        defaults={
            "partner_unit_price": price,
            "currency": (currency or "").upper(),
        },
    )
    logger.info(
        f"Activity {activity.pk} {'shared' if created else 'share updated'} "
        f"via partnership {partnership.pk}"
    )
    return share


def unshare(activity: "Activity", partnership: Partnership) -> bool:
    deleted, _ = ActivityShare.objects.filter(activity=activity, partnership=partnership).delete()
    if deleted:
        logger.info(f"Activity {activity.pk} unshared from partnership {partnership.pk}")
    return bool(deleted)


def find_share(activity: "Activity", viewing_tenant: "Tenant") -> Optional[ActivityShare]:
    """The active share through which ``viewing_tenant`` may see ``activity``, if any."""

    if activity.tenant_id == viewing_tenant.pk:
        return None
    return (
        ActivityShare.objects.select_related("activity", "partnership")
        .filter(
            activity=activity,
            partnership__status=Partnership.Status.ACTIVE,
        )
        .filter(partnership__in=Partnership.objects.between(activity.tenant_id, viewing_tenant.pk))
        .first()
    )


@dataclass
class SharedActivity:
    activity_id: int
    name: str
    unit_price: Decimal
    currency: str
    capacities: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "activityId": self.activity_id,
            "name": self.name,
            "unitPrice": str(self.unit_price),
            "currency": self.currency,
            "capacities": [slot.to_dict() for slot in self.capacities],
        }


@dataclass
class PartnerAvailability:
    partner_tenant_id: int
    partner_tenant_name: str
    activities: list[SharedActivity] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "partnerTenantId": self.partner_tenant_id,
            "partnerTenantName": self.partner_tenant_name,
            "activities": [activity.to_dict() for activity in self.activities],
        }


def list_shared_availability(viewing_tenant: "Tenant", start: date, end: date) -> list[PartnerAvailability]:
    """
    Capacity of every activity partners share with ``viewing_tenant``,
    grouped per partner tenant. Only active partnerships are traversed.
    """

    if end < start:
        raise InvalidInput("Bitiş tarihi başlangıçtan önce olamaz.", start=str(start), end=str(end))
    if end - start > timedelta(days=MAX_AVAILABILITY_DAYS):
        raise InvalidInput(
            f"Tarih aralığı en fazla {MAX_AVAILABILITY_DAYS} gün olabilir.",
            start=str(start),
            end=str(end),
        )

    partnerships = Partnership.objects.involving(viewing_tenant).active()
    shares = (
        ActivityShare.objects.filter(
            partnership__in=partnerships,
            activity__is_active=True,
        )
        .exclude(activity__tenant=viewing_tenant)
        .select_related("activity", "activity__tenant")
        .order_by("activity__tenant__name", "activity__name")
    )

    grouped: dict[int, PartnerAvailability] = {}
    for share in shares:
        activity = share.activity
        partner = grouped.get(activity.tenant_id)
        if partner is None:
            partner = grouped[activity.tenant_id] = PartnerAvailability(
                partner_tenant_id=activity.tenant_id,
                partner_tenant_name=activity.tenant.name,
            )
        partner.activities.append(
            SharedActivity(
                activity_id=activity.pk,
                name=activity.name,
                unit_price=share.unit_price,
                currency=share.effective_currency,
                capacities=capacity.slots_for_range(activity, start, end),
            )
        )

    logger.debug(
        f"Shared availability for tenant {viewing_tenant.pk} {start}..{end}: "
        f"{len(grouped)} partners, {shares.count()} activities"
    )
    return list(grouped.values())
