"""Reservation services.

Every reservation, whatever its origin, holds seats through the capacity
ledger: creating one claims, cancelling one releases. Reservations that come
from a converted partner request are created by the exchange, which has
already claimed the seats at approval time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from django.conf import settings  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.capacity import services as capacity
from shared.db import lock_queryset_if_possible
from shared.exceptions import InvalidInput, InvalidStateTransition, UnauthorizedParty

from .models import Reservation

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.tenants.models import Activity, Tenant

logger = logging.getLogger(__name__)


class TrackingTokenExpired(Exception):
    """Raised when a tracking link is resolved after its validity window."""


def _validate_booking(tenant: "Tenant", activity: "Activity", slot_date: date, slot_time: time) -> None:
    if activity.tenant_id != tenant.pk:
        raise UnauthorizedParty("Aktivite bu acenteye ait değil.", activity_id=activity.pk)
    if not capacity.is_bookable_session(activity, slot_date, slot_time):
        raise InvalidInput(
            "Seçilen saatte seans bulunmuyor.",
            date=str(slot_date),
            time=str(slot_time),
        )


@transaction.atomic
def create_reservation(
    tenant: "Tenant",
    activity: "Activity",
    *,
    slot_date: date,
    slot_time: time,
    customer_name: str,
    quantity: int,
    customer_phone: str = "",
    customer_email: str = "",
    price: Optional[Decimal] = None,
    currency: str = "",
    notes: str = "",
    status: str = Reservation.Status.CONFIRMED,
    source: str = Reservation.Source.DIRECT,
    external_id: Optional[str] = None,
) -> Reservation:
    """Book seats directly into the tenant's own capacity."""

    slot_time = capacity.parse_slot_time(slot_time)
    _validate_booking(tenant, activity, slot_date, slot_time)
    capacity.claim(activity, slot_date, slot_time, quantity)

    if price is None:
        price = activity.price * quantity

    reservation = Reservation(
        tenant=tenant,
        activity=activity,
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_email=customer_email,
        date=slot_date,
        time=slot_time,
        quantity=quantity,
        price=price,
        currency=currency or activity.display_currency,
        status=status,
        source=source,
        external_id=external_id,
        notes=notes,
    )
    reservation.issue_tracking_token()
    reservation.save()
    logger.info(
        f"Reservation {reservation.pk} created ({source}) for tenant {tenant.pk}: "
        f"activity {activity.pk} {slot_date} {slot_time:%H:%M} x{quantity}"
    )
    return reservation


def import_external_reservation(tenant: "Tenant", activity: "Activity", external_id: str, **fields) -> tuple[Reservation, bool]:  # type: ignore
    """
    Import a booking sold on an external channel.

    Idempotent per ``(tenant, external_id)``: importing the same order again
    returns the existing reservation without claiming capacity twice.
    """

    if not external_id:
        raise InvalidInput("Harici sipariş numarası zorunludur.")

    existing = Reservation.objects.filter(tenant=tenant, external_id=external_id).first()
    if existing is not None:
        return existing, False

    try:
        with transaction.atomic():
            reservation = create_reservation(
                tenant,
                activity,
                source=Reservation.Source.EXTERNAL,
                external_id=external_id,
                **fields,
            )
    except IntegrityError:
        # A concurrent import of the same order won; its claim stands and ours rolled back
        logger.info(f"External reservation {external_id} for tenant {tenant.pk} imported concurrently")
        return Reservation.objects.get(tenant=tenant, external_id=external_id), False
    return reservation, True


def attach_converted_reservation(request, *, price: Decimal, currency: str) -> Reservation:  # type: ignore
    """
    Create the owner-side reservation for a converted partner request.

    Seats were claimed when the request was approved, so nothing is claimed
    here. Must run inside the conversion transaction.
    """

    reservation = Reservation(
        tenant_id=request.owner_tenant_id,
        activity=request.activity,
        customer_name=request.customer_name,
        customer_phone=request.customer_phone,
        date=request.date,
        time=request.time,
        quantity=request.guests,
        price=price,
        currency=currency,
        status=Reservation.Status.CONFIRMED,
        source=Reservation.Source.PARTNER,
        source_request=request,
        notes=request.notes or "",
    )
    reservation.issue_tracking_token()
    reservation.save()
    return reservation


@transaction.atomic
def cancel_reservation(reservation_id: int, by_tenant: "Tenant") -> Reservation:
    reservation = lock_queryset_if_possible(Reservation.objects.filter(pk=reservation_id)).select_related("activity").first()
    if reservation is None or reservation.tenant_id != by_tenant.pk:
        raise UnauthorizedParty("Bu rezervasyon acentenize ait değil.", reservation_id=reservation_id)
    if reservation.status == Reservation.Status.CANCELLED:
        raise InvalidStateTransition(
            "Rezervasyon zaten iptal edilmiş.",
            reservation_id=reservation.pk,
            status=reservation.status,
        )

    reservation.status = Reservation.Status.CANCELLED
    reservation.cancelled_at = timezone.now()
    reservation.save(update_fields=["status", "cancelled_at", "updated_at"])
    capacity.release(reservation.activity, reservation.date, reservation.time, reservation.quantity)
    logger.info(f"Reservation {reservation.pk} cancelled by tenant {by_tenant.pk}")
    return reservation


@dataclass(frozen=True)
class TrackingView:
    reservation_id: int
    status: str
    activity_name: str
    date: date
    time: time
    quantity: int
    price: Decimal
    currency: str
    customer_name: str

    def to_dict(self) -> dict:
        return {
            "reservationId": self.reservation_id,
            "status": self.status,
            "activity": self.activity_name,
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M"),
            "quantity": self.quantity,
            "price": str(self.price),
            "currency": self.currency,
            "customerName": self.customer_name,
        }


def resolve_tracking(token: str) -> Optional[TrackingView]:
    """
    Public view of the reservation behind ``token``.

    Returns ``None`` for an unknown token and raises TrackingTokenExpired
    once the link's validity window has passed.
    """

    reservation = (
        Reservation.objects.select_related("activity")
        .filter(tracking_token=token)
        .first()
    )
    if reservation is None:
        return None
    if reservation.tracking_expired():
        raise TrackingTokenExpired(token)
    return TrackingView(
        reservation_id=reservation.pk,
        status=reservation.status,
        activity_name=reservation.activity.name,
        date=reservation.date,
        time=reservation.time,
        quantity=reservation.quantity,
        price=reservation.price,
        currency=reservation.currency or settings.DEFAULT_CURRENCY,
        customer_name=reservation.customer_name,
    )


def clear_expired_tracking_tokens(now=None) -> int:  # type: ignore
    now = now or timezone.now()
    return Reservation.objects.filter(
        tracking_token__isnull=False,
        tracking_token_expires_at__lt=now,
    ).update(tracking_token=None)
