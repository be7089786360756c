"""Reservation request state machine.

::

    pending --approve--> approved --convert--> converted
       |                    |
       +--reject--> rejected
       +--cancel--> cancelled <--cancel--+
       +--delete--> deleted

Seats are claimed from the owner's capacity when a request is approved,
so a second approval racing for the last seat fails with CapacityExceeded.
Conversion reuses that claim; cancelling an approved request gives it
back. Each transition runs in one transaction together with its capacity
change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Case, IntegerField, Value, When  # type: ignore
from django.utils import timezone  # type: ignore

from apps.capacity import services as capacity
from apps.finances import services as ledger
from apps.partners.services import find_share
from apps.reservations import services as reservations
from shared.db import lock_queryset_if_possible
from shared.exceptions import (
    CapacityExceeded,
    InvalidInput,
    InvalidStateTransition,
    UnauthorizedParty,
)
from shared.masking import mask_phone

from .models import OriginKind, ReservationRequest

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.finances.models import PartnerTransaction
    from apps.reservations.models import Reservation
    from apps.tenants.models import Activity, Tenant
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)

Status = ReservationRequest.Status
Collection = ReservationRequest.PaymentCollection


def _lock_request(request_id: int) -> ReservationRequest:
    queryset = ReservationRequest.objects.filter(pk=request_id).select_related("activity")
    request = lock_queryset_if_possible(queryset).first()
    if request is None:
        raise UnauthorizedParty("Talep bulunamadı.", request_id=request_id)
    return request


def _require_owner(request: ReservationRequest, tenant: "Tenant") -> None:
    if request.owner_tenant_id != tenant.pk:
        raise UnauthorizedParty(
            "Bu talep hakkında yalnızca aktivite sahibi acente karar verebilir.",
            request_id=request.pk,
        )


def _require_sender(request: ReservationRequest, tenant: "Tenant") -> None:
    if not request.is_sent_by(tenant):
        raise UnauthorizedParty(
            "Bu talebi yalnızca gönderen acente değiştirebilir.",
            request_id=request.pk,
        )


def _require_live_share(request: ReservationRequest) -> None:
    """Partner requests are decided only while the activity is still shared with the sender."""

    if request.origin_kind != OriginKind.PARTNER or not request.origin_tenant_id:
        return
    if request.origin_tenant_id == request.owner_tenant_id:
        return
    if find_share(request.activity, request.origin_tenant) is None:
        raise UnauthorizedParty(
            "Bu aktivite artık gönderen acenteyle paylaşılmıyor; talep yalnızca iptal edilebilir.",
            request_id=request.pk,
            origin_tenant_id=request.origin_tenant_id,
        )


def _require_status(request: ReservationRequest, allowed: tuple, action: str) -> None:
    if request.status not in allowed:
        logger.warning(f"Rejected {action} on request {request.pk} in status {request.status}")
        raise InvalidStateTransition(
            f"'{request.get_status_display()}' durumundaki talep için bu işlem yapılamaz.",
            request_id=request.pk,
            status=request.status,
            action=action,
        )


def validate_collection(collection_type: str, amount: Decimal, total: Decimal) -> None:
    """
    The amount the sender took from the customer must fit the collection
    type: nothing for ``receiver_full``, everything for ``sender_full`` and
    strictly in between for ``sender_partial``.
    """

    if collection_type not in Collection.values:
        raise InvalidInput("Geçersiz ödeme tahsilat tipi.", payment_collection_type=collection_type)
    if amount < 0:
        raise InvalidInput("Tahsil edilen tutar negatif olamaz.", amount_collected_by_sender=str(amount))

    if collection_type == Collection.RECEIVER_FULL and amount != 0:
        raise InvalidInput(
            "Ödemenin tamamı alıcı acentede ise gönderen tutar tahsil etmemiş olmalı.",
            amount_collected_by_sender=str(amount),
        )
    if collection_type == Collection.SENDER_FULL and amount != total:
        raise InvalidInput(
            "Ödemenin tamamı gönderende ise tahsil edilen tutar toplam fiyata eşit olmalı.",
            amount_collected_by_sender=str(amount),
            total_price=str(total),
        )
    if collection_type == Collection.SENDER_PARTIAL and not (0 < amount < total):
        raise InvalidInput(
            "Kısmi tahsilat sıfırdan büyük ve toplam fiyattan küçük olmalı.",
            amount_collected_by_sender=str(amount),
            total_price=str(total),
        )


# ============================================================================
# CREATION
# ============================================================================

def create_request(
    by_user: "CustomUser",
    activity: "Activity",
    *,
    slot_date: date,
    slot_time: time,
    customer_name: str,
    customer_phone: str,
    guests: int,
    notes: Optional[str] = None,
    payment_collection_type: str = Collection.RECEIVER_FULL,
    amount_collected_by_sender: Decimal = Decimal("0.00"),
) -> ReservationRequest:
    """
    Place a customer into ``activity``'s capacity.

    Partner tenants need an active partnership sharing the activity; the
    owner's own users (viewers) may request directly. Availability is
    checked here as a courtesy and again, authoritatively, on approval.
    """

    sender = by_user.tenant
    if guests < 1:
        raise InvalidInput("Kişi sayısı en az 1 olmalıdır.", guests=guests)
    slot_time = capacity.parse_slot_time(slot_time)

    if activity.tenant_id == sender.pk:
        origin_kind = OriginKind.VIEWER
        unit_price = activity.price
        currency = activity.display_currency
    else:
        share = find_share(activity, sender)
        if share is None:
            raise UnauthorizedParty(
                "Bu aktivite acentenizle paylaşılmıyor.",
                activity_id=activity.pk,
            )
        origin_kind = OriginKind.PARTNER
        unit_price = share.unit_price
        currency = share.effective_currency

    if not activity.is_active:
        raise InvalidInput("Aktivite satışa kapalı.", activity_id=activity.pk)
    if not capacity.is_bookable_session(activity, slot_date, slot_time):
        raise InvalidInput(
            "Seçilen saatte seans bulunmuyor.",
            date=str(slot_date),
            time=slot_time.strftime("%H:%M"),
        )

    available = capacity.available_slots(activity, slot_date, slot_time)
    if guests > available:
        raise CapacityExceeded(requested=guests, available_slots=available)

    validate_collection(payment_collection_type, amount_collected_by_sender, unit_price * guests)

    request = ReservationRequest.objects.create(
        owner_tenant_id=activity.tenant_id,
        activity=activity,
        date=slot_date,
        time=slot_time,
        customer_name=customer_name,
        customer_phone=customer_phone,
        guests=guests,
        notes=notes or None,
        payment_collection_type=payment_collection_type,
        amount_collected_by_sender=amount_collected_by_sender,
        unit_price=unit_price,
        currency=currency,
        origin_kind=origin_kind,
        origin_tenant=sender,
        requested_by=by_user,
    )
    logger.info(
        f"Request {request.pk} created by tenant {sender.pk} ({origin_kind}) for tenant "
        f"{activity.tenant_id}: activity {activity.pk} {slot_date} {slot_time:%H:%M} x{guests}, "
        f"customer {mask_phone(customer_phone)}"
    )
    return request


# ============================================================================
# OWNER DECISIONS
# ============================================================================

@transaction.atomic
def approve(request_id: int, by_user: "CustomUser", process_notes: Optional[str] = None) -> ReservationRequest:
    request = _lock_request(request_id)
    _require_owner(request, by_user.tenant)
    _require_status(request, (Status.PENDING,), "approve")
    _require_live_share(request)

    # Raises CapacityExceeded and rolls back if the seats are gone by now
    capacity.claim(request.activity, request.date, request.time, request.guests)

    request.status = Status.APPROVED
    request.processed_by = by_user
    request.processed_at = timezone.now()
    if process_notes:
        request.process_notes = process_notes
    request.save(update_fields=["status", "processed_by", "processed_at", "process_notes", "updated_at"])
    logger.info(f"Request {request.pk} approved by tenant {by_user.tenant_id}")
    return request


@transaction.atomic
def reject(request_id: int, by_user: "CustomUser", process_notes: Optional[str] = None) -> ReservationRequest:
    request = _lock_request(request_id)
    _require_owner(request, by_user.tenant)
    _require_status(request, (Status.PENDING,), "reject")

    request.status = Status.REJECTED
    request.processed_by = by_user
    request.processed_at = timezone.now()
    request.process_notes = process_notes or None
    request.save(update_fields=["status", "processed_by", "processed_at", "process_notes", "updated_at"])
    logger.info(f"Request {request.pk} rejected by tenant {by_user.tenant_id}")
    return request


@dataclass
class ConversionResult:
    request: ReservationRequest
    reservation: "Reservation"
    transaction: Optional["PartnerTransaction"]
    created: bool

    @property
    def reservation_id(self) -> int:
        return self.reservation.pk


def _existing_conversion(request: ReservationRequest) -> ConversionResult:
    from apps.finances.models import PartnerTransaction
    from apps.reservations.models import Reservation

    reservation = Reservation.objects.get(source_request=request)
    txn = PartnerTransaction.objects.filter(reservation_request=request).first()
    return ConversionResult(request=request, reservation=reservation, transaction=txn, created=False)


@transaction.atomic
def convert(request_id: int, by_user: "CustomUser") -> ConversionResult:
    """
    Turn an approved request into a Reservation and, for partner requests,
    a PartnerTransaction.

    Safe to call again: an already converted request returns the existing
    reservation without booking or claiming anything a second time.
    """

    request = _lock_request(request_id)
    _require_owner(request, by_user.tenant)

    if request.status == Status.CONVERTED:
        logger.info(f"Request {request.pk} already converted; returning existing reservation")
        return _existing_conversion(request)
    _require_status(request, (Status.APPROVED,), "convert")
    _require_live_share(request)

    try:
        with transaction.atomic():
            reservation = reservations.attach_converted_reservation(
                request,
                price=request.total_price,
                currency=request.currency,
            )
    except IntegrityError:
        # Lost a race with a concurrent convert of the same request
        return _existing_conversion(request)

    txn = None
    if request.origin_tenant_id and request.origin_tenant_id != request.owner_tenant_id:
        txn, _ = ledger.create_for_conversion(request, reservation)

    request.status = Status.CONVERTED
    request.processed_by = by_user
    request.processed_at = timezone.now()
    request.save(update_fields=["status", "processed_by", "processed_at", "updated_at"])
    logger.info(
        f"Request {request.pk} converted by tenant {by_user.tenant_id}: reservation {reservation.pk}"
        + (f", partner transaction {txn.pk}" if txn else "")
    )
    return ConversionResult(request=request, reservation=reservation, transaction=txn, created=True)


# ============================================================================
# SENDER ACTIONS
# ============================================================================

@transaction.atomic
def cancel(request_id: int, by_user: "CustomUser", reason: Optional[str] = None) -> ReservationRequest:
    """Withdraw a pending or approved request. An approved one gives its seats back."""

    request = _lock_request(request_id)
    _require_sender(request, by_user.tenant)
    _require_status(request, (Status.PENDING, Status.APPROVED), "cancel")

    if request.status == Status.APPROVED:
        capacity.release(request.activity, request.date, request.time, request.guests)

    request.status = Status.CANCELLED
    if reason:
        request.process_notes = reason
    request.save(update_fields=["status", "process_notes", "updated_at"])
    logger.info(f"Request {request.pk} cancelled by tenant {by_user.tenant_id}")
    return request


@transaction.atomic
def delete_request(request_id: int, by_user: "CustomUser") -> ReservationRequest:
    """Soft-delete an outgoing request the owner has not acted on yet."""

    request = _lock_request(request_id)
    _require_sender(request, by_user.tenant)
    if request.status == Status.CONVERTED:
        raise InvalidStateTransition(
            "Rezervasyona dönüşmüş talep silinemez; ilgili partner işlemi için silme talebi açın.",
            request_id=request.pk,
            status=request.status,
            action="delete",
        )
    _require_status(request, (Status.PENDING,), "delete")

    request.status = Status.DELETED
    request.save(update_fields=["status", "updated_at"])
    logger.info(f"Request {request.pk} deleted by tenant {by_user.tenant_id}")
    return request


# ============================================================================
# LISTINGS
# ============================================================================

def incoming_requests(tenant: "Tenant", status: Optional[str] = None):  # type: ignore
    """
    Operator inbox: requests placed into ``tenant``'s capacity.

    Requests of unknown origin are listed like any other. Pending ones come
    first.
    """

    queryset = (
        ReservationRequest.objects.filter(owner_tenant=tenant)
        .exclude(status=Status.DELETED)
        .select_related("activity", "origin_tenant", "requested_by")
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset.annotate(
        _pending_first=Case(
            When(status=Status.PENDING, then=Value(0)),
            default=Value(1),
            output_field=IntegerField(),
        )
    ).order_by("_pending_first", "-created_at")


def outgoing_requests(tenant: "Tenant"):  # type: ignore
    return ReservationRequest.objects.filter(origin_tenant=tenant).select_related("activity", "owner_tenant")
