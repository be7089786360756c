"""Capacity ledger services.

``available = total_slots - booked_slots`` for a (tenant, activity, date,
time) key. Claims and releases lock the slot row and apply a conditional
``UPDATE`` so that two concurrent claims on the last seat cannot both
succeed, even on backends without ``SELECT ... FOR UPDATE``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import F, Sum  # type: ignore

from shared.db import lock_queryset_if_possible
from shared.exceptions import CapacityExceeded, InvalidInput

from .models import CapacitySlot

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.tenants.models import Activity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotAvailability:
    """Read view of one slot, stored or derived from activity defaults."""

    date: date
    time: time
    total_slots: int
    booked_slots: int
    slot_id: int | None = None

    @property
    def available_slots(self) -> int:
        return max(self.total_slots - self.booked_slots, 0)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M"),
            "totalSlots": self.total_slots,
            "bookedSlots": self.booked_slots,
            "availableSlots": self.available_slots,
        }


def parse_slot_time(value) -> time:  # type: ignore
    """Accept ``time`` objects or "HH:MM" strings; seconds are dropped."""

    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        return time.fromisoformat(str(value)).replace(second=0, microsecond=0)
    except ValueError:
        raise InvalidInput("Saat HH:MM formatında olmalıdır.", time=str(value))


def _slot_filter(activity: "Activity", slot_date: date, slot_time: time):
    return CapacitySlot.objects.filter(
        tenant_id=activity.tenant_id,
        activity=activity,
        date=slot_date,
        time=slot_time,
    )


def get_slot(activity: "Activity", slot_date: date, slot_time) -> SlotAvailability:  # type: ignore
    """Current availability for one key; falls back to the activity default."""

    slot_time = parse_slot_time(slot_time)
    slot = _slot_filter(activity, slot_date, slot_time).first()
    if slot is not None:
        return SlotAvailability(
            date=slot.date,
            time=slot.time,
            total_slots=slot.total_slots,
            booked_slots=slot.booked_slots,
            slot_id=slot.pk,
        )
    return SlotAvailability(
        date=slot_date,
        time=slot_time,
        total_slots=activity.default_capacity,
        booked_slots=0,
    )


def available_slots(activity: "Activity", slot_date: date, slot_time) -> int:  # type: ignore
    return get_slot(activity, slot_date, slot_time).available_slots


def is_bookable_session(activity: "Activity", slot_date: date, slot_time) -> bool:  # type: ignore
    """A session exists if it has a stored slot or is one of the activity's default times."""

    slot_time = parse_slot_time(slot_time)
    if slot_time in activity.session_times():
        return True
    return _slot_filter(activity, slot_date, slot_time).exists()


def lock_slot(activity: "Activity", slot_date: date, slot_time) -> CapacitySlot:  # type: ignore
    """
    Load the slot row with a row lock, materialising it from the activity
    default on first use. Must be called inside ``transaction.atomic()``.
    """

    slot_time = parse_slot_time(slot_time)
    queryset = _slot_filter(activity, slot_date, slot_time)
    slot = lock_queryset_if_possible(queryset).first()
    if slot is not None:
        return slot

    try:
        with transaction.atomic():
            CapacitySlot.objects.create(
                tenant_id=activity.tenant_id,
                activity=activity,
                date=slot_date,
                time=slot_time,
                total_slots=activity.default_capacity,
            )
    except IntegrityError:
        # Another transaction materialised the same key first
        logger.debug(f"Slot {activity.pk} {slot_date} {slot_time} created concurrently")

    return lock_queryset_if_possible(queryset).get()


@transaction.atomic
def claim(activity: "Activity", slot_date: date, slot_time, guests: int) -> CapacitySlot:  # type: ignore
    """Book ``guests`` seats or raise CapacityExceeded without changing anything."""

    if guests < 1:
        raise InvalidInput("Kişi sayısı en az 1 olmalıdır.", guests=guests)

    slot = lock_slot(activity, slot_date, slot_time)
    updated = CapacitySlot.objects.filter(
        pk=slot.pk,
        booked_slots__lte=F("total_slots") - guests,
    ).update(
        booked_slots=F("booked_slots") + guests,
        version=F("version") + 1,
    )
    slot.refresh_from_db()

    if not updated:
        logger.warning(
            f"Capacity exceeded for activity {activity.pk} on {slot.date} {slot.time:%H:%M}: "
            f"requested {guests}, available {slot.available_slots}"
        )
        raise CapacityExceeded(
            requested=guests,
            available_slots=slot.available_slots,
            total_slots=slot.total_slots,
            booked_slots=slot.booked_slots,
        )

    logger.info(
        f"Claimed {guests} on activity {activity.pk} {slot.date} {slot.time:%H:%M} "
        f"({slot.booked_slots}/{slot.total_slots})"
    )
    return slot


@transaction.atomic
def release(activity: "Activity", slot_date: date, slot_time, guests: int) -> CapacitySlot:  # type: ignore
    """Give ``guests`` seats back to the slot. The counter never goes below zero."""

    slot = lock_slot(activity, slot_date, slot_time)
    if slot.booked_slots < guests:
        logger.warning(
            f"Releasing {guests} from slot {slot.pk} holding only {slot.booked_slots}; clamping to zero"
        )
        guests = slot.booked_slots

    CapacitySlot.objects.filter(pk=slot.pk).update(
        booked_slots=F("booked_slots") - guests,
        version=F("version") + 1,
    )
    slot.refresh_from_db()
    logger.info(
        f"Released {guests} on activity {activity.pk} {slot.date} {slot.time:%H:%M} "
        f"({slot.booked_slots}/{slot.total_slots})"
    )
    return slot


@transaction.atomic
def set_total_slots(activity: "Activity", slot_date: date, slot_time, total_slots: int) -> CapacitySlot:  # type: ignore
    """Change a slot's capacity. It can never drop below what is already booked."""

    slot = lock_slot(activity, slot_date, slot_time)
    if total_slots < slot.booked_slots:
        raise InvalidInput(
            "Kontenjan mevcut rezervasyon sayısının altına düşürülemez.",
            total_slots=total_slots,
            booked_slots=slot.booked_slots,
        )
    CapacitySlot.objects.filter(pk=slot.pk).update(
        total_slots=total_slots,
        version=F("version") + 1,
    )
    slot.refresh_from_db()
    return slot


def slots_for_range(activity: "Activity", start: date, end: date) -> list[SlotAvailability]:
    """
    All sessions of ``activity`` between ``start`` and ``end`` inclusive.

    Stored rows win; every default time without a row shows the activity's
    default capacity with nothing booked.
    """

    stored = {
        (slot.date, slot.time): slot
        for slot in CapacitySlot.objects.filter(
            tenant_id=activity.tenant_id,
            activity=activity,
            date__gte=start,
            date__lte=end,
        )
    }
    default_times = activity.session_times()

    result: list[SlotAvailability] = []
    day = start
    while day <= end:
        times = set(default_times) | {t for (d, t) in stored if d == day}
        for slot_time in sorted(times):
            slot = stored.get((day, slot_time))
            if slot is not None:
                result.append(SlotAvailability(day, slot_time, slot.total_slots, slot.booked_slots, slot.pk))
            else:
                result.append(SlotAvailability(day, slot_time, activity.default_capacity, 0))
        day += timedelta(days=1)
    return result


def recount_booked_slots(slot: CapacitySlot, *, repair: bool = False) -> int:
    """
    Recompute what ``booked_slots`` should be from its sources: active
    reservations of every origin plus approved requests not yet converted.
    With ``repair=True`` the stored counter is overwritten.
    """

    from apps.exchange.models import ReservationRequest  # Local import to prevent circular dependency
    from apps.reservations.models import Reservation

    reserved = Reservation.objects.filter(
        tenant_id=slot.tenant_id,
        activity_id=slot.activity_id,
        date=slot.date,
        time=slot.time,
        status__in=Reservation.ACTIVE_STATUSES,
    ).aggregate(total=Sum("quantity"))["total"] or 0

    held = ReservationRequest.objects.filter(
        owner_tenant_id=slot.tenant_id,
        activity_id=slot.activity_id,
        date=slot.date,
        time=slot.time,
        status=ReservationRequest.Status.APPROVED,
    ).aggregate(total=Sum("guests"))["total"] or 0

    expected = reserved + held
    if repair and expected != slot.booked_slots:
        logger.warning(f"Repairing slot {slot.pk}: booked {slot.booked_slots} -> {expected}")
        CapacitySlot.objects.filter(pk=slot.pk).update(
            booked_slots=min(expected, slot.total_slots),
            version=F("version") + 1,
        )
        slot.refresh_from_db()
    return expected

