"""Approvals and conversions racing each other on separate connections."""

from __future__ import annotations

import pytest

from apps.capacity import services as capacity
from apps.capacity.models import CapacitySlot
from apps.exchange import services
from apps.exchange.models import ReservationRequest
from apps.finances.models import PartnerTransaction
from apps.reservations.models import Reservation
from shared.exceptions import CapacityExceeded


def _request(sender_user, activity, slot_date, slot_time, guests):  # type: ignore
    return services.create_request(
        sender_user,
        activity,
        slot_date=slot_date,
        slot_time=slot_time,
        customer_name="Deniz Arslan",
        customer_phone="+905553332211",
        guests=guests,
    )


@pytest.mark.django_db(transaction=True)
def test_parallel_approvals_on_last_seat(run_in_parallel, sender_user, receiver_user, activity, share, slot_date, slot_time):
    first = _request(sender_user, activity, slot_date, slot_time, 1)
    second = _request(sender_user, activity, slot_date, slot_time, 1)
    capacity.claim(activity, slot_date, slot_time, 4)

    outcomes = run_in_parallel(
        lambda: services.approve(first.pk, receiver_user),
        lambda: services.approve(second.pk, receiver_user),
    )

    approved = [o for o in outcomes if isinstance(o, ReservationRequest)]
    refused = [o for o in outcomes if isinstance(o, CapacityExceeded)]
    assert len(approved) == 1, outcomes
    assert len(refused) == 1, outcomes

    slot = CapacitySlot.objects.get(activity=activity)
    assert slot.booked_slots == slot.total_slots == 5
    statuses = sorted(ReservationRequest.objects.values_list("status", flat=True))
    assert statuses == ["approved", "pending"]


@pytest.mark.django_db(transaction=True)
def test_parallel_converts_create_one_reservation(run_in_parallel, sender_user, receiver_user, activity, share, slot_date, slot_time):
    request = _request(sender_user, activity, slot_date, slot_time, 2)
    services.approve(request.pk, receiver_user)

    outcomes = run_in_parallel(
        lambda: services.convert(request.pk, receiver_user),
        lambda: services.convert(request.pk, receiver_user),
    )

    assert all(isinstance(o, services.ConversionResult) for o in outcomes), outcomes
    assert sorted(o.created for o in outcomes) == [False, True]
    assert outcomes[0].reservation_id == outcomes[1].reservation_id
    assert Reservation.objects.count() == 1
    assert PartnerTransaction.objects.count() == 1
    assert CapacitySlot.objects.get(activity=activity).booked_slots == 2
