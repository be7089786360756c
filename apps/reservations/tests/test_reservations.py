"""Tests for direct, imported and tracked reservations."""

from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.capacity import services as capacity
from apps.capacity.models import CapacitySlot
from apps.reservations import services
from apps.reservations.models import Reservation
from apps.reservations.tasks import cleanup_expired_tracking_tokens
from shared.exceptions import CapacityExceeded, InvalidInput, InvalidStateTransition, UnauthorizedParty


def _book(tenant, activity, slot_date, quantity=2, **extra):  # type: ignore
    return services.create_reservation(
        tenant,
        activity,
        slot_date=slot_date,
        slot_time="09:00",
        customer_name="Mehmet Demir",
        quantity=quantity,
        **extra,
    )


@pytest.mark.django_db
def test_direct_reservation_claims_capacity(receiver, activity, slot_date):
    reservation = _book(receiver, activity, slot_date)

    assert reservation.source == Reservation.Source.DIRECT
    assert reservation.price == Decimal("2400.00")
    assert reservation.currency == "TRY"
    assert len(reservation.tracking_token) == 32
    assert CapacitySlot.objects.get().booked_slots == 2


@pytest.mark.django_db
def test_direct_reservation_respects_capacity(receiver, activity, slot_date):
    _book(receiver, activity, slot_date, quantity=4)

    with pytest.raises(CapacityExceeded):
        _book(receiver, activity, slot_date, quantity=2)

    assert Reservation.objects.count() == 1


@pytest.mark.django_db
def test_reservation_only_into_own_activity(sender, activity, slot_date):
    with pytest.raises(UnauthorizedParty):
        _book(sender, activity, slot_date)


@pytest.mark.django_db
def test_reservation_needs_existing_session(receiver, activity, slot_date):
    with pytest.raises(InvalidInput):
        services.create_reservation(
            receiver,
            activity,
            slot_date=slot_date,
            slot_time=time(23, 0),
            customer_name="Gece",
            quantity=1,
        )


@pytest.mark.django_db
def test_external_import_is_idempotent(receiver, activity, slot_date):
    fields = {
        "slot_date": slot_date,
        "slot_time": "09:00",
        "customer_name": "John Smith",
        "quantity": 3,
    }
    first, created = services.import_external_reservation(receiver, activity, "GYG-1001", **fields)
    again, created_again = services.import_external_reservation(receiver, activity, "GYG-1001", **fields)

    assert created and not created_again
    assert first.pk == again.pk
    assert first.source == Reservation.Source.EXTERNAL
    assert capacity.available_slots(activity, slot_date, "09:00") == 2


@pytest.mark.django_db
def test_cancel_releases_capacity(receiver, sender, activity, slot_date):
    reservation = _book(receiver, activity, slot_date, quantity=3)

    with pytest.raises(UnauthorizedParty):
        services.cancel_reservation(reservation.pk, sender)

    services.cancel_reservation(reservation.pk, receiver)
    assert capacity.available_slots(activity, slot_date, "09:00") == 5

    with pytest.raises(InvalidStateTransition):
        services.cancel_reservation(reservation.pk, receiver)


@pytest.mark.django_db
def test_tracking_link(receiver, activity, slot_date):
    reservation = _book(receiver, activity, slot_date)
    client = APIClient()

    response = client.get(reverse("track-reservation", args=[reservation.tracking_token]))

    assert response.status_code == status.HTTP_200_OK
    assert response.data["status"] == "confirmed"
    assert response.data["activity"] == activity.name
    assert response.data["date"] == slot_date.isoformat()
    assert response.data["time"] == "09:00"
    assert response.data["quantity"] == 2
    assert response.data["price"] == "2400.00"


@pytest.mark.django_db
def test_tracking_unknown_and_expired(receiver, activity):
    client = APIClient()
    assert client.get(reverse("track-reservation", args=["0" * 32])).status_code == status.HTTP_404_NOT_FOUND

    reservation = _book(receiver, activity, date.today() + timedelta(days=1))
    Reservation.objects.filter(pk=reservation.pk).update(
        tracking_token_expires_at=timezone.now() - timedelta(minutes=1)
    )

    response = client.get(reverse("track-reservation", args=[reservation.tracking_token]))
    assert response.status_code == status.HTTP_410_GONE


@pytest.mark.django_db
def test_tracking_link_without_expiry_stays_valid(receiver, activity, slot_date):
    reservation = _book(receiver, activity, slot_date)
    Reservation.objects.filter(pk=reservation.pk).update(tracking_token_expires_at=None)

    response = APIClient().get(reverse("track-reservation", args=[reservation.tracking_token]))

    assert response.status_code == status.HTTP_200_OK
    assert cleanup_expired_tracking_tokens() == {"cleared": 0}


@pytest.mark.django_db
def test_cleanup_task_clears_only_expired_tokens(receiver, activity, slot_date):
    live = _book(receiver, activity, slot_date, quantity=1)
    stale = _book(receiver, activity, slot_date, quantity=1)
    Reservation.objects.filter(pk=stale.pk).update(
        tracking_token_expires_at=timezone.now() - timedelta(hours=1)
    )

    result = cleanup_expired_tracking_tokens()

    assert result == {"cleared": 1}
    live.refresh_from_db()
    stale.refresh_from_db()
    assert live.tracking_token
    assert stale.tracking_token is None


@pytest.mark.django_db
def test_reservation_api_create_import_cancel(receiver_user, activity, slot_date):
    client = APIClient()
    client.force_authenticate(receiver_user)
    payload = {
        "activityId": activity.pk,
        "date": str(slot_date),
        "time": "09:00",
        "customerName": "Zeynep Kaya",
        "quantity": 2,
    }

    response = client.post(reverse("reservation-list"), payload, format="json")
    assert response.status_code == status.HTTP_201_CREATED, response.data
    reservation_id = response.data["id"]

    imported = client.post(
        reverse("reservation-import-external"),
        {**payload, "externalId": "VTR-77", "quantity": 1},
        format="json",
    )
    assert imported.status_code == status.HTTP_201_CREATED, imported.data
    repeated = client.post(
        reverse("reservation-import-external"),
        {**payload, "externalId": "VTR-77", "quantity": 1},
        format="json",
    )
    assert repeated.status_code == status.HTTP_200_OK
    assert repeated.data["id"] == imported.data["id"]

    cancelled = client.post(reverse("reservation-cancel", args=[reservation_id]))
    assert cancelled.status_code == status.HTTP_200_OK
    assert cancelled.data["status"] == "cancelled"
    assert capacity.available_slots(activity, slot_date, "09:00") == 4

    over = client.post(reverse("reservation-list"), {**payload, "quantity": 9}, format="json")
    assert over.status_code == status.HTTP_409_CONFLICT
    assert over.data["code"] == "capacity_exceeded"
    assert over.data["context"]["available_slots"] == 4
