"""Tests for matching reservations to dispatches."""

from __future__ import annotations

from datetime import date, time, timedelta

import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.dispatches.models import Dispatch
from apps.dispatches.reconciliation import (
    LENIENT,
    STANDARD,
    STRICT,
    match_fulfillment,
    normalize_name,
    reconcile_reservations,
)
from apps.reservations.models import Reservation

DAY = date(2026, 5, 14)


def _reservation(pk=1, activity_id=10, name="Ayşe Demir", day=DAY):  # type: ignore
    return Reservation(pk=pk, activity_id=activity_id, customer_name=name, date=day, time=time(9, 0))


def _dispatch(pk, reservation_id=None, activity_id=None, name="", day=DAY):  # type: ignore
    return Dispatch(
        pk=pk,
        reservation_id=reservation_id,
        activity_id=activity_id,
        customer_name=name,
        dispatch_date=day,
    )


def test_explicit_link_wins_over_heuristics():
    dispatches = [
        _dispatch(1, activity_id=10),
        _dispatch(2, name="Ayşe Demir"),
        _dispatch(3, reservation_id=1, day=DAY + timedelta(days=1)),
    ]

    result = match_fulfillment(_reservation(), dispatches, LENIENT)

    assert result.matched
    assert result.confidence == "exact"
    assert result.dispatch_id == 3
    assert not result.ambiguous


def test_activity_and_date_before_name():
    dispatches = [_dispatch(1, name="ayşe  DEMIR"), _dispatch(2, activity_id=10)]

    result = match_fulfillment(_reservation(), dispatches, LENIENT)

    assert (result.confidence, result.dispatch_id) == ("activity_date", 2)


def test_name_match_ignores_case_and_spacing():
    result = match_fulfillment(_reservation(), [_dispatch(4, name="  ayşe   DEMIR ")], LENIENT)

    assert result.matched
    assert result.confidence == "name_date"
    assert result.dispatch_id == 4


def test_name_on_other_day_does_not_match():
    result = match_fulfillment(_reservation(), [_dispatch(4, name="Ayşe Demir", day=DAY + timedelta(days=1))])

    assert not result.matched
    assert result.confidence == "none"
    assert result.dispatch_id is None


def test_two_candidates_are_flagged_ambiguous():
    result = match_fulfillment(_reservation(), [_dispatch(5, name="Ayşe Demir"), _dispatch(6, name="AYŞE DEMIR")])

    assert result.matched
    assert result.ambiguous
    assert result.dispatch_id == 5


def test_dispatch_linked_elsewhere_still_counts_for_fallback():
    # Heuristic steps do not skip dispatches already linked to another reservation
    result = match_fulfillment(_reservation(), [_dispatch(7, reservation_id=99, activity_id=10)], LENIENT)

    assert result.confidence == "activity_date"


@pytest.mark.parametrize(
    "strictness, expected",
    [
        (STRICT, "none"),
        (STANDARD, "none"),
        (LENIENT, "name_date"),
    ],
)
def test_strictness_limits_name_matching(strictness, expected):
    result = match_fulfillment(_reservation(), [_dispatch(8, name="Ayşe Demir")], strictness)

    assert result.confidence == expected


def test_strict_ignores_activity_date():
    dispatches = [_dispatch(9, activity_id=10)]

    assert not match_fulfillment(_reservation(), dispatches, STRICT).matched
    assert match_fulfillment(_reservation(), dispatches, STANDARD).matched


def test_default_strictness_comes_from_settings(settings):
    settings.RECONCILIATION_STRICTNESS = STRICT
    assert not match_fulfillment(_reservation(), [_dispatch(8, name="Ayşe Demir")]).matched


def test_unknown_strictness_falls_back_to_lenient():
    result = match_fulfillment(_reservation(), [_dispatch(8, name="Ayşe Demir")], "paranoid")

    assert result.confidence == "name_date"


def test_empty_name_never_matches_by_name():
    result = match_fulfillment(_reservation(name="  "), [_dispatch(8, name="")], LENIENT)

    assert not result.matched


def test_normalize_name():
    assert normalize_name("  Ali   VELI ") == normalize_name("ali veli")
    assert normalize_name(None) == ""


@pytest.mark.django_db
def test_reconcile_reservations_for_range(receiver, activity, slot_date):
    first = Reservation.objects.create(
        tenant=receiver, activity=activity, customer_name="Ali Veli", date=slot_date, time=time(9, 0)
    )
    second = Reservation.objects.create(
        tenant=receiver,
        activity=activity,
        customer_name="Can Ak",
        date=slot_date + timedelta(days=1),
        time=time(9, 0),
    )
    Reservation.objects.create(
        tenant=receiver,
        activity=activity,
        customer_name="İptal",
        date=slot_date,
        time=time(6, 0),
        status=Reservation.Status.CANCELLED,
    )
    Dispatch.objects.create(tenant=receiver, dispatch_date=slot_date, customer_name="ALI VELI")

    results = reconcile_reservations(receiver, slot_date, slot_date + timedelta(days=1), LENIENT)

    assert [(r.pk, m.matched) for r, m in results] == [(first.pk, True), (second.pk, False)]


@pytest.mark.django_db
def test_reconciliation_endpoint(receiver, receiver_user, activity, slot_date):
    reservation = Reservation.objects.create(
        tenant=receiver, activity=activity, customer_name="Ali Veli", date=slot_date, time=time(9, 0)
    )
    client = APIClient()
    client.force_authenticate(receiver_user)

    response = client.post(
        reverse("dispatch-list"),
        {"dispatchDate": str(slot_date), "activityId": activity.pk, "customerName": "Başka Müşteri"},
        format="json",
    )
    assert response.status_code == status.HTTP_201_CREATED, response.data

    response = client.get(
        reverse("reconciliation"),
        {"startDate": str(slot_date), "endDate": str(slot_date), "strictness": "standard"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.data == [
        {
            "reservationId": reservation.pk,
            "date": slot_date.isoformat(),
            "time": "09:00",
            "customerName": "Ali Veli",
            "matched": True,
            "confidence": "activity_date",
            "dispatchId": response.data[0]["dispatchId"],
            "ambiguous": False,
        }
    ]
    assert response.data[0]["dispatchId"] == Dispatch.objects.get().pk


@pytest.mark.django_db
def test_reconciliation_rejects_inverted_range(receiver_user, slot_date):
    client = APIClient()
    client.force_authenticate(receiver_user)

    response = client.get(
        reverse("reconciliation"),
        {"startDate": str(slot_date), "endDate": str(slot_date - timedelta(days=1))},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
def test_linked_dispatch_logged_outside_range_still_matches(receiver, activity, slot_date):
    reservation = Reservation.objects.create(
        tenant=receiver, activity=activity, customer_name="Ali Veli", date=slot_date, time=time(9, 0)
    )
    linked = Dispatch.objects.create(
        tenant=receiver,
        reservation=reservation,
        dispatch_date=slot_date + timedelta(days=1),
        customer_name="Başka isim",
    )

    [(_, result)] = reconcile_reservations(receiver, slot_date, slot_date, STRICT)

    assert result.matched
    assert result.confidence == "exact"
    assert result.dispatch_id == linked.pk
