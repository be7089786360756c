"""Tests for the reservation request state machine."""

from __future__ import annotations

from decimal import Decimal

import pytest

from apps.capacity import services as capacity
from apps.capacity.models import CapacitySlot
from apps.exchange import services
from apps.exchange.models import OriginKind, ReservationRequest, classify_requester
from apps.finances.models import PartnerTransaction
from apps.partners.services import revoke_partnership
from apps.reservations.models import Reservation
from apps.users.models import User
from shared.exceptions import CapacityExceeded, InvalidInput, InvalidStateTransition, UnauthorizedParty

Status = ReservationRequest.Status


@pytest.fixture
def make_request(sender_user, activity, share, slot_date, slot_time):
    def _make(guests=1, **extra):  # type: ignore
        fields = {
            "slot_date": slot_date,
            "slot_time": slot_time,
            "customer_name": "Elif Şahin",
            "customer_phone": "+905551234567",
            "guests": guests,
        }
        fields.update(extra)
        return services.create_request(sender_user, activity, **fields)

    return _make


def _slot(activity):  # type: ignore
    return CapacitySlot.objects.get(activity=activity)


@pytest.mark.django_db
def test_create_snapshots_partner_price(make_request, sender, receiver):
    request = make_request(guests=3)

    assert request.status == Status.PENDING
    assert request.owner_tenant_id == receiver.pk
    assert request.origin_tenant_id == sender.pk
    assert request.origin_kind == OriginKind.PARTNER
    assert request.unit_price == Decimal("1000.00")
    assert request.total_price == Decimal("3000.00")
    assert request.converted_reservation_id is None


@pytest.mark.django_db
def test_create_requires_active_share(sender_user, activity, slot_date, slot_time):
    with pytest.raises(UnauthorizedParty):
        services.create_request(
            sender_user,
            activity,
            slot_date=slot_date,
            slot_time=slot_time,
            customer_name="Elif",
            customer_phone="+905551234567",
            guests=1,
        )


@pytest.mark.django_db
def test_create_checks_availability(make_request):
    with pytest.raises(CapacityExceeded):
        make_request(guests=6)


@pytest.mark.django_db
def test_same_tenant_request_is_viewer_origin(receiver, activity, slot_date, slot_time):
    viewer = User.objects.create_user(
        email="viewer@kapadokya.test",
        password="StrongPass123",
        tenant=receiver,
        role=User.RoleChoices.VIEWER,
    )
    request = services.create_request(
        viewer,
        activity,
        slot_date=slot_date,
        slot_time=slot_time,
        customer_name="Can",
        customer_phone="+905550000000",
        guests=2,
    )

    assert request.origin_kind == OriginKind.VIEWER
    assert request.requester_type == "viewer"
    assert request.unit_price == Decimal("1200.00")


@pytest.mark.django_db
@pytest.mark.parametrize(
    "collection, amount",
    [
        ("receiver_full", Decimal("100.00")),
        ("sender_full", Decimal("2999.00")),
        ("sender_partial", Decimal("0.00")),
        ("sender_partial", Decimal("3000.00")),
    ],
)
def test_collected_amount_must_fit_collection_type(make_request, collection, amount):
    with pytest.raises(InvalidInput):
        make_request(guests=3, payment_collection_type=collection, amount_collected_by_sender=amount)


@pytest.mark.django_db
def test_scenario_a_last_seat_goes_to_one_approval(make_request, receiver_user, activity):
    first = make_request()
    second = make_request()
    capacity.claim(activity, first.date, first.time, 4)

    services.approve(first.pk, receiver_user)
    with pytest.raises(CapacityExceeded) as excinfo:
        services.approve(second.pk, receiver_user)

    assert excinfo.value.context["available_slots"] == 0
    assert _slot(activity).booked_slots == 5
    second.refresh_from_db()
    assert second.status == Status.PENDING


@pytest.mark.django_db
def test_only_owner_decides(make_request, sender_user):
    request = make_request()

    with pytest.raises(UnauthorizedParty):
        services.approve(request.pk, sender_user)
    with pytest.raises(UnauthorizedParty):
        services.reject(request.pk, sender_user)


@pytest.mark.django_db
def test_reject_keeps_note_and_is_final(make_request, receiver_user):
    request = make_request()

    request = services.reject(request.pk, receiver_user, "Hava muhalefeti")

    assert request.status == Status.REJECTED
    assert request.process_notes == "Hava muhalefeti"
    with pytest.raises(InvalidStateTransition):
        services.approve(request.pk, receiver_user)


@pytest.mark.django_db
def test_scenario_c_convert_is_idempotent(make_request, receiver_user, activity):
    request = make_request(guests=2)
    services.approve(request.pk, receiver_user)

    first = services.convert(request.pk, receiver_user)
    again = services.convert(request.pk, receiver_user)

    assert first.created and not again.created
    assert first.reservation_id == again.reservation_id
    assert Reservation.objects.count() == 1
    assert PartnerTransaction.objects.count() == 1
    assert first.transaction.total_price == Decimal("2000.00")
    assert _slot(activity).booked_slots == 2

    request.refresh_from_db()
    assert request.status == Status.CONVERTED
    assert request.converted_reservation_id == first.reservation_id
    reservation = first.reservation
    assert reservation.source == Reservation.Source.PARTNER
    assert reservation.tenant_id == request.owner_tenant_id
    assert reservation.tracking_token


@pytest.mark.django_db
def test_convert_needs_approval(make_request, receiver_user):
    request = make_request()

    with pytest.raises(InvalidStateTransition):
        services.convert(request.pk, receiver_user)


@pytest.mark.django_db
def test_cancel_approved_request_releases_seats(make_request, sender_user, receiver_user, activity):
    request = make_request(guests=2)
    services.approve(request.pk, receiver_user)
    assert _slot(activity).booked_slots == 2

    request = services.cancel(request.pk, sender_user)

    assert request.status == Status.CANCELLED
    assert _slot(activity).booked_slots == 0


@pytest.mark.django_db
def test_revoked_partnership_blocks_decisions(make_request, partnership, sender, sender_user, receiver_user, activity):
    pending = make_request()
    approved = make_request(guests=2)
    services.approve(approved.pk, receiver_user)

    revoke_partnership(partnership.pk, sender)

    with pytest.raises(UnauthorizedParty):
        services.approve(pending.pk, receiver_user)
    with pytest.raises(UnauthorizedParty):
        services.convert(approved.pk, receiver_user)
    assert Reservation.objects.count() == 0

    services.cancel(approved.pk, sender_user)
    assert _slot(activity).booked_slots == 0


@pytest.mark.django_db
def test_only_sender_cancels_or_deletes(make_request, receiver_user):
    request = make_request()

    with pytest.raises(UnauthorizedParty):
        services.cancel(request.pk, receiver_user)
    with pytest.raises(UnauthorizedParty):
        services.delete_request(request.pk, receiver_user)


@pytest.mark.django_db
def test_delete_only_before_owner_action(make_request, sender_user, receiver_user):
    pending = make_request()
    assert services.delete_request(pending.pk, sender_user).status == Status.DELETED

    converted = make_request()
    services.approve(converted.pk, receiver_user)
    services.convert(converted.pk, receiver_user)
    with pytest.raises(InvalidStateTransition):
        services.delete_request(converted.pk, sender_user)

    approved = make_request()
    services.approve(approved.pk, receiver_user)
    with pytest.raises(InvalidStateTransition):
        services.delete_request(approved.pk, sender_user)


@pytest.mark.django_db
def test_transitions_out_of_terminal_states_fail(make_request, sender_user, receiver_user):
    converted = make_request()
    services.approve(converted.pk, receiver_user)
    services.convert(converted.pk, receiver_user)

    with pytest.raises(InvalidStateTransition):
        services.approve(converted.pk, receiver_user)
    with pytest.raises(InvalidStateTransition):
        services.reject(converted.pk, receiver_user)
    with pytest.raises(InvalidStateTransition):
        services.cancel(converted.pk, sender_user)

    cancelled = make_request()
    services.cancel(cancelled.pk, sender_user)
    for transition in (services.approve, services.reject, services.convert):
        with pytest.raises(InvalidStateTransition):
            transition(cancelled.pk, receiver_user)

    approved = make_request()
    services.approve(approved.pk, receiver_user)
    with pytest.raises(InvalidStateTransition):
        services.reject(approved.pk, receiver_user)


@pytest.mark.django_db
def test_incoming_requests_list_unknown_origin_first_by_status(make_request, receiver, activity, slot_date, slot_time):
    approved_later = make_request()
    ReservationRequest.objects.filter(pk=approved_later.pk).update(status=Status.APPROVED)
    legacy = ReservationRequest.objects.create(
        owner_tenant=receiver,
        activity=activity,
        date=slot_date,
        time=slot_time,
        customer_name="Eski kayıt",
        customer_phone="+905550000001",
        guests=1,
        notes="telefonla geldi",
    )

    inbox = list(services.incoming_requests(receiver))

    assert inbox[0].pk == legacy.pk
    assert inbox[0].requester_type == "unknown"
    assert {r.pk for r in inbox} == {legacy.pk, approved_later.pk}


@pytest.mark.parametrize(
    "notes, expected",
    [
        ("[Partner: Ege Tur] 2 yetişkin", "partner"),
        ("[İzleyici: Ali] vip", "viewer"),
        ("[Viewer: Ali]", "viewer"),
        ("normal not", "unknown"),
        (None, "unknown"),
        ("", "unknown"),
    ],
)
def test_classify_requester(notes, expected):
    assert classify_requester(notes) == expected
