"""Tests for partnership lifecycle and shared availability."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from apps.capacity import services as capacity
from apps.partners import services
from apps.partners.models import ActivityShare, Partnership
from apps.tenants.models import Activity, Tenant
from shared.exceptions import InvalidInput, InvalidStateTransition, UnauthorizedParty


@pytest.mark.django_db
def test_invite_accept_revoke_cycle(sender, receiver):
    partnership = services.invite_partner(sender, receiver)
    assert partnership.status == Partnership.Status.PENDING
    assert partnership.invite_code

    with pytest.raises(UnauthorizedParty):
        services.accept_partnership(partnership.invite_code, sender)

    partnership = services.accept_partnership(partnership.invite_code.lower(), receiver)
    assert partnership.is_active
    assert partnership.accepted_at is not None

    partnership = services.revoke_partnership(partnership.pk, receiver)
    assert partnership.status == Partnership.Status.REVOKED
    assert partnership.revoked_by == receiver


@pytest.mark.django_db
def test_second_invite_to_same_partner_is_rejected(sender, receiver, partnership):
    with pytest.raises(InvalidStateTransition):
        services.invite_partner(receiver, sender)


@pytest.mark.django_db
def test_cannot_partner_with_self(sender):
    with pytest.raises(InvalidInput):
        services.invite_partner(sender, sender)


@pytest.mark.django_db
def test_unknown_invite_code(receiver):
    with pytest.raises(InvalidInput):
        services.accept_partnership("NOPE", receiver)


@pytest.mark.django_db
def test_outsider_cannot_revoke(partnership):
    outsider = Tenant.objects.create(name="Yabancı", slug="yabanci")
    with pytest.raises(UnauthorizedParty):
        services.revoke_partnership(partnership.pk, outsider)


@pytest.mark.django_db
def test_share_requires_owning_party(partnership):
    outsider = Tenant.objects.create(name="Yabancı", slug="yabanci")
    foreign = Activity.objects.create(tenant=outsider, name="Dalış", default_times=["10:00"])

    with pytest.raises(UnauthorizedParty):
        services.share_activity(foreign, partnership)


@pytest.mark.django_db
def test_sharing_again_updates_price(activity, partnership):
    services.share_activity(activity, partnership, Decimal("900.00"), "try")
    share = services.share_activity(activity, partnership, Decimal("950.00"))

    assert ActivityShare.objects.count() == 1
    assert share.unit_price == Decimal("950.00")
    assert share.effective_currency == "TRY"


@pytest.mark.django_db
def test_share_without_override_uses_public_price(activity, partnership):
    share = services.share_activity(activity, partnership)

    assert share.unit_price == Decimal("1200.00")


@pytest.mark.django_db
def test_revoked_partnership_cannot_get_new_shares(activity, partnership, receiver):
    services.revoke_partnership(partnership.pk, receiver)
    partnership.refresh_from_db()

    with pytest.raises(InvalidStateTransition):
        services.share_activity(activity, partnership)


@pytest.mark.django_db
def test_shared_availability_groups_by_partner(sender, share, activity, slot_date, slot_time):
    capacity.claim(activity, slot_date, slot_time, 2)

    result = services.list_shared_availability(sender, slot_date, slot_date)

    assert len(result) == 1
    partner = result[0].to_dict()
    assert partner["partnerTenantId"] == activity.tenant_id
    assert partner["partnerTenantName"] == "Kapadokya Balon"
    shared = partner["activities"][0]
    assert shared["activityId"] == activity.pk
    assert shared["unitPrice"] == "1000.00"
    nine = next(c for c in shared["capacities"] if c["time"] == "09:00")
    assert nine == {
        "date": slot_date.isoformat(),
        "time": "09:00",
        "totalSlots": 5,
        "bookedSlots": 2,
        "availableSlots": 3,
    }


@pytest.mark.django_db
def test_owner_does_not_see_own_shares(receiver, share, slot_date):
    assert services.list_shared_availability(receiver, slot_date, slot_date) == []


@pytest.mark.django_db
def test_revocation_hides_and_reacceptance_restores(sender, receiver, share, slot_date):
    services.revoke_partnership(share.partnership_id, sender)

    assert services.list_shared_availability(sender, slot_date, slot_date) == []
    assert ActivityShare.objects.filter(pk=share.pk).exists()

    partnership = services.invite_partner(sender, receiver)
    assert partnership.pk == share.partnership_id
    services.accept_partnership(partnership.invite_code, receiver)

    result = services.list_shared_availability(sender, slot_date, slot_date)
    assert [a.activity_id for a in result[0].activities] == [share.activity_id]


@pytest.mark.django_db
def test_inactive_activity_is_hidden(sender, share, activity, slot_date):
    activity.is_active = False
    activity.save()

    assert services.list_shared_availability(sender, slot_date, slot_date) == []


@pytest.mark.django_db
def test_availability_range_is_validated(sender, slot_date):
    with pytest.raises(InvalidInput):
        services.list_shared_availability(sender, slot_date, slot_date - timedelta(days=1))
    with pytest.raises(InvalidInput):
        services.list_shared_availability(sender, slot_date, slot_date + timedelta(days=90))


@pytest.mark.django_db
def test_find_share_only_through_active_partnership(sender, share, activity):
    assert services.find_share(activity, sender) == share

    Partnership.objects.filter(pk=share.partnership_id).update(status=Partnership.Status.REVOKED)

    assert services.find_share(activity, sender) is None


@pytest.mark.django_db
def test_unshare(activity, share):
    assert services.unshare(activity, share.partnership)
    assert not services.unshare(activity, share.partnership)
