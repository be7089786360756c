"""Shared pytest fixtures: two tenants in an active partnership."""

from __future__ import annotations

import threading
from datetime import date, time, timedelta
from decimal import Decimal

import pytest
from django.db import connection

from apps.partners.models import ActivityShare, Partnership
from apps.tenants.models import Activity, Tenant
from apps.users.models import User


@pytest.fixture
def receiver(db):
    return Tenant.objects.create(
        name="Kapadokya Balon",
        slug="kapadokya-balon",
        contact_phone="+905320000001",
    )


@pytest.fixture
def sender(db):
    return Tenant.objects.create(
        name="Ege Tur",
        slug="ege-tur",
        contact_phone="+905320000002",
    )


@pytest.fixture
def receiver_user(receiver):
    return User.objects.create_user(
        email="owner@kapadokya.test",
        password="StrongPass123",
        tenant=receiver,
        role=User.RoleChoices.OWNER,
    )


@pytest.fixture
def sender_user(sender):
    return User.objects.create_user(
        email="operator@egetur.test",
        password="StrongPass123",
        phone="+905321112233",
        tenant=sender,
        role=User.RoleChoices.OPERATOR,
    )


@pytest.fixture
def activity(receiver):
    return Activity.objects.create(
        tenant=receiver,
        name="Gün doğumu balon turu",
        price=Decimal("1200.00"),
        currency="TRY",
        default_times=["06:00", "09:00"],
        default_capacity=5,
    )


@pytest.fixture
def partnership(sender, receiver):
    return Partnership.objects.create(
        tenant=sender,
        partner_tenant=receiver,
        status=Partnership.Status.ACTIVE,
    )


@pytest.fixture
def share(activity, partnership):
    return ActivityShare.objects.create(
        activity=activity,
        partnership=partnership,
        partner_unit_price=Decimal("1000.00"),
        currency="TRY",
    )


@pytest.fixture
def slot_date():
    return date.today() + timedelta(days=7)


@pytest.fixture
def slot_time():
    return time(9, 0)


@pytest.fixture
def run_in_parallel():
    """Start every call at the same moment, each on its own thread and DB connection."""

    def _run(*calls):  # type: ignore
        barrier = threading.Barrier(len(calls))
        outcomes: list = [None] * len(calls)

        def worker(index, call):  # type: ignore
            try:
                barrier.wait(timeout=10)
                outcomes[index] = call()
            except Exception as exc:
                outcomes[index] = exc
            finally:
                connection.close()

        threads = [threading.Thread(target=worker, args=(i, call)) for i, call in enumerate(calls)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)
        return outcomes

    return _run
