from __future__ import annotations

from datetime import time

import pytest
from django.core.exceptions import ValidationError

from apps.tenants.models import Activity
from shared.masking import mask_phone


def test_session_times_are_sorted_and_deduplicated():
    activity = Activity(default_times=["14:00", "09:00", "14:00", "bozuk"])

    assert activity.session_times() == [time(9, 0), time(14, 0)]


def test_invalid_default_time_fails_validation():
    with pytest.raises(ValidationError):
        Activity(default_times=["25:99"]).clean()


def test_display_currency_falls_back_to_setting(settings):
    settings.DEFAULT_CURRENCY = "EUR"

    assert Activity(currency="").display_currency == "EUR"
    assert Activity(currency="USD").display_currency == "USD"


@pytest.mark.parametrize(
    "phone, masked",
    [
        ("+905321234567", "+90*******567"),
        ("12345", "*****"),
        ("", ""),
        (None, ""),
    ],
)
def test_mask_phone(phone, masked):
    assert mask_phone(phone) == masked
