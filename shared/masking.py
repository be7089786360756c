"""Helpers that keep customer data out of log lines."""

from __future__ import annotations


def mask_phone(phone: str | None) -> str:
    """``+905321234567`` -> ``+90*******567``."""

    if not phone:
        return ""
    phone = str(phone)
    if len(phone) <= 6:
        return "*" * len(phone)
    return phone[:3] + "*" * (len(phone) - 6) + phone[-3:]
