"""Database helpers shared by the domain services."""

from __future__ import annotations

from django.db import transaction  # type: ignore


def lock_queryset_if_possible(queryset):  # type: ignore
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset
    return queryset.select_for_update()
