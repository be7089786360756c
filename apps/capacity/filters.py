"""FilterSet definitions for capacity slot listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import CapacitySlot


class CapacitySlotFilterSet(django_filters.FilterSet):
    activity = django_filters.NumberFilter(field_name="activity_id")
    startDate = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    endDate = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = CapacitySlot
        fields = ["activity", "startDate", "endDate"]
