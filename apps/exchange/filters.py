"""FilterSet definitions for reservation requests."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import ReservationRequest


class ReservationRequestFilterSet(django_filters.FilterSet):
    """?direction=incoming|outgoing plus status, activity and date range."""

    status = django_filters.ChoiceFilter(choices=ReservationRequest.Status.choices)
    activity = django_filters.NumberFilter(field_name="activity_id")
    startDate = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    endDate = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    direction = django_filters.ChoiceFilter(
        choices=(("incoming", "incoming"), ("outgoing", "outgoing")),
        method="filter_direction",
    )

    class Meta:
        model = ReservationRequest
        fields = ["status", "activity", "startDate", "endDate", "direction"]

    def filter_direction(self, queryset, name, value):  # type: ignore
        tenant = self.request.user.tenant
        if value == "incoming":
            return queryset.filter(owner_tenant=tenant)
        return queryset.filter(origin_tenant=tenant)
