"""URL routing for partnerships, shares and shared availability."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import ActivityShareViewSet, PartnershipViewSet, SharedAvailabilityView

router = DefaultRouter()
router.register(r"partnerships", PartnershipViewSet, basename="partnership")
router.register(r"shares", ActivityShareViewSet, basename="activity-share")

urlpatterns = [
    path("availability/", SharedAvailabilityView.as_view(), name="shared-availability"),
    path("", include(router.urls)),
]
