"""URL routing for capacity slots."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CapacitySlotViewSet

router = DefaultRouter()
router.register(r"slots", CapacitySlotViewSet, basename="capacity-slot")

urlpatterns = [
    path("", include(router.urls)),
]
