"""URL routing for reservation requests."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import ReservationRequestViewSet

router = SimpleRouter()
router.register(r"", ReservationRequestViewSet, basename="reservation-request")

urlpatterns = [
    path("", include(router.urls)),
]
