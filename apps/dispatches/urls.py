"""URL routing for dispatches."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import DispatchViewSet, ReconciliationView

router = SimpleRouter()
router.register(r"", DispatchViewSet, basename="dispatch")

urlpatterns = [
    path("reconciliation/", ReconciliationView.as_view(), name="reconciliation"),
    path("", include(router.urls)),
]
