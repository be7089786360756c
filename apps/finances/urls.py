"""URL routing for the finance domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import PartnerTransactionViewSet

router = DefaultRouter()
router.register(r"partner-transactions", PartnerTransactionViewSet, basename="partner-transaction")

urlpatterns = [
    path("", include(router.urls)),
]
