"""URL routing for notifications."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import NotificationLogViewSet

router = SimpleRouter()
router.register(r'', NotificationLogViewSet, basename='notification')

urlpatterns = [path('', include(router.urls))]
