"""URL configuration for the Turlink project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the versioned API routers provided by each app and the public customer
tracking endpoint.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore

from apps.reservations.views import TrackReservationView

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/auth/', include('apps.users.urls')),
    # Application URLs
    path('api/v1/partners/', include('apps.partners.urls')),
    path('api/v1/capacity/', include('apps.capacity.urls')),
    path('api/v1/reservations/', include('apps.reservations.urls')),
    path('api/v1/reservation-requests/', include('apps.exchange.urls')),
    path('api/v1/finances/', include('apps.finances.urls')),
    path('api/v1/dispatches/', include('apps.dispatches.urls')),
    path('api/v1/notifications/', include('apps.notifications.urls')),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    # Public customer tracking link
    path('track/<str:token>/', TrackReservationView.as_view(), name='track-reservation'),
]
