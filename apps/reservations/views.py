"""API views for reservations and the public tracking link."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.api.permissions import IsTenantManager

from . import services
from .models import Reservation
from .serializers import ReservationCreateSerializer, ReservationImportSerializer, ReservationSerializer


class ReservationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Acentenin kendi rezervasyonları."""

    serializer_class = ReservationSerializer
    permission_classes = [IsTenantManager]
    filterset_fields = ["status", "source", "activity", "date"]

    def get_queryset(self):  # type: ignore
        return Reservation.objects.filter(tenant=self.request.user.tenant).select_related("activity")

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ReservationCreateSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        reservation = services.create_reservation(
            request.user.tenant,
            serializer.validated_data["activityId"],
            **serializer.to_service_kwargs(),
        )
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="import")
    def import_external(self, request):  # type: ignore
        serializer = ReservationImportSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        reservation, created = services.import_external_reservation(
            request.user.tenant,
            serializer.validated_data["activityId"],
            serializer.validated_data["externalId"],
            **serializer.to_service_kwargs(),
        )
        return Response(
            ReservationSerializer(reservation).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        reservation = services.cancel_reservation(self.get_object().pk, request.user.tenant)
        return Response(ReservationSerializer(reservation).data)


class TrackReservationView(APIView):
    """Müşteri takip bağlantısı. Kimlik doğrulama gerektirmez."""

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]

    def get(self, request, token: str):  # type: ignore
        try:
            view = services.resolve_tracking(token)
        except services.TrackingTokenExpired:
            return Response(
                {"detail": "Takip bağlantısının süresi dolmuş."},
                status=status.HTTP_410_GONE,
            )
        if view is None:
            return Response(
                {"detail": "Rezervasyon bulunamadı."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(view.to_dict())
