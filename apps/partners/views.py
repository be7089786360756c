"""API views for the partner share registry."""

from __future__ import annotations

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.api.permissions import IsTenantManager, IsTenantMember

from . import services
from .models import ActivityShare, Partnership
from .serializers import (
    AcceptPartnershipSerializer,
    ActivityShareSerializer,
    AvailabilityQuerySerializer,
    PartnershipSerializer,
)


class PartnershipViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Ortaklık daveti, kabul ve iptal."""

    serializer_class = PartnershipSerializer
    permission_classes = [IsTenantManager]
    filterset_fields = ["status"]

    def get_queryset(self):  # type: ignore
        return (
            Partnership.objects.involving(self.request.user.tenant)
            .select_related("tenant", "partner_tenant")
        )

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        partnership = services.invite_partner(
            request.user.tenant,
            serializer.validated_data["partner_tenant"],
        )
        return Response(self.get_serializer(partnership).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def accept(self, request):  # type: ignore
        serializer = AcceptPartnershipSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        partnership = services.accept_partnership(serializer.validated_data["inviteCode"], request.user.tenant)
        return Response(self.get_serializer(partnership).data)

    @action(detail=True, methods=["post"])
    def revoke(self, request, pk=None):  # type: ignore
        partnership = services.revoke_partnership(self.get_object().pk, request.user.tenant)
        return Response(self.get_serializer(partnership).data)


class ActivityShareViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Shares of the acting tenant's own activities."""

    serializer_class = ActivityShareSerializer
    permission_classes = [IsTenantManager]
    filterset_fields = ["partnership"]

    def get_queryset(self):  # type: ignore
        return ActivityShare.objects.filter(activity__tenant=self.request.user.tenant).select_related("activity")

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        share = services.share_activity(
            data["activity"],
            data["partnership"],
            price=data.get("partner_unit_price"),
            currency=data.get("currency"),
        )
        return Response(self.get_serializer(share).data, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance: ActivityShare) -> None:  # type: ignore
        services.unshare(instance.activity, instance.partnership)


class SharedAvailabilityView(APIView):
    """Partner kontenjanları: aktif ortaklıklar üzerinden paylaşılan aktiviteler."""

    permission_classes = [IsTenantMember]

    def get(self, request):  # type: ignore
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        partners = services.list_shared_availability(
            request.user.tenant,
            query.validated_data["startDate"],
            query.validated_data["endDate"],
        )
        return Response([partner.to_dict() for partner in partners])
