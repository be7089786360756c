"""API views for the dispatch log and reconciliation report."""

from __future__ import annotations

from rest_framework import mixins, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.api.permissions import IsTenantManager, IsTenantMember

from .models import Dispatch
from .reconciliation import reconcile_reservations
from .serializers import DispatchSerializer, ReconciliationQuerySerializer


class DispatchViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = DispatchSerializer
    permission_classes = [IsTenantManager]
    filterset_fields = ["dispatch_date", "activity"]

    def get_queryset(self):  # type: ignore
        return Dispatch.objects.filter(tenant=self.request.user.tenant)

    def perform_create(self, serializer):  # type: ignore
        serializer.save(tenant=self.request.user.tenant)


class ReconciliationView(APIView):
    """Rezervasyon başına operasyon eşleşmesi. Sezgisel bir rapordur, kesinlik içermez."""

    permission_classes = [IsTenantMember]

    def get(self, request):  # type: ignore
        query = ReconciliationQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        results = reconcile_reservations(
            request.user.tenant,
            query.validated_data["startDate"],
            query.validated_data["endDate"],
            query.validated_data.get("strictness"),
        )
        return Response(
            [
                {
                    "reservationId": reservation.pk,
                    "date": reservation.date.isoformat(),
                    "time": reservation.time.strftime("%H:%M"),
                    "customerName": reservation.customer_name,
                    **result.to_dict(),
                }
                for reservation, result in results
            ]
        )
