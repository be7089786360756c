"""API views for the reservation request exchange.

Transitions commit before notifications go out. A failed delivery is
reported in the response's ``warnings`` list and never undoes the
transition.
"""

from __future__ import annotations

import logging

from django.db.models import Q  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.notifications.services import notify_request_status
from shared.api.permissions import IsTenantManager, IsTenantMember

from . import services
from .filters import ReservationRequestFilterSet
from .models import ReservationRequest
from .serializers import (
    ProcessNotesSerializer,
    ReservationRequestCreateSerializer,
    ReservationRequestSerializer,
)

logger = logging.getLogger(__name__)


class ReservationRequestViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Talepler: gelen (sahibi olduğumuz) ve giden (gönderdiğimiz)."""

    serializer_class = ReservationRequestSerializer
    permission_classes = [IsTenantManager]
    filterset_class = ReservationRequestFilterSet

    def get_permissions(self):  # type: ignore
        # Viewers place and withdraw their own requests; only managers decide on incoming ones
        if self.action in ("approve", "reject", "convert"):
            return [IsTenantManager()]
        return [IsTenantMember()]

    def get_queryset(self):  # type: ignore
        tenant = self.request.user.tenant
        return (
            ReservationRequest.objects.filter(Q(owner_tenant=tenant) | Q(origin_tenant=tenant))
            .exclude(status=ReservationRequest.Status.DELETED)
            .select_related("activity", "origin_tenant", "requested_by")
        )

    def _respond(self, request_obj: ReservationRequest, event: str | None = None, **extra) -> Response:  # type: ignore
        data = dict(self.get_serializer(request_obj).data)
        warnings: list[str] = []
        if event is not None:
            result = notify_request_status(request_obj, event)
            if result.warning:
                warnings.append(result.warning)
        data.update(extra)
        data["warnings"] = warnings
        return Response(data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ReservationRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        request_obj = services.create_request(
            request.user,
            serializer.validated_data["activityId"],
            **serializer.to_service_kwargs(),
        )
        return Response(self.get_serializer(request_obj).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_request(self.get_object().pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def incoming(self, request):  # type: ignore
        queryset = services.incoming_requests(request.user.tenant, request.query_params.get("status"))
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):  # type: ignore
        notes = ProcessNotesSerializer(data=request.data)
        notes.is_valid(raise_exception=True)
        request_obj = services.approve(self.get_object().pk, request.user, notes.validated_data.get("processNotes"))
        return self._respond(request_obj, "approved")

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):  # type: ignore
        notes = ProcessNotesSerializer(data=request.data)
        notes.is_valid(raise_exception=True)
        request_obj = services.reject(self.get_object().pk, request.user, notes.validated_data.get("processNotes"))
        return self._respond(request_obj, "rejected")

    @action(detail=True, methods=["post"])
    def convert(self, request, pk=None):  # type: ignore
        result = services.convert(self.get_object().pk, request.user)
        return self._respond(
            result.request,
            "converted" if result.created else None,
            partnerTransactionId=result.transaction.pk if result.transaction else None,
        )

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        notes = ProcessNotesSerializer(data=request.data)
        notes.is_valid(raise_exception=True)
        request_obj = services.cancel(self.get_object().pk, request.user, notes.validated_data.get("processNotes"))
        return self._respond(request_obj)
