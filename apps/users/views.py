"""Views exposing the authenticated user's server-side session state."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .serializers import CurrentUserSerializer


class CurrentUserView(APIView):
    """GET /api/v1/auth/me/ - who am I, for which tenant, with which role."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        return Response(CurrentUserSerializer(request.user).data)
