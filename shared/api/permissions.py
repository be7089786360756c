"""Permission classes shared by the exchange API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsTenantMember(permissions.BasePermission):
    """
    Authenticated user bound to an active tenant.

    The acting tenant is always resolved from the server-side user record,
    never from anything the client sends.
    """

    message = "Hesabınız bir acenteye bağlı değil."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        tenant = getattr(user, "tenant", None)
        return bool(tenant and tenant.is_active)


class IsTenantManager(IsTenantMember):
    """Tenant member allowed to make owner decisions (viewers are read-only)."""

    message = "Bu işlem için acente yöneticisi olmalısınız."

    def has_permission(self, request, view) -> bool:  # type: ignore
        if not super().has_permission(request, view):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return not request.user.is_viewer()
