"""Permission classes for admin routes."""

from __future__ import annotations

from rest_framework.permissions import BasePermission

from modules.core.context import AdminContext


class IsAdmin(BasePermission):
    """Allow any request authenticated with an admin token."""

    def has_permission(self, request, view) -> bool:
        return isinstance(request.user, AdminContext)


def require_role(*roles: str) -> type[BasePermission]:
    """Build a permission class accepting only the given admin roles."""

    class HasAdminRole(IsAdmin):
        message = "Insufficient permissions"

        def has_permission(self, request, view) -> bool:
            return super().has_permission(request, view) and request.user.has_role(
                *roles
            )

    HasAdminRole.__name__ = f"HasAdminRole[{','.join(roles)}]"
    return HasAdminRole
