"""Permission classes built on the session principal and its admin flag."""

from rest_framework import permissions


class IsSignedIn(permissions.BasePermission):
    """Allow any request carrying a verified session cookie."""

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        return bool(user and getattr(user, "is_authenticated", False))


class IsSiteAdmin(IsSignedIn):
    """Allow signed-in users whose user record has the admin flag set.

    The flag is read from the database on every request; the
    ``admin-session`` cookie is never trusted for authorization.
    """

    message = "You do not have permission to perform this action on this resource."

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False
        return bool(getattr(request.user, "is_admin", False))


__all__ = ["IsSignedIn", "IsSiteAdmin"]
