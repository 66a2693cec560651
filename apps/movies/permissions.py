from rest_framework import permissions


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Permission: Anyone can read the catalog.
    Only admins (is_staff) can change it.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True

        return bool(request.user and request.user.is_authenticated and request.user.is_staff)
