"""
Role-based permission classes shared by the sales and installments apps.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

from .models import UserRole


class IsAdminRole(BasePermission):
    """Allow only administrators."""

    message = 'Administrator access required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated and
            (user.is_superuser or user.role == UserRole.ADMIN)
        )


class IsFinanceStaffOrReadOnly(BasePermission):
    """
    Any authenticated staff member may read; only admins and accountants
    may change schedules, payments and notifications.

    Usage:
        permission_classes = [IsAuthenticated, IsFinanceStaffOrReadOnly]
    """

    message = 'Only administrators and accountants can modify financial records.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.can_manage_finance)
