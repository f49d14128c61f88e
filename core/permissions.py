from django.conf import settings
from rest_framework.permissions import BasePermission


class IsPlatformAdmin(BasePermission):
    """
    Staff users, or accounts listed in TOGETHR_ADMIN_EMAILS.
    """
    message = "Admin access required."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff:
            return True
        admin_emails = getattr(settings, "TOGETHR_ADMIN_EMAILS", [])
        return (user.email or "").lower() in admin_emails
