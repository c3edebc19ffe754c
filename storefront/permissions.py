# storefront/permissions.py
from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.permissions import BasePermission


class FrontendOnlyPermission(BasePermission):
    def has_permission(self, request, view):
        key = getattr(settings, "FRONTEND_KEY", "")
        return bool(key) and request.headers.get("X-Frontend-Key") == key


class AdminLoginRequired(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "not_authenticated"

    def __init__(self):
        super().__init__(detail={"error": "Authentication required", "redirect": "/login"})


class AdminOnly(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "permission_denied"

    def __init__(self):
        super().__init__(detail={"error": "Access Denied: Admins only", "redirect": "/"})


def is_store_admin(user):
    if not user or not user.is_authenticated:
        return False
    profile = getattr(user, "profile", None)
    return bool(profile and profile.role == "admin")


class IsStoreAdmin(BasePermission):
    """
    No session -> 401 with redirect to /login.
    Signed in but profile role is not "admin" -> 403 with redirect to /.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            raise AdminLoginRequired()
        if not is_store_admin(user):
            raise AdminOnly()
        return True
