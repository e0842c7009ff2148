"""
Custom permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission


def _has_role(request, *roles: str) -> bool:
    user = getattr(request, "user", None)
    return bool(user and user.is_authenticated and getattr(user, "role", None) in roles)


class IsAdminRole(BasePermission):
    """Allow access only to administrators."""
    message = "Admin access required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, "admin")


class IsDoctorRole(BasePermission):
    """Allow access only to doctors."""
    message = "Doctor access required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, "doctor")


class IsPatientRole(BasePermission):
    """Allow access only to users with the patient role."""
    message = "Patient access required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _has_role(request, "patient")


class IsDoctorOrAdmin(BasePermission):
    """Allow access to doctors and administrators."""
    message = "Doctor or admin access required"

    def has_permission(self, request, view) -> bool:
        return _has_role(request, "doctor", "admin")
