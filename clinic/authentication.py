"""
Bearer token authentication for the API.

This module defines a subclass of simplejwt's ``JWTAuthentication``.
The parent already rejects tokens whose user is missing or inactive;
the subclass additionally refuses doctors whose approval has been
withdrawn, so a token minted before that change stops working.

DRF imports this class while its own settings are initialising, so the
module must not import anything from the project.
"""
from __future__ import annotations

from rest_framework import exceptions
from rest_framework_simplejwt import authentication


class JWTAuthentication(authentication.JWTAuthentication):
    """Resolve ``Authorization: Bearer <jwt>`` to an active, approved user."""

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if getattr(user, 'is_doctor', False) and not user.is_approved:
            raise exceptions.AuthenticationFailed('Your account is pending admin approval.')
        return user
