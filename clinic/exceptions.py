"""
Error taxonomy and the unified API exception handler.

Domain errors are DRF exceptions so they map straight onto HTTP
statuses.  ``TransportError`` is the odd one out: it is raised by the
notification gateway and caught by the dispatcher, so it never reaches
a response.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

ValidationError = exceptions.ValidationError


class NotFoundError(exceptions.NotFound):
    default_detail = 'Not found'


class AuthorizationError(exceptions.PermissionDenied):
    default_detail = 'Not authorized to perform this action'


class AuthenticationError(exceptions.AuthenticationFailed):
    default_detail = 'Invalid credentials'


class TransportError(Exception):
    """A notification channel (mail relay, SMS gateway) failed."""

    def __init__(self, channel: str, message: str):
        super().__init__(f"{channel}: {message}")
        self.channel = channel


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for key, value in detail.items():
            msg = _first_message(value)
            return msg if key == 'non_field_errors' else f"{key}: {msg}"
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', view.__class__.__name__ if view else 'view', exc_info=exc)
        payload = {'success': False, 'message': 'Server error'}
        if settings.DEBUG:
            payload['error'] = str(exc)
        return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    payload = {'success': False, 'message': _first_message(resp.data)}
    if isinstance(exc, exceptions.ValidationError) and isinstance(resp.data, (dict, list)):
        payload['errors'] = resp.data
    return Response(payload, status=resp.status_code, headers=_auth_headers(resp))


def _auth_headers(resp) -> dict:
    headers = {}
    for name in ('WWW-Authenticate', 'Retry-After'):
        if resp.has_header(name):
            headers[name] = resp[name]
    return headers
