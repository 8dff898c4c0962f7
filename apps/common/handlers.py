"""
Project-wide DRF exception handler.

Every error leaves the API as ``{"success": false, "message": ..., "code": ...}``.
Field validation errors additionally carry ``errors``.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Dig the first human-readable string out of a DRF error detail."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            if key == 'non_field_errors':
                return message
            return f'{key}: {message}'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        # Not an API error: log it and hide the details from the caller
        view = context.get('view')
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else 'view')
        return Response(
            {'success': False, 'message': 'Internal server error', 'code': 'server_error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = getattr(exc, 'default_code', 'error')
    body = {'success': False, 'code': code}

    if isinstance(exc, ValidationError):
        body['message'] = _first_message(exc.detail) or 'Invalid input.'
        body['errors'] = response.data
    else:
        detail = getattr(exc, 'detail', None)
        if detail is None and isinstance(response.data, dict):
            detail = response.data.get('detail', '')
        body['message'] = _first_message(detail)

    if response.status_code >= 500:
        logger.error("%s: %s", exc.__class__.__name__, body['message'])

    response.data = body
    return response
