"""
API-wide exception handling.

Every error leaving the API has the same JSON shape::

    {"message": "...", "errors": {...}}

``errors`` is only present for validation failures and maps each failing
field to its list of messages.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """DRF ``EXCEPTION_HANDLER`` producing ``{message, errors?}`` bodies."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            "Unhandled error in %s",
            view.__class__.__name__ if view is not None else 'API view',
            exc_info=exc,
        )
        body = {'message': 'Internal server error'}
        if settings.DEBUG:
            body['detail'] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        errors = response.data
        if not isinstance(errors, dict):
            errors = {'non_field_errors': errors}
        response.data = {
            'message': 'Validation failed',
            'errors': errors,
        }
        return response

    detail = None
    if isinstance(response.data, dict):
        detail = response.data.get('detail')
    response.data = {'message': str(detail) if detail is not None else str(exc)}
    return response


def error_response(message, status_code):
    """Build the standard error body for a domain exception caught in a view."""
    return Response({'message': str(message)}, status=status_code)
