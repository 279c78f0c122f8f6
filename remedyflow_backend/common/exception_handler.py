# common/exception_handler.py

"""
DRF EXCEPTION HANDLER (REST_FRAMEWORK["EXCEPTION_HANDLER"])

Translates every failure into the failure envelope:
- StorefrontError subclasses -> their own status + error label
- Django ValidationError (model.clean / full_clean) -> 400
- DRF APIException family (validation, auth, permission, 404, 405, throttle)
- anything else -> 500 "Unexpected", logged with traceback
"""

from __future__ import annotations

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from common.exceptions import StorefrontError
from common.responses import error_body

logger = logging.getLogger(__name__)

_DRF_ERROR_LABELS = {
    drf_exceptions.ValidationError: "Validation error",
    drf_exceptions.ParseError: "Validation error",
    drf_exceptions.NotAuthenticated: "Unauthorized",
    drf_exceptions.AuthenticationFailed: "Unauthorized",
    drf_exceptions.PermissionDenied: "Forbidden",
    drf_exceptions.NotFound: "Not found",
    Http404: "Not found",
    DjangoPermissionDenied: "Forbidden",
    drf_exceptions.MethodNotAllowed: "Method not allowed",
    drf_exceptions.Throttled: "Too many requests",
}


def _label_for(exc) -> str:
    for exc_type, label in _DRF_ERROR_LABELS.items():
        if isinstance(exc, exc_type):
            return label
    return "Request failed"


def _first_message(detail) -> str:
    """
    Flatten a DRF error detail (str | list | dict) into one readable line.
    """
    if isinstance(detail, dict):
        for field, value in detail.items():
            inner = _first_message(value)
            if field in ("detail", "non_field_errors"):
                return inner
            return f"{field}: {inner}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def _django_validation_details(exc: DjangoValidationError):
    if hasattr(exc, "error_dict"):
        return exc.message_dict
    return {"non_field_errors": exc.messages}


def envelope_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if isinstance(exc, StorefrontError):
        logger.info("%s rejected: %s (%s)", view_name, exc.error, exc.message)
        return Response(error_body(exc.error, exc.message), status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        details = _django_validation_details(exc)
        return Response(
            error_body("Validation error", _first_message(details), details=details),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception("Unexpected error in %s", view_name)
        return Response(
            error_body("Unexpected", str(exc) or exc.__class__.__name__),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    data = response.data
    details = data if isinstance(exc, drf_exceptions.ValidationError) else None
    response.data = error_body(_label_for(exc), _first_message(data), details=details)
    return response
