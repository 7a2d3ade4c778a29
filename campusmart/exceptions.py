"""
Error kinds shared by every app and the DRF handler that renders them.

Views and domain helpers raise these (or DRF's own NotFound /
PermissionDenied / ValidationError); the handler turns each one into
``{"error": <kind>, "message": <text>}``.
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


class InvalidArgument(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid argument."
    default_code = "invalid_argument"


class Transient(exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service temporarily unavailable, please retry."
    default_code = "transient"


ERROR_KINDS = (
    (exceptions.NotFound, "NotFound"),
    (Conflict, "Conflict"),
    (InvalidArgument, "InvalidArgument"),
    (exceptions.ValidationError, "InvalidArgument"),
    (exceptions.ParseError, "InvalidArgument"),
    (exceptions.PermissionDenied, "Unauthorized"),
    (exceptions.NotAuthenticated, "Unauthorized"),
    (exceptions.AuthenticationFailed, "Unauthorized"),
    (Transient, "Transient"),
)


def error_kind(exc):
    for klass, kind in ERROR_KINDS:
        if isinstance(exc, klass):
            return kind
    return getattr(exc, "default_code", "error")


def _message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _message(value)
        return ""
    if isinstance(detail, list):
        return _message(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(str(exc) or None)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()
    elif isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception("Database error in %s", view.__class__.__name__ if view else "unknown view")
        exc = Transient()

    response = exception_handler(exc, context)
    if response is None:
        return None

    body = {"error": error_kind(exc), "message": _message(exc.detail)}
    if isinstance(exc, exceptions.ValidationError) and isinstance(exc.detail, dict):
        body["errors"] = exc.detail
    response.data = body
    return response
