"""Domain error taxonomy and the project-wide DRF exception handler.

Every module raises subclasses of ``DomainError``.  Views catch their own
module's exceptions and render them with ``error_response``; anything that
escapes a view ends up in ``envelope_exception_handler``, which keeps the
response shape uniform and never leaks internal detail on a 500.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

import structlog
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import set_rollback

from modules.core.responses import error_response

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."


class DomainError(Exception):
    """Base class of every business error raised by the Service Layer."""

    http_status: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])


class InvalidRequest(DomainError):
    """Caller-fixable problem: bad input, missing reference, not enough stock."""

    http_status = status.HTTP_400_BAD_REQUEST


class NotFound(DomainError):
    """The addressed resource does not exist."""

    http_status = status.HTTP_404_NOT_FOUND


class Conflict(DomainError):
    """The write would violate a uniqueness rule."""

    http_status = status.HTTP_409_CONFLICT


class InternalError(DomainError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_error_response(exc: DomainError) -> Response:
    return error_response(exc.message, status=exc.http_status, errors=exc.errors)


# ----------------------------------------------------------------------
# DRF integration
# ----------------------------------------------------------------------


def _flatten(detail: Any, prefix: str = "") -> List[str]:
    """Flatten DRF ``ErrorDetail`` trees into ``"field: message"`` strings."""
    if isinstance(detail, dict):
        messages: List[str] = []
        for key, value in detail.items():
            if key == "non_field_errors":
                child = prefix
            elif isinstance(key, int):
                # Newer DRF reports many=True children keyed by index.
                child = f"{prefix}[{key}]"
            else:
                child = f"{prefix}.{key}" if prefix else str(key)
            messages.extend(_flatten(value, child))
        return messages
    if isinstance(detail, list):
        messages = []
        for index, value in enumerate(detail):
            # Lists of dicts are nested serializers (e.g. order lines).
            child = f"{prefix}[{index}]" if isinstance(value, dict) else prefix
            messages.extend(_flatten(value, child))
        return messages
    return [f"{prefix}: {detail}" if prefix else str(detail)]


def envelope_exception_handler(exc: Exception, context: dict) -> Response:
    """DRF ``EXCEPTION_HANDLER`` producing the uniform response envelope."""
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(exc, DomainError):
        set_rollback()
        logger.info(
            "api.domain_error",
            view=view_name,
            error=type(exc).__name__,
            status_code=exc.http_status,
        )
        return domain_error_response(exc)

    if isinstance(exc, drf_exceptions.ValidationError):
        set_rollback()
        return error_response(
            "Validation failed",
            status=status.HTTP_400_BAD_REQUEST,
            errors=_flatten(exc.detail),
        )

    if isinstance(exc, Http404):
        exc = drf_exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = drf_exceptions.PermissionDenied()

    if isinstance(exc, drf_exceptions.APIException):
        set_rollback()
        structured = isinstance(exc.detail, (dict, list))
        response = error_response(
            "Request failed" if structured else str(exc.detail),
            status=exc.status_code,
            errors=_flatten(exc.detail) if structured else [],
        )
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            response["WWW-Authenticate"] = auth_header
        wait = getattr(exc, "wait", None)
        if wait is not None:
            response["Retry-After"] = str(int(wait))
        return response

    set_rollback()
    logger.error("api.unhandled_exception", view=view_name, exc_info=exc)
    return domain_error_response(InternalError(GENERIC_ERROR_MESSAGE))
