"""Uniform response envelope for every API resource endpoint.

Shape::

    {"success": bool, "message": str, "errors": [str, ...], "data": ...}

Views build responses through ``success_response`` / ``error_response`` so
success and failure payloads never drift apart.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(
    data: Any = None,
    message: str = "",
    success: bool = True,
    errors: Optional[Iterable[str]] = None,
) -> dict:
    return {
        "success": success,
        "message": message,
        "errors": list(errors or []),
        "data": data,
    }


def success_response(
    data: Any,
    message: str = "",
    status: int = http_status.HTTP_200_OK,
) -> Response:
    return Response(envelope(data=data, message=message), status=status)


def error_response(
    message: str,
    status: int = http_status.HTTP_400_BAD_REQUEST,
    errors: Optional[Iterable[str]] = None,
) -> Response:
    return Response(
        envelope(data=None, message=message, success=False, errors=errors),
        status=status,
    )


def pydantic_errors(exc: PydanticValidationError) -> List[str]:
    """Turn a Pydantic ``ValidationError`` into ``"field: message"`` strings."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        text = error.get("msg", "Invalid value.")
        # Pydantic prefixes messages raised from validators with "Value error, "
        text = text.removeprefix("Value error, ")
        messages.append(f"{location}: {text}" if location else text)
    return messages
