"""Unit tests for the envelope exception handler and response helpers."""

from __future__ import annotations

import pytest
from django.http import Http404
from pydantic import BaseModel, Field, ValidationError
from rest_framework import exceptions as drf_exceptions

from modules.core.exceptions import (
    GENERIC_ERROR_MESSAGE,
    Conflict,
    DomainError,
    InternalError,
    InvalidRequest,
    NotFound,
    _flatten,
    envelope_exception_handler,
)
from modules.core.responses import envelope, pydantic_errors, success_response

pytestmark = pytest.mark.unit


class _Sample(BaseModel):
    quantity: int = Field(gt=0)


class TestEnvelope:
    def test_shape(self):
        assert envelope({"id": 1}, "ok") == {
            "success": True,
            "message": "ok",
            "errors": [],
            "data": {"id": 1},
        }

    def test_success_response_status(self):
        response = success_response({"id": 1}, "Created", status=201)
        assert response.status_code == 201
        assert response.data["success"] is True


class TestFlatten:
    def test_nested_serializer_errors(self):
        detail = {
            "client_id": ["This field is required."],
            "lines": [{}, {"quantity": ["Ensure this value is greater than or equal to 0.01."]}],
        }
        assert _flatten(detail) == [
            "client_id: This field is required.",
            "lines[1].quantity: Ensure this value is greater than or equal to 0.01.",
        ]

    def test_nested_errors_keyed_by_index(self):
        detail = {"lines": {1: {"quantity": ["Ensure this value is greater than or equal to 0.01."]}}}
        assert _flatten(detail) == [
            "lines[1].quantity: Ensure this value is greater than or equal to 0.01."
        ]

    def test_line_level_errors_keyed_by_index(self):
        detail = {"lines": {0: {"non_field_errors": ["Invalid line."]}}}
        assert _flatten(detail) == ["lines[0]: Invalid line."]

    def test_non_field_errors_have_no_prefix(self):
        assert _flatten({"non_field_errors": ["Bad input."]}) == ["Bad input."]


class TestPydanticErrors:
    def test_formats_location_and_message(self):
        with pytest.raises(ValidationError) as exc_info:
            _Sample(quantity=0)
        assert pydantic_errors(exc_info.value) == [
            "quantity: Input should be greater than 0"
        ]


class TestEnvelopeExceptionHandler:
    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (InvalidRequest("bad"), 400),
            (NotFound("missing"), 404),
            (Conflict("taken"), 409),
        ],
    )
    def test_domain_errors(self, exc, status_code):
        response = envelope_exception_handler(exc, {})
        assert response.status_code == status_code
        assert response.data["success"] is False
        assert response.data["message"] == exc.message
        assert response.data["data"] is None

    def test_domain_error_keeps_errors(self):
        exc = DomainError("Nope", errors=["field: reason"])
        response = envelope_exception_handler(exc, {})
        assert response.data["errors"] == ["field: reason"]

    def test_drf_validation_error(self):
        exc = drf_exceptions.ValidationError({"name": ["This field is required."]})
        response = envelope_exception_handler(exc, {})
        assert response.status_code == 400
        assert response.data["message"] == "Validation failed"
        assert response.data["errors"] == ["name: This field is required."]

    def test_django_404(self):
        response = envelope_exception_handler(Http404("gone"), {})
        assert response.status_code == 404
        assert response.data["success"] is False

    def test_not_authenticated_keeps_header(self):
        exc = drf_exceptions.NotAuthenticated()
        exc.auth_header = 'Bearer realm="api"'
        response = envelope_exception_handler(exc, {})
        assert response.status_code == 401
        assert response["WWW-Authenticate"] == 'Bearer realm="api"'

    def test_throttled_sets_retry_after(self):
        response = envelope_exception_handler(drf_exceptions.Throttled(wait=42), {})
        assert response.status_code == 429
        assert response["Retry-After"] == "42"

    def test_internal_error_is_500(self):
        response = envelope_exception_handler(InternalError("Storage unavailable"), {})
        assert response.status_code == 500
        assert response.data["message"] == "Storage unavailable"

    def test_unexpected_error_hides_detail(self):
        exc = RuntimeError("connection to 10.0.0.5 refused")
        response = envelope_exception_handler(exc, {})
        assert response.status_code == 500
        assert response.data["message"] == GENERIC_ERROR_MESSAGE
        assert "10.0.0.5" not in str(response.data)
        assert response.data["errors"] == []
