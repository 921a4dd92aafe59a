"""
Tests for application exceptions and their HTTP rendering.

Tests cover:
- to_dict shape and default error codes
- ResourceExhaustedError limit/actual details
- api_exception_handler status mapping and DRF fallthrough
"""

from __future__ import annotations

from rest_framework.exceptions import NotAuthenticated

from core.exception_handler import api_exception_handler
from core.exceptions import (
    ConflictError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
    ResourceExhaustedError,
)


class TestApplicationErrors:
    """Tests for the exception hierarchy."""

    def test_to_dict_without_details(self):
        error = InvalidArgumentError("description is required")

        assert error.to_dict() == {
            "error": "description is required",
            "error_code": "INVALID_ARGUMENT",
        }

    def test_custom_error_code(self):
        error = InvalidArgumentError("bad type", error_code="UNSUPPORTED_MIME_TYPE")

        assert error.error_code == "UNSUPPORTED_MIME_TYPE"
        assert str(error) == "[UNSUPPORTED_MIME_TYPE] bad type"

    def test_resource_exhausted_details(self):
        error = ResourceExhaustedError("Too many images", limit=10, actual=12)

        assert error.limit == 10
        assert error.actual == 12
        assert error.to_dict()["details"] == {"limit": 10, "actual": 12}

    def test_http_statuses(self):
        assert InvalidArgumentError("x").http_status == 400
        assert PermissionDeniedError("x").http_status == 403
        assert NotFoundError("x").http_status == 404
        assert ConflictError("x").http_status == 409
        assert ResourceExhaustedError("x", limit=1, actual=2).http_status == 429
        assert InternalError("x").http_status == 500


class TestApiExceptionHandler:
    def test_renders_application_error(self):
        response = api_exception_handler(
            PermissionDeniedError("not yours", error_code="MEDIA_NOT_OWNED"), {}
        )

        assert response.status_code == 403
        assert response.data == {"error": "not yours", "error_code": "MEDIA_NOT_OWNED"}

    def test_falls_through_to_drf(self):
        response = api_exception_handler(NotAuthenticated(), {})

        assert response.status_code == 401

    def test_unknown_exception_returns_none(self):
        assert api_exception_handler(ValueError("boom"), {}) is None
