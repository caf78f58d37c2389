"""
Unit Tests for Exception Handlers.

Tests the exception handler functions in isolation.
"""

import json

import pytest
from unittest.mock import MagicMock
from fastapi import Request
from fastapi.exceptions import RequestValidationError

from notekeeper.backend.core.exception_handlers import (
    EXCEPTION_STATUS_MAP,
    _get_request_id,
    application_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from notekeeper.backend.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def mock_request():
    """Create a mock request carrying only an x-request-id header."""
    request = MagicMock(spec=Request)
    request.url.path = "/notes/1"
    request.method = "GET"
    request.headers = {"x-request-id": "test-123"}
    del request.state.request_id
    return request


def _body(response) -> dict:
    return json.loads(response.body)


class TestExceptionStatusMapping:
    """Tests for exception to HTTP status code mapping."""

    @pytest.mark.parametrize(
        ("exc_type", "status"),
        [
            (NotFoundError, 404),
            (ValidationError, 400),
            (ConflictError, 409),
            (ExternalServiceError, 502),
            (DatabaseError, 503),
        ],
    )
    def test_status_codes(self, exc_type, status):
        """Each application error has a fixed status code."""
        assert EXCEPTION_STATUS_MAP[exc_type] == status


class TestGetRequestId:
    """Tests for request ID extraction."""

    def test_extracts_from_request_state(self):
        """Should prefer request.state over the header."""
        request = MagicMock(spec=Request)
        request.state.request_id = "state-123"
        request.headers = {"x-request-id": "header-456"}

        assert _get_request_id(request) == "state-123"

    def test_extracts_from_header(self, mock_request):
        """Should fall back to the x-request-id header."""
        assert _get_request_id(mock_request) == "test-123"

    def test_returns_none_when_not_present(self):
        """Should return None when no request_id available."""
        request = MagicMock(spec=Request)
        del request.state.request_id
        request.headers = {}

        assert _get_request_id(request) is None


class TestApplicationErrorHandler:
    """Tests for application_error_handler."""

    @pytest.mark.asyncio
    async def test_not_found_returns_404(self, mock_request):
        """NotFoundError should produce the error envelope with 404."""
        response = await application_error_handler(
            mock_request, NotFoundError("Note with id 1 not found")
        )

        assert response.status_code == 404
        body = _body(response)
        assert body["success"] is False
        assert body["data"] is None
        assert body["error"]["code"] == "RES_NOT_FOUND"
        assert body["error"]["message"] == "Note with id 1 not found"
        assert body["metadata"]["request_id"] == "test-123"

    @pytest.mark.asyncio
    async def test_validation_error_includes_details(self, mock_request):
        """ValidationError details are returned to the caller."""
        exc = ValidationError("Required fields missing", details={"missing_fields": ["title"]})

        response = await application_error_handler(mock_request, exc)

        assert response.status_code == 400
        assert _body(response)["error"]["details"] == {"missing_fields": ["title"]}

    @pytest.mark.asyncio
    async def test_database_error_returns_503(self, mock_request):
        """DatabaseError should return 503."""
        response = await application_error_handler(mock_request, DatabaseError())

        assert response.status_code == 503
        assert _body(response)["error"]["code"] == "SYS_DATABASE_ERROR"

    @pytest.mark.asyncio
    async def test_conflict_omits_details(self, mock_request):
        """Only ValidationError carries details into the envelope."""
        response = await application_error_handler(mock_request, ConflictError("Resource already exists"))

        assert response.status_code == 409
        body = _body(response)
        assert body["error"]["code"] == "RES_CONFLICT"
        assert body["error"]["details"] is None

    @pytest.mark.asyncio
    async def test_base_application_error_returns_500(self, mock_request):
        """Unmapped application errors fall back to 500."""
        response = await application_error_handler(mock_request, ApplicationError("boom"))

        assert response.status_code == 500


class TestValidationErrorHandler:
    """Tests for validation_error_handler."""

    @pytest.mark.asyncio
    async def test_returns_422_with_field_list(self, mock_request):
        """Request validation errors list every failing field."""
        exc = RequestValidationError([
            {"loc": ("body", "title"), "msg": "Field required", "type": "missing"},
        ])

        response = await validation_error_handler(mock_request, exc)

        assert response.status_code == 422
        body = _body(response)
        assert body["error"]["code"] == "VAL_REQUEST_INVALID"
        assert body["error"]["details"]["validation_errors"] == [
            {"field": "body.title", "message": "Field required", "type": "missing"},
        ]


class TestUnhandledExceptionHandler:
    """Tests for unhandled_exception_handler."""

    @pytest.mark.asyncio
    async def test_hides_exception_details(self, mock_request):
        """Unexpected errors return a generic 500 message."""
        response = await unhandled_exception_handler(mock_request, RuntimeError("secret"))

        assert response.status_code == 500
        body = _body(response)
        assert body["error"]["code"] == "SYS_INTERNAL_ERROR"
        assert "secret" not in body["error"]["message"]
