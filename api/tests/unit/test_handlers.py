"""Tests for exception handlers."""

import json

import pytest
from unittest.mock import Mock
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from feedreader.errors.handlers import (
    problem_detail_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from feedreader.errors.problem_details import InvalidPaginationTokenError, InternalServerError


class TestExceptionHandlers:
    """Test exception handlers."""

    @pytest.fixture
    def mock_request(self):
        """Create mock request."""
        request = Mock(spec=Request)
        request.url.path = "/v1/articles"
        request.method = "GET"
        return request

    @pytest.mark.asyncio
    async def test_problem_detail_exception_handler(self, mock_request):
        """Test ProblemDetailException handler."""
        exc = InvalidPaginationTokenError("yesterday", "published")

        response = await problem_detail_exception_handler(mock_request, exc)

        assert response.status_code == 400
        assert response.headers["Content-Type"] == "application/problem+json"
        body = json.loads(response.body)
        assert body["instance"] == "/v1/articles"
        assert body["field"] == "published"

    @pytest.mark.asyncio
    async def test_server_errors_are_logged_as_errors(self, mock_request, caplog):
        """5xx problems log at error level, caller errors at info."""
        with caplog.at_level("INFO", logger="feedreader.errors.handlers"):
            await problem_detail_exception_handler(mock_request, InternalServerError())
            await problem_detail_exception_handler(
                mock_request, InvalidPaginationTokenError("x", "published")
            )

        levels = [record.levelname for record in caplog.records]
        assert levels == ["ERROR", "INFO"]

    @pytest.mark.asyncio
    async def test_http_exception_handler_fastapi(self, mock_request):
        """Test FastAPI HTTPException handler."""
        exc = HTTPException(status_code=404, detail="Not found")

        response = await http_exception_handler(mock_request, exc)

        assert response.status_code == 404
        assert response.headers["Content-Type"] == "application/problem+json"
        assert json.loads(response.body)["title"] == "Not Found"

    @pytest.mark.asyncio
    async def test_http_exception_handler_starlette(self, mock_request):
        """Test Starlette HTTPException handler."""
        exc = StarletteHTTPException(status_code=405, detail="Method Not Allowed")

        response = await http_exception_handler(mock_request, exc)

        assert response.status_code == 405
        assert response.headers["Content-Type"] == "application/problem+json"

    @pytest.mark.asyncio
    async def test_http_exception_handler_with_headers(self, mock_request):
        """Test HTTPException handler keeps custom headers."""
        exc = HTTPException(status_code=503, detail="Down", headers={"Retry-After": "60"})

        response = await http_exception_handler(mock_request, exc)

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "60"

    @pytest.mark.asyncio
    async def test_validation_exception_handler(self, mock_request):
        """Test RequestValidationError handler."""
        errors = [
            {"loc": ("body", "feed_url"), "msg": "field required", "type": "missing"},
            {"loc": ("path", "feed_id"), "msg": "value is not a valid integer", "type": "int_parsing"}
        ]

        response = await validation_exception_handler(mock_request, RequestValidationError(errors))

        assert response.status_code == 422
        assert response.headers["Content-Type"] == "application/problem+json"
        body = json.loads(response.body)
        assert body["validation_errors"] == [
            "body -> feed_url: field required",
            "path -> feed_id: value is not a valid integer"
        ]

    @pytest.mark.asyncio
    async def test_general_exception_handler(self, mock_request):
        """Test general exception handler hides internals."""
        exc = Exception("connection string with password")

        response = await general_exception_handler(mock_request, exc)

        assert response.status_code == 500
        assert response.headers["Content-Type"] == "application/problem+json"
        assert "password" not in response.body.decode()
