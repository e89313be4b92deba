"""Tests for main FastAPI application."""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from contextlib import asynccontextmanager

from feedreader.main import create_app


class TestMainApp:
    """Test main FastAPI application."""

    @pytest.fixture
    def mock_get_db_pool(self):
        """Mock get_db_pool function."""
        with patch("feedreader.main.get_db_pool") as mock:
            mock_pool = AsyncMock()
            mock_conn = AsyncMock()

            @asynccontextmanager
            async def mock_acquire():
                yield mock_conn

            mock_pool.acquire = mock_acquire
            mock.return_value = mock_pool
            yield mock

    @pytest.fixture
    def client(self, mock_get_db_pool):
        """Create test client."""
        return TestClient(create_app())

    def test_create_app(self):
        """Test app creation."""
        app = create_app()

        assert app.title == "Feed Reader"
        assert app.version == "1.0.0"
        assert app.docs_url == "/docs"
        assert app.openapi_url == "/openapi.json"

    def test_liveness_check(self, client):
        response = client.get("/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive", "service": "Feed Reader"}

    def test_healthz(self, client):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"up": True}

    def test_health_check_success(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_health_check_database_failure(self, client, mock_get_db_pool):
        mock_get_db_pool.side_effect = Exception("Database connection failed")

        response = client.get("/health")

        assert response.status_code == 503
        assert response.headers["content-type"] == "application/problem+json"
        data = response.json()
        assert data["title"] == "Service Unavailable"
        assert data["database_error"] == "Database connection failed"

    def test_unknown_route_is_problem_json(self, client):
        response = client.get("/v1/nothing-here")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"

    def test_openapi_lists_json_routes_only(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/v1/articles" in paths
        assert "/v1/feeds/{feed_id}/refresh" in paths
        assert "/favorites.html" not in paths

    def test_exception_handlers_registered(self):
        assert len(create_app().exception_handlers) > 0
