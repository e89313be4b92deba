"""Pytest configuration and shared fixtures for the Feed Reader tests."""

import logging
import socket
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from feedreader.main import create_app
from factories import InMemoryExecutor


# Disable logging for cleaner test output
logging.getLogger("asyncio").setLevel(logging.WARNING)
logging.getLogger("asyncpg").setLevel(logging.WARNING)


@pytest.fixture
def memory_store():
    """Route store listings to an in-memory executor.

    Usage: ``executor = memory_store(rows, "published", predicate)``.
    """
    patcher = None

    def _install(rows, column, predicate=None) -> InMemoryExecutor:
        nonlocal patcher
        executor = InMemoryExecutor(rows, column, predicate)
        patcher = patch(
            "feedreader.db.pages.get_db_pool",
            AsyncMock(return_value=executor)
        )
        patcher.start()
        return executor

    yield _install

    if patcher is not None:
        patcher.stop()


@pytest.fixture
def app() -> FastAPI:
    """Create FastAPI application instance for testing."""
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client; the lifespan (and so the database pool) is not started."""
    return TestClient(app)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


def pytest_runtest_setup(item):
    """Skip tests that require database if it's not available."""
    if item.get_closest_marker("integration"):
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            sock.settimeout(1)
            result = sock.connect_ex(("localhost", 5432))
            sock.close()
            if result != 0:
                pytest.skip("PostgreSQL database not available for integration tests")
        except OSError:
            pytest.skip("Cannot verify database availability for integration tests")
