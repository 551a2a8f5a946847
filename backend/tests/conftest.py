"""
svc-notes: Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own SQLite database file (sqlite+aiosqlite) under
       pytest's tmp_path, with the schema created through the gateway.

Fixture Hierarchy (all function-scoped):
    database_url ─▶ settings ─┐
                  └▶ gateway ─┼▶ app ─▶ test_client
       metrics ───────────────┘
    mock_gateway:        AsyncMock standing in for NoteGateway
    unreachable_gateway: gateway pointed at a path that cannot be opened
"""

import os
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ["LOG_LEVEL"] = "WARNING"

from svc_notes.config import Settings  # noqa: E402
from svc_notes.gateway import NoteGateway  # noqa: E402
from svc_notes.main import create_app  # noqa: E402
from svc_notes.metrics import MetricsRegistry  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"


@pytest.fixture
def settings(database_url):
    return Settings(database_url=database_url)


@pytest_asyncio.fixture
async def gateway(database_url):
    """A NoteGateway on a fresh SQLite database with the notes table created."""
    gw = NoteGateway(database_url)
    await gw.create_schema()
    yield gw
    await gw.close()


@pytest_asyncio.fixture
async def unreachable_gateway(tmp_path):
    gw = NoteGateway(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'notes.db'}")
    yield gw
    await gw.close()


@pytest.fixture
def mock_gateway():
    """
    A NoteGateway double.

    Usage:
        mock_gateway.create_note.side_effect = PersistenceError()
    """
    gw = AsyncMock(spec=NoteGateway)
    gw.list_notes.return_value = []
    gw.ping.return_value = True
    return gw


@pytest.fixture
def metrics():
    return MetricsRegistry()


@pytest.fixture
def app(settings, gateway, metrics):
    return create_app(settings, gateway=gateway, metrics=metrics)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app through ASGITransport.

    Usage:
        async def test_healthz(test_client):
            response = await test_client.get("/healthz")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def client_for():
    """Builds clients for apps assembled inside a test (custom gateways)."""
    def _client_for(app) -> AsyncClient:
        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://test")
    return _client_for
