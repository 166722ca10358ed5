"""
Tests for the /health endpoint and the API root.

Verifies:
  - /health returns HTTP 200 with status="ok" even without a database
  - The DB disconnected state is reported, not raised
  - Root / returns the Sound Recorder API metadata

All tests run without a live MongoDB (db is mocked as disconnected in conftest).
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


async def test_health_returns_200(client):
    """Health endpoint must always return 200 if the API process is alive."""
    response = await client.get("/health")
    assert response.status_code == 200


async def test_health_response_schema(client):
    data = (await client.get("/health")).json()

    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["environment"] == "test"
    assert data["locations"] == 13


async def test_health_reports_configured_catalog_size(client):
    from app.core.catalog import get_catalog
    from app.main import app
    from app.models.location import Location

    app.dependency_overrides[get_catalog] = lambda: (Location(id="quad", name="Quad"),)
    try:
        data = (await client.get("/health")).json()
    finally:
        app.dependency_overrides.clear()
    assert data["locations"] == 1


async def test_health_disconnected_when_no_db(client):
    """With db_client.client = None the check reports 'disconnected'."""
    data = (await client.get("/health")).json()
    assert data["database"] == "disconnected"


async def test_health_connected_when_ping_succeeds(client):
    import app.core.database as db_module

    fake_client = MagicMock()
    fake_client.admin.command = AsyncMock(return_value={"ok": 1})
    db_module.db_client.client = fake_client  # restored by the mock_db fixture

    data = (await client.get("/health")).json()
    assert data["database"] == "connected"
    fake_client.admin.command.assert_awaited_once_with("ping")


async def test_health_ping_failure_is_not_an_error(client):
    import app.core.database as db_module

    fake_client = MagicMock()
    fake_client.admin.command = AsyncMock(side_effect=RuntimeError("no route to host"))
    db_module.db_client.client = fake_client

    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "disconnected"


async def test_root_endpoint(client):
    response = await client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data["name"] == "Sound Recorder API"
    assert data["status"] == "running"
    assert data["version"] == "0.1.0"


async def test_docs_available_in_test_env(client):
    """OpenAPI docs are only disabled when ENVIRONMENT=production."""
    response = await client.get("/docs")
    assert response.status_code == 200


@pytest.mark.parametrize("path", ["/does-not-exist", "/api/rankings/nope"])
async def test_unknown_route_returns_404(client, path):
    response = await client.get(path)
    assert response.status_code == 404
