"""
Tests for the /health endpoint.

Verifies:
  - Returns HTTP 200 with status="ok" (API liveness check)
  - Returns expected JSON schema
  - Reports the geometry state (unloaded until the first /map call in tests,
    since the ASGI test transport does not run the lifespan)
  - Root / endpoint returns API metadata
"""

import pytest


@pytest.mark.asyncio
async def test_health_returns_200(client):
    """Health endpoint must always return 200 if the API process is alive."""
    response = await client.get("/health")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_health_response_schema(client):
    data = (await client.get("/health")).json()

    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["environment"] == "test"
    assert data["geometry"] in ("loaded", "unavailable")


@pytest.mark.asyncio
async def test_health_unavailable_before_load(client):
    data = (await client.get("/health")).json()

    assert data["geometry"] == "unavailable"
    assert data["regions_loaded"] == 0


@pytest.mark.asyncio
async def test_health_reports_loaded_regions(client):
    """After a map render the store holds the 3 fixture regions."""
    await client.get("/map", params={"scale": "[]", "format": "svg"})
    data = (await client.get("/health")).json()

    assert data["geometry"] == "loaded"
    assert data["regions_loaded"] == 3


@pytest.mark.asyncio
async def test_startup_load_failure_is_not_fatal(monkeypatch):
    from prefmap.core import geodata as geodata_module
    from prefmap.core.config import settings

    monkeypatch.setattr(settings, "geojson_path", "/nonexistent/japan.geojson")
    geodata_module.load_geometry_at_startup()
    assert geodata_module.geometry_store.regions is None


@pytest.mark.asyncio
async def test_root_endpoint(client):
    """Root / must return API metadata with status=running."""
    response = await client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "running"
    assert data["name"] == "prefmap API"
    assert "version" in data


@pytest.mark.asyncio
async def test_docs_available_in_test_env(client):
    response = await client.get("/docs")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unknown_route_returns_404(client):
    """Unknown routes should return 404, not 500."""
    response = await client.get("/does-not-exist")
    assert response.status_code == 404
