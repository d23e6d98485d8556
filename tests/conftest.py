"""
pytest configuration and shared fixtures for the prefmap API tests.

Key concern: tests must not require the real Japan GeoJSON, a TrueType
font file or (for SVG tests) the native cairo library. We achieve this by:
  1. Pointing PREFMAP_GEOJSON_PATH at a small fixture FeatureCollection
     before the app is imported, so Settings picks it up.
  2. Resetting the GeometryStore and the rate limiter around every test.
  3. Swapping the caption font for Pillow's built-in default font in
     PNG tests, and skipping those tests when cairo is not installed.
"""

import os
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

FIXTURES = Path(__file__).parent / "fixtures"
REGIONS_GEOJSON = FIXTURES / "regions.geojson"

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("PREFMAP_ENVIRONMENT", "test")
os.environ.setdefault("PREFMAP_GEOJSON_PATH", str(REGIONS_GEOJSON))
os.environ.setdefault("PREFMAP_MAP_RATE_LIMIT", "1000/minute")


def _cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


@pytest.fixture(autouse=True)
def reset_state():
    """
    Give every test an unloaded GeometryStore and empty rate-limit buckets.

    The store is lazily loaded from the fixture file on the first /map call.
    """
    from prefmap.core import geodata as geodata_module
    from prefmap.core.rate_limit import limiter

    original = geodata_module.geometry_store.regions
    geodata_module.geometry_store.regions = None
    limiter.reset()

    yield

    geodata_module.geometry_store.regions = original


@pytest.fixture()
def regions():
    """Regions extracted from the fixture GeoJSON (ids 1, 2, 4; id 3 is a Point)."""
    from prefmap.services.geometry import load_regions

    return load_regions(REGIONS_GEOJSON)


@pytest.fixture()
def default_font(monkeypatch):
    """Replace the TrueType caption font with Pillow's bundled default."""
    from PIL import ImageFont

    from prefmap.services import raster

    font = ImageFont.load_default(size=14)
    monkeypatch.setattr(raster, "load_font", lambda path, size: font)
    return font


@pytest.fixture()
def png_ready(default_font):  # noqa: ARG001 — default_font patches the font loader
    """Skip when cairo is unavailable; otherwise PNG export works end to end."""
    if not _cairo_available():
        pytest.skip("native cairo library not installed")


@pytest.fixture()
async def client():
    """
    HTTPX async test client wired to the FastAPI app.

    Usage:
        async def test_something(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from prefmap.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
