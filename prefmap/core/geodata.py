"""
Process-wide store for the static region geometry.

Architecture decision: the GeoJSON file never changes while the process
runs, so it is parsed once in FastAPI's lifespan (startup) and kept in a
module-level singleton. Routes only read it, so no locking is needed.
FastAPI's dependency injection (get_regions) gives routes access without
importing the singleton directly.

If the startup load fails (missing or malformed file) the API still
starts; get_regions() retries the load on each request and raises the
load error, which the map route turns into a 500.
"""

import logging

from prefmap.core.config import settings
from prefmap.services.geometry import Region, load_regions

logger = logging.getLogger(__name__)


class GeometryStore:
    """
    Holds the loaded regions.

    Why a class rather than a bare global: tests can swap .regions for a
    fixture list and restore it afterwards.
    """

    regions: tuple[Region, ...] | None = None


# Module-level singleton — all app code references this object
geometry_store = GeometryStore()


def load_geometry() -> tuple[Region, ...]:
    """Parse the configured GeoJSON file and publish it in the store."""
    regions = tuple(load_regions(settings.geojson_path, settings.region_id_property))
    geometry_store.regions = regions
    logger.info("Loaded %d regions from %s", len(regions), settings.geojson_path)
    return regions


def load_geometry_at_startup() -> None:
    """
    Called once from the lifespan. Failure is logged, not raised, so the
    health check can report the real state instead of the server crashing.
    """
    try:
        load_geometry()
    except Exception as exc:
        logger.warning(
            "Geometry unavailable at startup: %s. "
            "API running in degraded mode — /map will retry the load.",
            exc,
        )
        geometry_store.regions = None


def get_regions() -> tuple[Region, ...]:
    """
    Return the loaded regions, loading the file first if nothing is cached.

    Raises GeometryLoadError / SchemaError when the geometry can't be loaded.
    """
    if geometry_store.regions is None:
        return load_geometry()
    return geometry_store.regions
