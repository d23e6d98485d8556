"""
Health check endpoint.

Used by:
  - Docker HEALTHCHECK instruction
  - Load balancers / orchestrators

Returns status + geometry state so callers can distinguish between
"API down" and "API up but geometry file missing".
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from prefmap import __version__
from prefmap.core import geodata as geodata_module

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str  # Always "ok" if the API process is alive
    version: str
    geometry: str  # "loaded" | "unavailable"
    regions_loaded: int
    environment: str


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check() -> HealthResponse:
    """
    Returns the liveness status of the API and whether the region
    geometry is loaded.

    The API is considered healthy (HTTP 200) even when the geometry is
    unavailable; /map answers 500 in that state.
    """
    from prefmap.core.config import settings

    # Access via module reference so tests can patch geodata_module.geometry_store
    regions = geodata_module.geometry_store.regions

    return HealthResponse(
        status="ok",
        version=__version__,
        geometry="loaded" if regions is not None else "unavailable",
        regions_loaded=len(regions) if regions is not None else 0,
        environment=settings.environment,
    )
