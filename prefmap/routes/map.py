"""
map.py — Choropleth rendering route.

Routes:
  GET /map?scale=<json>&format=<svg|png>&footer=<text>

HOW A REQUEST FLOWS
───────────────────
1. `scale` (JSON array of {"id", "scale"}) is decoded and folded into an
   IntensityTable. Missing, malformed or out-of-range input → 400.
2. The region list comes from the process-wide GeometryStore (get_regions),
   which retries the file load if it failed at startup.
3. render_map() fits the viewport, builds the paths and scene, and exports
   SVG or PNG. Geometry, font and encode failures → 500.

Errors are raised as MapRenderError subclasses; the handler registered in
main.py turns them into {"detail": "..."} JSON with the matching status.

TESTING
───────
  pytest tests/test_map.py -v

  curl 'http://localhost:8080/map?scale=[{"id":13,"scale":5}]' -o map.png
  curl 'http://localhost:8080/map?scale=[{"id":13,"scale":5}]&format=svg'
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, Response

from prefmap.core.config import settings
from prefmap.core.geodata import get_regions
from prefmap.core.rate_limit import limiter
from prefmap.models.intensity import build_intensity_table, parse_scale_param
from prefmap.services.renderer import render_map

logger = logging.getLogger(__name__)

router = APIRouter(tags=["map"])


@router.get(
    "/map",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}, "image/svg+xml": {}}},
        400: {"description": "Missing or invalid scale parameter"},
        500: {"description": "Geometry, font or encoding failure"},
    },
)
@limiter.limit(settings.map_rate_limit)
def get_map(
    request: Request,
    scale: Optional[str] = Query(default=None, description='JSON array of {"id": int, "scale": int}'),
    fmt: Optional[str] = Query(default=None, alias="format", description='"svg" for vector output; PNG otherwise'),
    footer: Optional[str] = Query(default=None, description="Caption text (PNG only)"),
):
    """
    Render the prefecture map colored by the supplied severities.

    Plain def: FastAPI runs it in the threadpool.
    """
    # Input is validated before the geometry is touched, so a bad query is
    # always a 400 even while the geometry file is unavailable.
    table = build_intensity_table(parse_scale_param(scale), strict=settings.strict_scale_validation)
    result = render_map(get_regions(), table, settings, fmt=fmt, footer=footer)
    logger.info(
        "Rendered map: %d severities, format=%s, %d bytes",
        len(table), result.media_type, len(result.content),
    )
    return Response(content=result.content, media_type=result.media_type)
