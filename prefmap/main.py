"""
prefmap API — Application entry point.

Bootstraps FastAPI, wires up middleware and error handlers, registers route
groups, and loads the static region geometry once at startup.

Run locally:
    uvicorn prefmap.main:app --port 8080
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from prefmap import __version__
from prefmap.core.config import settings
from prefmap.core.errors import MapRenderError
from prefmap.core.geodata import load_geometry_at_startup
from prefmap.core.rate_limit import limiter
from prefmap.routes.health import router as health_router
from prefmap.routes.map import router as map_router

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage startup and shutdown lifecycle.

    The geometry file is static, so it is parsed once here and shared
    read-only by every request.
    """
    logger.info("Starting prefmap API (env: %s, viewport: %s)", settings.environment, settings.viewport_mode)
    load_geometry_at_startup()
    yield
    logger.info("Shutting down prefmap API")


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="prefmap API",
    description="Renders choropleth maps of Japan's prefectures as PNG or SVG.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Rate limiting ─────────────────────────────────────────────────────────────
# Attach the limiter to app state so slowapi can find it.
# Routes opt-in with @limiter.limit(...) + request: Request parameter.
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ─── Pipeline errors ───────────────────────────────────────────────────────────
async def _map_render_error_handler(request: Request, exc: MapRenderError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.add_exception_handler(MapRenderError, _map_render_error_handler)

# ─── Middleware ─────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(map_router)


@app.get("/", tags=["root"])
async def root():
    """API root — basic metadata."""
    return {
        "name": "prefmap API",
        "version": __version__,
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }
