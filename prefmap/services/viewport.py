"""
viewport.py — Bounding boxes and geographic → screen projections.

Two fitting modes:

  fixed     The whole country, always. Longitude and latitude are scaled
            independently into a fixed map-display rectangle inset in the
            canvas (no aspect-ratio preservation).

  adaptive  The box around every ring of every *active* region (nonzero
            severity). A single scale factor fits the box into the canvas
            minus a 10 % margin on each side. Longitude distances are
            shortened by cos(center latitude) to approximate equirectangular
            foreshortening, and the box center lands on the canvas center.

With no active region the adaptive box falls back to the fixed-mode box.

A projection is built once per request and is a pure callable
(lon, lat) → (x, y); nothing here is cached between requests.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, Protocol

from prefmap.models.intensity import IntensityTable
from prefmap.services.geometry import Region

logger = logging.getLogger(__name__)

ViewportMode = Literal["adaptive", "fixed"]


# ── Constants ─────────────────────────────────────────────────────────────────

# Adaptive mode: fraction of the canvas left empty on each side.
MARGIN = 0.1

# A box narrower than this (in degrees) on one axis is widened around its
# center, otherwise a single-point region would give an infinite scale.
MIN_SPAN_DEG = 0.01


@dataclass(frozen=True)
class BoundingBox:
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_lon + self.max_lon) / 2, (self.min_lat + self.max_lat) / 2

    @property
    def lon_span(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def lat_span(self) -> float:
        return self.max_lat - self.min_lat


# Whole-country box used by fixed mode and as the adaptive fallback.
JAPAN_BOUNDS = BoundingBox(min_lon=122.0, min_lat=20.0, max_lon=154.0, max_lat=46.0)

# Fixed mode draws into this (left, top, right, bottom) pixel rectangle of
# the 1280×720 canvas: 37.5 px per degree of longitude, 24 px per degree
# of latitude.
FIXED_MAP_AREA = (40.0, 48.0, 1240.0, 672.0)


class Projection(Protocol):
    def __call__(self, lon: float, lat: float) -> tuple[float, float]: ...


# ── Bounds ────────────────────────────────────────────────────────────────────

def compute_bounds(regions: Iterable[Region], table: IntensityTable) -> BoundingBox:
    """
    Bounding box of all active regions.

    Returns JAPAN_BOUNDS when no active region contributes a coordinate, so
    the sentinel (inverted) box is never handed to a projection.
    """
    min_lon, min_lat = 180.0, 90.0
    max_lon, max_lat = -180.0, -90.0
    seen = False

    for region in regions:
        if not table.is_active(region.region_id):
            continue
        for ring in region.rings:
            for lon, lat in ring:
                seen = True
                min_lon = min(min_lon, lon)
                min_lat = min(min_lat, lat)
                max_lon = max(max_lon, lon)
                max_lat = max(max_lat, lat)

    if not seen:
        logger.debug("No active regions; using whole-country bounds")
        return JAPAN_BOUNDS
    return BoundingBox(min_lon, min_lat, max_lon, max_lat)


def _widen_degenerate(box: BoundingBox) -> BoundingBox:
    center_lon, center_lat = box.center
    half = MIN_SPAN_DEG / 2
    min_lon, max_lon = box.min_lon, box.max_lon
    min_lat, max_lat = box.min_lat, box.max_lat
    if box.lon_span < MIN_SPAN_DEG:
        min_lon, max_lon = center_lon - half, center_lon + half
    if box.lat_span < MIN_SPAN_DEG:
        min_lat, max_lat = center_lat - half, center_lat + half
    return BoundingBox(min_lon, min_lat, max_lon, max_lat)


# ── Projections ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AdaptiveProjection:
    """Aspect-preserving, latitude-corrected projection centred on a box."""
    scale:          float
    center_lon:     float
    center_lat:     float
    center_x:       float
    center_y:       float
    lon_correction: float

    @classmethod
    def fit(cls, box: BoundingBox, width: float, height: float) -> AdaptiveProjection:
        box = _widen_degenerate(box)
        effective_width = width * (1.0 - 2 * MARGIN)
        effective_height = height * (1.0 - 2 * MARGIN)

        center_lon, center_lat = box.center
        lon_correction = math.cos(center_lat * math.pi / 180.0)

        scale_x = effective_width / (box.lon_span * lon_correction)
        scale_y = effective_height / box.lat_span

        return cls(
            scale=min(scale_x, scale_y),
            center_lon=center_lon,
            center_lat=center_lat,
            center_x=width / 2,
            center_y=height / 2,
            lon_correction=lon_correction,
        )

    def __call__(self, lon: float, lat: float) -> tuple[float, float]:
        x = (lon - self.center_lon) * self.lon_correction * self.scale + self.center_x
        y = (self.center_lat - lat) * self.scale + self.center_y
        return x, y


@dataclass(frozen=True)
class FixedProjection:
    """Independent linear scale per axis from a box into a pixel rectangle."""
    box:    BoundingBox
    left:   float
    top:    float
    right:  float
    bottom: float

    @classmethod
    def fit(
        cls,
        box: BoundingBox = JAPAN_BOUNDS,
        area: tuple[float, float, float, float] = FIXED_MAP_AREA,
    ) -> FixedProjection:
        left, top, right, bottom = area
        return cls(box=box, left=left, top=top, right=right, bottom=bottom)

    def __call__(self, lon: float, lat: float) -> tuple[float, float]:
        x = self.left + (lon - self.box.min_lon) * (self.right - self.left) / self.box.lon_span
        y = self.top + (self.box.max_lat - lat) * (self.bottom - self.top) / self.box.lat_span
        return x, y


def fit_viewport(
    mode: ViewportMode,
    regions: Iterable[Region],
    table: IntensityTable,
    width: float,
    height: float,
) -> Projection:
    """Build the projection for one request."""
    if mode == "fixed":
        return FixedProjection.fit()

    box = compute_bounds(regions, table)
    projection = AdaptiveProjection.fit(box, width, height)
    logger.debug(
        "Adaptive viewport lon=[%.3f, %.3f] lat=[%.3f, %.3f] scale=%.3f",
        box.min_lon, box.max_lon, box.min_lat, box.max_lat, projection.scale,
    )
    return projection
