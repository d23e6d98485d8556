"""
renderer.py — The full map pipeline for one request.

    regions + IntensityTable
        → fit_viewport        (bounding box + projection)
        → build_region_paths  (screen paths, colored)
        → compose_scene       (background + paths + caption)
        → scene_to_svg        (SVG text)
        → raster export       (PNG bytes, caption drawn with the loaded font)

Every call builds its own bounding box, projection and scene; the only
input shared between requests is the read-only region list.

USAGE
─────
    from prefmap.services.renderer import render_map

    result = render_map(regions, table, settings, fmt="png", footer="")
    result.content     # bytes
    result.media_type  # "image/png"
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from prefmap.core.config import CANVAS_HEIGHT, CANVAS_WIDTH, Settings
from prefmap.models.intensity import IntensityTable
from prefmap.services import raster
from prefmap.services.geometry import Region
from prefmap.services.paths import build_region_paths
from prefmap.services.scene import CAPTION_COLOR, Scene, compose_scene, scene_to_svg
from prefmap.services.viewport import fit_viewport

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"
PNG_MEDIA_TYPE = "image/png"


@dataclass
class RenderedMap:
    content:    bytes
    media_type: str


def build_scene(
    regions: Sequence[Region],
    table: IntensityTable,
    settings: Settings,
    footer: str | None = None,
) -> Scene:
    projection = fit_viewport(settings.viewport_mode, regions, table, CANVAS_WIDTH, CANVAS_HEIGHT)
    paths = build_region_paths(regions, table, projection)
    logger.debug(
        "Built %d paths (%d regions, %d active)",
        len(paths), len(regions), sum(1 for r in regions if table.is_active(r.region_id)),
    )
    return compose_scene(paths, CANVAS_WIDTH, CANVAS_HEIGHT, footer, settings.default_footer)


def export_png(scene: Scene, settings: Settings) -> bytes:
    """Rasterise *scene* and overlay its caption with the configured font."""
    # Load the font first so a missing font fails before any raster work.
    font = raster.load_font(settings.font_path, settings.font_size)
    image = raster.render(scene_to_svg(scene), scene.width, scene.height)
    image = raster.draw_text(image, scene.caption, scene.caption_position, font, CAPTION_COLOR)
    return raster.encode_png(image)


def render_map(
    regions: Sequence[Region],
    table: IntensityTable,
    settings: Settings,
    fmt: str | None = None,
    footer: str | None = None,
) -> RenderedMap:
    """
    Render the choropleth for *table*.

    fmt == "svg" returns the vector scene; anything else returns a PNG.
    Raises FontLoadError / EncodeError (500-class) on collaborator failures.
    """
    scene = build_scene(regions, table, settings, footer)

    if fmt == "svg":
        return RenderedMap(content=scene_to_svg(scene).encode("utf-8"), media_type=SVG_MEDIA_TYPE)

    return RenderedMap(content=export_png(scene, settings), media_type=PNG_MEDIA_TYPE)
