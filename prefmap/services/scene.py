"""
scene.py — Assemble the vector scene and serialize it to SVG.

Draw order: full-canvas background, then one <path> per region in
feature-collection order, then (optionally) the caption. Every region
shares the same stroke style; only the fill color varies.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import svgwrite

from prefmap.services.paths import ScreenPath

BACKGROUND_COLOR = "#18181b"
STROKE_COLOR = "#a1a1aa"
STROKE_WIDTH = 0.2
FILL_OPACITY = 0.8

CAPTION_COLOR = "#fafafa"
CAPTION_FONT_SIZE = 14
# Caption baseline sits this far in from the left and bottom edges.
CAPTION_OFFSET = (10, 14)

DEFAULT_CAPTION = "Code available under the MIT License (GitHub: evacuate)."


@dataclass(frozen=True)
class Scene:
    width:      int
    height:     int
    paths:      tuple[ScreenPath, ...]
    caption:    str
    background: str = BACKGROUND_COLOR

    @property
    def caption_position(self) -> tuple[int, int]:
        return CAPTION_OFFSET[0], self.height - CAPTION_OFFSET[1]


def compose_scene(
    paths: Sequence[ScreenPath],
    width: int,
    height: int,
    caption: str | None = None,
    default_caption: str = DEFAULT_CAPTION,
) -> Scene:
    """Build the scene for one request; an empty caption becomes *default_caption*."""
    return Scene(
        width=width,
        height=height,
        paths=tuple(paths),
        caption=caption or default_caption,
    )


def region_style(fill: str) -> str:
    return f"fill:{fill};stroke:{STROKE_COLOR};stroke-width:{STROKE_WIDTH};fill-opacity:{FILL_OPACITY}"


def scene_to_svg(scene: Scene, include_caption: bool = False) -> str:
    """
    Serialize *scene* to an SVG document string.

    The caption is left out by default: the PNG exporter draws it with the
    loaded TrueType font instead.
    """
    dwg = svgwrite.Drawing(size=(scene.width, scene.height))
    dwg.add(dwg.rect(insert=(0, 0), size=(scene.width, scene.height), style=f"fill:{scene.background}"))

    for path in scene.paths:
        dwg.add(dwg.path(d=path.d, style=region_style(path.fill)))

    if include_caption and scene.caption:
        dwg.add(
            dwg.text(
                scene.caption,
                insert=scene.caption_position,
                fill=CAPTION_COLOR,
                font_size=CAPTION_FONT_SIZE,
                font_family="Roboto, sans-serif",
            )
        )
    return dwg.tostring()
