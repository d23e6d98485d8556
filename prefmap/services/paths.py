"""
paths.py — Screen-space path construction.

Each ring becomes a structured command list: move to the first point, a
line to every following point, then close. All rings of one region are
kept together as a single ScreenPath sharing the region's fill color, so
holes and island groups render as one SVG <path>.

Serialization to SVG path data is a separate step (path_data) so tests
can check geometry without parsing strings.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from prefmap.models.intensity import IntensityTable
from prefmap.services.colors import severity_to_color
from prefmap.services.geometry import Region, Ring
from prefmap.services.viewport import Projection


@dataclass(frozen=True)
class PathCommand:
    op: Literal["M", "L", "Z"]
    x: float = 0.0
    y: float = 0.0

    def to_svg(self) -> str:
        if self.op == "Z":
            return "Z"
        return f"{self.op}{self.x:.1f} {self.y:.1f}"


@dataclass(frozen=True)
class ScreenPath:
    """All rings of one region in screen space, plus its fill color."""
    region_id: int
    fill:      str
    rings:     tuple[tuple[PathCommand, ...], ...]

    @property
    def d(self) -> str:
        return path_data(self.rings)


def build_ring_path(ring: Ring, projection: Projection) -> list[PathCommand]:
    """Project *ring* and return its closed command sequence (empty for an empty ring)."""
    commands: list[PathCommand] = []
    for i, (lon, lat) in enumerate(ring):
        x, y = projection(lon, lat)
        commands.append(PathCommand("M" if i == 0 else "L", x, y))
    if commands:
        commands.append(PathCommand("Z"))
    return commands


def build_region_paths(
    regions: Iterable[Region],
    table: IntensityTable,
    projection: Projection,
) -> list[ScreenPath]:
    """
    One ScreenPath per region that has at least one non-empty ring.

    Order follows *regions* (the feature-collection order), so later
    regions draw over earlier ones.
    """
    paths: list[ScreenPath] = []
    for region in regions:
        rings = tuple(
            tuple(cmds) for cmds in (build_ring_path(ring, projection) for ring in region.rings) if cmds
        )
        if not rings:
            continue
        fill = severity_to_color(table.severity(region.region_id))
        paths.append(ScreenPath(region_id=region.region_id, fill=fill, rings=rings))
    return paths


def path_data(rings: Sequence[Sequence[PathCommand]]) -> str:
    """Serialize rings to SVG path data, e.g. "M1.0 2.0 L3.0 4.0 Z M…"."""
    return " ".join(" ".join(cmd.to_svg() for cmd in ring) for ring in rings)
