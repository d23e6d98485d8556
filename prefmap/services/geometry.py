"""
geometry.py — GeoJSON loading and region extraction.

Turns a FeatureCollection into Region values. Polygon and MultiPolygon
geometries are flattened at this boundary into one shape, "a tuple of
rings", so the viewport fitter and path builder never branch on geometry
type. Any other geometry type is skipped.

Coordinates stay in GeoJSON order: (longitude, latitude).
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from prefmap.core.errors import GeometryLoadError, SchemaError

logger = logging.getLogger(__name__)

Point = tuple[float, float]
Ring = tuple[Point, ...]

_SUPPORTED_TYPES = ("Polygon", "MultiPolygon")


@dataclass(frozen=True)
class Region:
    """One prefecture: its id and every ring of its geometry."""
    region_id:     int
    geometry_type: str            # "Polygon" | "MultiPolygon"
    rings:         tuple[Ring, ...]


def load_feature_collection(path: str | Path) -> dict[str, Any]:
    """
    Read and parse the GeoJSON file at *path*.

    Raises GeometryLoadError if the file can't be read, isn't valid JSON,
    or isn't a FeatureCollection.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise GeometryLoadError(f"Failed to read geojson: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise GeometryLoadError(f"Failed to unmarshal geojson: {exc}") from exc

    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise GeometryLoadError("Failed to unmarshal geojson: root must be a FeatureCollection")
    if not isinstance(data.get("features", []), list):
        raise GeometryLoadError("Failed to unmarshal geojson: features must be a list")
    return data


def extract_regions(feature_collection: dict[str, Any], id_property: str = "id") -> list[Region]:
    """
    Extract one Region per supported feature, in feature-collection order.

    Raises SchemaError when a feature's *id_property* is missing or not a
    number, and GeometryLoadError when its geometry or coordinates are
    malformed. Features whose geometry is neither Polygon nor MultiPolygon are
    skipped.
    """
    regions: list[Region] = []
    for index, feature in enumerate(feature_collection.get("features") or []):
        region_id = _region_id(feature, id_property, index)

        try:
            geometry = feature.get("geometry") or {}
            gtype = geometry.get("type")
            if gtype not in _SUPPORTED_TYPES:
                logger.debug("Skipping feature %d (id=%d): unsupported geometry %r", index, region_id, gtype)
                continue

            coords = geometry.get("coordinates") or []
            polygons = [coords] if gtype == "Polygon" else coords
            rings = tuple(_ring(ring) for polygon in polygons for ring in polygon)
        except (TypeError, ValueError, IndexError, AttributeError) as exc:
            raise GeometryLoadError(f"Failed to unmarshal geojson: feature {index}: {exc}") from exc
        regions.append(Region(region_id=region_id, geometry_type=gtype, rings=rings))
    return regions


def load_regions(path: str | Path, id_property: str = "id") -> list[Region]:
    """Load the GeoJSON file at *path* and extract its regions."""
    return extract_regions(load_feature_collection(path), id_property)


def _region_id(feature: Any, id_property: str, index: int) -> int:
    props = feature.get("properties") if isinstance(feature, dict) else None
    value = (props or {}).get(id_property)
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise SchemaError(
            f"Invalid ID format in GeoJSON: feature {index} has {id_property}={value!r}"
        )
    return int(value)


def _ring(ring: Any) -> Ring:
    return tuple((float(coord[0]), float(coord[1])) for coord in ring)
