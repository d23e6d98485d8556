"""
intensity.py — Caller-supplied severities, validated into a lookup table.

The `scale` query parameter is a JSON array of {"id": int, "scale": int}
objects. It is decoded into IntensityEntry models, then folded into an
IntensityTable: an immutable regionId → severity mapping where any region
not mentioned has severity 0 and later entries win over earlier ones.

A table is built per request and never shared across requests.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

import pydantic
from pydantic import BaseModel, ConfigDict, TypeAdapter

from prefmap.core.errors import ValidationError

MIN_SEVERITY = 0
MAX_SEVERITY = 7


class IntensityEntry(BaseModel):
    """One {"id", "scale"} pair from the query string."""

    # JSON integers only: no bools, numeric strings or floats like 3.0
    model_config = ConfigDict(strict=True)

    id: int
    scale: int


_ENTRIES_ADAPTER = TypeAdapter(list[IntensityEntry])


class IntensityTable(Mapping[int, int]):
    """Read-only regionId → severity mapping with a default of 0."""

    __slots__ = ("_levels",)

    def __init__(self, levels: Mapping[int, int] | None = None):
        self._levels = MappingProxyType(dict(levels or {}))

    def __getitem__(self, region_id: int) -> int:
        return self._levels[region_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._levels)

    def __len__(self) -> int:
        return len(self._levels)

    def severity(self, region_id: int) -> int:
        return self._levels.get(region_id, 0)

    def is_active(self, region_id: int) -> bool:
        """A region is active when its severity is nonzero."""
        return self.severity(region_id) != 0

    def __repr__(self) -> str:
        return f"IntensityTable({dict(self._levels)!r})"


def parse_scale_param(raw: str | None) -> list[IntensityEntry]:
    """
    Decode the raw `scale` query value.

    Raises ValidationError when the value is missing/empty or is not a JSON
    array of {"id": int, "scale": int} objects.
    """
    if not raw:
        raise ValidationError("scale parameter is required")
    try:
        return _ENTRIES_ADAPTER.validate_json(raw)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid scale data format: {_first_error(exc)}") from exc


def build_intensity_table(entries: Iterable[IntensityEntry], strict: bool = True) -> IntensityTable:
    """
    Fold entries into an IntensityTable (last write wins).

    With strict=True, a scale outside [0, 7] aborts with a ValidationError
    naming the region id and the offending value.
    """
    levels: dict[int, int] = {}
    for entry in entries:
        if strict and not MIN_SEVERITY <= entry.scale <= MAX_SEVERITY:
            raise ValidationError(f"Invalid scale value for ID {entry.id}: {entry.scale}")
        levels[entry.id] = entry.scale
    return IntensityTable(levels)


def _first_error(exc: pydantic.ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err['msg']}" if loc else err["msg"]
