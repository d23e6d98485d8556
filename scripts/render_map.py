#!/usr/bin/env python3
"""
render_map.py — Render a map to a file without starting the API.

Useful for checking a new geometry file or color change locally.

Usage:
    python scripts/render_map.py --scale '[{"id": 13, "scale": 5}]' -o tokyo.png
    python scripts/render_map.py --scale '[{"id": 1, "scale": 3}]' --format svg -o hokkaido.svg
    python scripts/render_map.py --scale '[]' --viewport fixed -o japan.png

Reads the same PREFMAP_* settings as the API (geometry path, font path, ...).
Exit code 1 on any input or rendering error.
"""

import argparse
import sys
from pathlib import Path

from prefmap.core.config import settings
from prefmap.core.errors import MapRenderError
from prefmap.models.intensity import build_intensity_table, parse_scale_param
from prefmap.services.geometry import load_regions
from prefmap.services.renderer import render_map


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--scale", required=True, help='JSON array of {"id": int, "scale": int}')
    parser.add_argument("--format", choices=("png", "svg"), default="png")
    parser.add_argument("--footer", default="", help="Caption text (PNG only)")
    parser.add_argument("--viewport", choices=("adaptive", "fixed"), default=settings.viewport_mode)
    parser.add_argument("--geojson", default=settings.geojson_path, help="GeoJSON FeatureCollection")
    parser.add_argument("-o", "--output", type=Path, required=True)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    run_settings = settings.model_copy(update={"viewport_mode": args.viewport, "geojson_path": args.geojson})

    try:
        table = build_intensity_table(
            parse_scale_param(args.scale), strict=run_settings.strict_scale_validation
        )
        regions = load_regions(run_settings.geojson_path, run_settings.region_id_property)
        result = render_map(regions, table, run_settings, fmt=args.format, footer=args.footer)
    except MapRenderError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    args.output.write_bytes(result.content)
    print(f"Wrote {len(result.content)} bytes ({result.media_type}) to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
