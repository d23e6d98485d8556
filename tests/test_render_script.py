"""
test_render_script.py — scripts/render_map.py offline renderer.
"""

import importlib.util
from pathlib import Path

import pytest

_TESTS = Path(__file__).resolve().parent
_SCRIPT = _TESTS.parent / "scripts" / "render_map.py"
REGIONS_GEOJSON = _TESTS / "fixtures" / "regions.geojson"


@pytest.fixture(scope="module")
def render_script():
    spec = importlib.util.spec_from_file_location("render_map", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_writes_svg(render_script, tmp_path):
    out = tmp_path / "map.svg"
    code = render_script.main(
        ["--scale", '[{"id": 2, "scale": 4}]', "--format", "svg", "--geojson", str(REGIONS_GEOJSON), "-o", str(out)]
    )
    assert code == 0
    assert out.read_text(encoding="utf-8").count("<path") == 3


def test_fixed_viewport_flag(render_script, tmp_path):
    out = tmp_path / "fixed.svg"
    render_script.main(
        ["--scale", "[]", "--format", "svg", "--viewport", "fixed", "--geojson", str(REGIONS_GEOJSON), "-o", str(out)]
    )
    assert "340.0 312.0" in out.read_text(encoding="utf-8")


def test_invalid_scale_exits_1(render_script, tmp_path, capsys):
    out = tmp_path / "bad.svg"
    code = render_script.main(["--scale", '[{"id": 1, "scale": 9}]', "--format", "svg", "-o", str(out)])
    assert code == 1
    assert "Invalid scale value for ID 1: 9" in capsys.readouterr().err
    assert not out.exists()
