"""
test_scene.py — Scene composition and SVG serialization.
"""

import xml.etree.ElementTree as ET

import pytest

from prefmap.core.config import CANVAS_HEIGHT, CANVAS_WIDTH
from prefmap.models.intensity import IntensityTable
from prefmap.services.paths import build_region_paths
from prefmap.services.scene import (
    BACKGROUND_COLOR,
    DEFAULT_CAPTION,
    compose_scene,
    region_style,
    scene_to_svg,
)
from prefmap.services.viewport import fit_viewport

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture()
def scene(regions):
    table = IntensityTable({1: 3, 2: 7})
    projection = fit_viewport("adaptive", regions, table, CANVAS_WIDTH, CANVAS_HEIGHT)
    paths = build_region_paths(regions, table, projection)
    return compose_scene(paths, CANVAS_WIDTH, CANVAS_HEIGHT, caption="Test caption")


class TestComposeScene:

    def test_caption_defaults_when_empty(self):
        assert compose_scene([], 10, 10, caption="").caption == DEFAULT_CAPTION
        assert compose_scene([], 10, 10).caption == DEFAULT_CAPTION

    def test_custom_default_caption(self):
        assert compose_scene([], 10, 10, default_caption="(c) somebody").caption == "(c) somebody"

    def test_caption_position_is_bottom_left(self, scene):
        assert scene.caption_position == (10, CANVAS_HEIGHT - 14)

    def test_paths_keep_order(self, scene):
        assert [p.region_id for p in scene.paths] == [1, 2, 4]


class TestSceneToSvg:

    def test_parseable_with_one_path_per_region(self, scene):
        root = ET.fromstring(scene_to_svg(scene))
        assert root.tag == f"{SVG_NS}svg"
        assert len(root.findall(f"{SVG_NS}path")) == 3

    def test_background_first_and_full_canvas(self, scene):
        root = ET.fromstring(scene_to_svg(scene))
        # svgwrite always emits an empty <defs> first
        first = [el for el in root if el.tag != f"{SVG_NS}defs"][0]
        assert first.tag == f"{SVG_NS}rect"
        assert first.get("width") == str(CANVAS_WIDTH)
        assert first.get("height") == str(CANVAS_HEIGHT)
        assert BACKGROUND_COLOR in first.get("style")

    def test_canvas_size(self, scene):
        root = ET.fromstring(scene_to_svg(scene))
        assert root.get("width") == str(CANVAS_WIDTH)
        assert root.get("height") == str(CANVAS_HEIGHT)

    def test_region_style(self, scene):
        root = ET.fromstring(scene_to_svg(scene))
        styles = [p.get("style") for p in root.findall(f"{SVG_NS}path")]
        assert styles == [region_style("#facc15"), region_style("#500724"), region_style("#27272a")]
        assert "stroke:#a1a1aa" in styles[0]
        assert "fill-opacity:0.8" in styles[0]

    def test_caption_omitted_by_default(self, scene):
        root = ET.fromstring(scene_to_svg(scene))
        assert root.findall(f"{SVG_NS}text") == []

    def test_caption_included_on_request(self, scene):
        root = ET.fromstring(scene_to_svg(scene, include_caption=True))
        [text] = root.findall(f"{SVG_NS}text")
        assert text.text == "Test caption"

    def test_byte_identical_across_renders(self, scene, regions):
        table = IntensityTable({1: 3, 2: 7})
        projection = fit_viewport("adaptive", regions, table, CANVAS_WIDTH, CANVAS_HEIGHT)
        again = compose_scene(build_region_paths(regions, table, projection), CANVAS_WIDTH, CANVAS_HEIGHT, "Test caption")
        assert scene_to_svg(scene) == scene_to_svg(again)
