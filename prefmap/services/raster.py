"""
raster.py — SVG → PNG export and caption overlay.

Thin adapters over the libraries that do the real work:
  - cairosvg rasterises the SVG scene
  - Pillow loads the caption font, draws the text and encodes the PNG

Every library failure is re-raised as one of the pipeline errors
(FontLoadError / EncodeError) so the route can answer with a 500 and a
readable message.
"""

from __future__ import annotations

import io
import logging

from PIL import Image, ImageDraw, ImageFont

from prefmap.core.errors import EncodeError, FontLoadError

logger = logging.getLogger(__name__)


def load_font(path: str, size: int) -> ImageFont.FreeTypeFont:
    """Load a TrueType font. Raises FontLoadError if missing or unparsable."""
    try:
        return ImageFont.truetype(path, size=size)
    except OSError as exc:
        raise FontLoadError(f"failed to load font {path!r}: {exc}") from exc


def render(svg: str, width: int, height: int) -> Image.Image:
    """Rasterise *svg* to an RGBA image of exactly width × height pixels."""
    try:
        # needs the native cairo library, so only loaded for PNG output
        import cairosvg

        png = cairosvg.svg2png(bytestring=svg.encode("utf-8"), output_width=width, output_height=height)
        return Image.open(io.BytesIO(png)).convert("RGBA")
    except Exception as exc:
        raise EncodeError(f"failed to rasterise svg: {exc}") from exc


def draw_text(
    image: Image.Image,
    text: str,
    position: tuple[int, int],
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    color: str,
) -> Image.Image:
    """
    Draw *text* onto *image* in place and return it.

    *position* is the left end of the text baseline.
    """
    try:
        draw = ImageDraw.Draw(image)
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text(position, text, font=font, fill=color, anchor="ls")
        else:
            # Bitmap fonts have no baseline anchor; place the box above it.
            x, baseline = position
            _, top, _, bottom = font.getbbox(text)
            draw.text((x, baseline - (bottom - top)), text, font=font, fill=color)
    except Exception as exc:
        raise EncodeError(f"failed to draw text: {exc}") from exc
    return image


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except Exception as exc:
        raise EncodeError(f"failed to encode png: {exc}") from exc
    return buf.getvalue()
