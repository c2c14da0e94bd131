from __future__ import annotations

"""
Canvas renderer: draw a DitherResult as coloured glyphs on a Pillow surface,
plus the text and PNG export encodings.

Layout:
  char_width  = font_size * CHAR_WIDTH_RATIO
  char_height = font_size
  surface     = ceil(cols * char_width) x ceil(rows * char_height)

Colour per glyph: the foreground override when one is given, otherwise the
glyph's matched palette colour. Blank glyphs are never drawn, so the
background shows through.
"""

import io
import math
from functools import lru_cache
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from .core_types import DitherResult, DitherSettings, RGBTuple
from .palette_data import get_preset

CHAR_WIDTH_RATIO = 0.6

DEFAULT_BACKGROUND: RGBTuple = (0, 0, 0)

# Tried in order for the generic "monospace" family.
MONOSPACE_CANDIDATES: Tuple[str, ...] = (
    "DejaVuSansMono.ttf",
    "LiberationMono-Regular.ttf",
    "NotoSansMono-Regular.ttf",
    "Menlo.ttc",
    "consola.ttf",
    "cour.ttf",
)

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


@lru_cache(maxsize=32)
def load_font(family: str, size: int) -> FontType:
    """
    Resolve a font family to a Pillow font.

    A path or file name goes straight to ImageFont.truetype. "monospace" tries
    common system monospace fonts. Pillow's built-in scalable font is the last
    resort.
    """
    size = max(1, int(size))
    names = MONOSPACE_CANDIDATES if family in ("", "monospace") else (family,)
    for name in names:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def canvas_size(result: DitherResult, font_size: float) -> Tuple[int, int, float, float]:
    """Return (width_px, height_px, char_width, char_height)."""
    char_h = max(1.0, float(font_size))
    char_w = char_h * CHAR_WIDTH_RATIO
    width = max(1, int(math.ceil(result.cols * char_w)))
    height = max(1, int(math.ceil(result.rows * char_h)))
    return width, height, char_w, char_h


def display_colors(settings: DitherSettings) -> Tuple[RGBTuple, Optional[RGBTuple]]:
    """(background, foreground override) for the active preset; black/None without one."""
    preset = get_preset(settings.preset)
    if preset is None:
        return DEFAULT_BACKGROUND, None
    return preset.background, preset.foreground


def render_to_image(
    result: DitherResult,
    settings: DitherSettings,
    background: RGBTuple = DEFAULT_BACKGROUND,
    foreground: Optional[RGBTuple] = None,
) -> Image.Image:
    """Draw result onto a new RGB image. Glyphs come from result.text."""
    width, height, char_w, char_h = canvas_size(result, settings.font_size)
    image = Image.new("RGB", (width, height), tuple(background))
    draw = ImageDraw.Draw(image)
    font = load_font(settings.font_family, int(round(char_h)))

    fill_override = tuple(foreground) if foreground is not None else None
    for y, line in enumerate(result.lines):
        for x, glyph in enumerate(line):
            if not glyph.strip():
                continue
            fill = fill_override or result.colour_at(x, y)
            draw.text((x * char_w, y * char_h), glyph, fill=fill, font=font)
    return image


def export_as_text(result: DitherResult) -> str:
    """Plain text export: rows joined with newlines."""
    return result.text


def export_as_png(image: Image.Image) -> bytes:
    """PNG encoding of a rendered surface."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


__all__ = [
    "CHAR_WIDTH_RATIO",
    "DEFAULT_BACKGROUND",
    "MONOSPACE_CANDIDATES",
    "load_font",
    "canvas_size",
    "display_colors",
    "render_to_image",
    "export_as_text",
    "export_as_png",
]
