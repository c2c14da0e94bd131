# chroma_ascii/__init__.py
"""
chroma_ascii package.

Purpose:
  Turn raster images into palette-indexed, dithered character art.
  See ascii_dither.py for the CLI.

Public API:
  process_image    : one full run, image + DitherSettings -> DitherResult.
  apply_dithering  : Floyd-Steinberg / Atkinson / Sierra / Bayer by name.
  downsample       : image -> coarse float grid.
  render_to_image  : DitherResult -> Pillow image of coloured glyphs.
  core_types       : DitherSettings, DitherResult, errors, RGB helpers.
  palette_data     : fixed palettes, presets, palette file parsing.
  charsets         : glyph ramps and luminance -> glyph mapping.
  worker           : single-worker request/response channel.

Quick start:
  from chroma_ascii import DitherSettings, process_image, render_to_image
  result = process_image(rgba, DitherSettings(algorithm="atkinson", density=100))
  print(result.text)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import core_types
from . import palette_data
from . import charsets
from . import colour_match
from . import dither
from . import mode
from . import utils

from .core_types import (  # noqa: E402
    DEFAULT_SETTINGS,
    DitherResult,
    DitherSettings,
    GridShapeError,
    InvalidDimensions,
)
from .dither import apply_dithering  # noqa: E402
from .downsample import downsample  # noqa: E402
from .mode import apply_preset, effective_settings  # noqa: E402
from .palette_data import PRESETS, palette_for_mode  # noqa: E402
from .pipeline import process_image  # noqa: E402
from .render import export_as_png, export_as_text, render_to_image  # noqa: E402
from .result import build_ascii_result  # noqa: E402
from . import worker  # noqa: E402

__all__ = [
    "__version__",
    "core_types",
    "palette_data",
    "charsets",
    "colour_match",
    "dither",
    "mode",
    "utils",
    "worker",
    "DEFAULT_SETTINGS",
    "DitherResult",
    "DitherSettings",
    "GridShapeError",
    "InvalidDimensions",
    "apply_dithering",
    "downsample",
    "apply_preset",
    "effective_settings",
    "PRESETS",
    "palette_for_mode",
    "process_image",
    "export_as_png",
    "export_as_text",
    "render_to_image",
    "build_ascii_result",
]
