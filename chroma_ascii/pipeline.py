from __future__ import annotations

"""
One full pipeline run: downsample -> dither -> build result.

process_image() is synchronous, has no side effects beyond optional debug
logging, and reads nothing but its arguments. Every call is a full recompute.
"""

import time

import numpy as np

from .core_types import DitherResult, DitherSettings, U8Image
from .dither import apply_dithering
from .downsample import downsample
from .mode import effective_settings, resolve_palette
from .result import build_ascii_result
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string


def process_image(
    pixels: U8Image, settings: DitherSettings, *, debug: bool = False
) -> DitherResult:
    """
    Turn an (H, W, 3|4) uint8 image into a DitherResult.

    A preset in settings overrides algorithm, character set and palette.
    Density and aspect ratio are clamped into range. Raises InvalidDimensions
    for a zero-area image.
    """
    t_start = time.perf_counter()

    eff = effective_settings(settings)
    palette = resolve_palette(settings, debug=debug)

    grid, width, height = downsample(pixels, eff.density, eff.aspect_ratio)
    t_down = time.perf_counter()

    # diffusion mutates grid; glyphs are picked from the untouched copy
    original = grid.copy()
    indices = apply_dithering(eff.algorithm, grid, width, height, palette)
    t_dither = time.perf_counter()

    elapsed_ms = (time.perf_counter() - t_start) * 1000.0
    result = build_ascii_result(
        indices, width, height, palette, eff, elapsed_ms, original=original
    )

    if debug:
        src = np.asarray(pixels)
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Source", f"{src.shape[1]}x{src.shape[0]}"),
                    ("Grid", f"{width}x{height}"),
                    ("Algorithm", eff.algorithm),
                    ("Charset", eff.character_set),
                    ("Palette", len(palette)),
                    ("Preset", eff.preset or "-"),
                    ("Invert", eff.invert),
                ]
            )
        )
        debug_log(
            f"downsample={format_seconds_compact(t_down - t_start)}  "
            f"dither={format_seconds_compact(t_dither - t_down)}  "
            f"build={format_seconds_compact(time.perf_counter() - t_dither)}"
        )
    return result


__all__ = ["process_image"]
