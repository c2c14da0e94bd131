from __future__ import annotations

"""
Assemble a DitherResult from a dithered index grid.

Glyph choice and fill colour are decoupled: when the original (pre-dither)
samples are passed, glyphs follow their luminance for finer tonal steps than a
small palette gives, while the colour of every cell still comes from its
matched palette entry.
"""

from typing import List, Optional, Sequence

import numpy as np

from .charsets import get_charset, luminance_to_char, palette_index_to_char
from .core_types import (
    DitherResult,
    DitherSettings,
    FloatGrid,
    GridShapeError,
    RGBTuple,
)


def build_ascii_result(
    color_indices: Sequence[int],
    cols: int,
    rows: int,
    palette: Sequence[RGBTuple],
    settings: DitherSettings,
    processing_time: float,
    original: Optional[FloatGrid] = None,
) -> DitherResult:
    """
    Build the text grid and metadata for one run.

    Args:
      color_indices: flat row-major palette indices, len == cols * rows.
      palette: palette the indices refer to; snapshotted into the result.
      settings: character_set and invert are read from here.
      processing_time: elapsed milliseconds to report.
      original: optional pre-dither samples (cols * rows * 3, flat or shaped);
                when given, glyphs come from their luminance.
    """
    idx = np.asarray(color_indices, dtype=np.int64).ravel()
    if idx.size != cols * rows:
        raise GridShapeError(f"{idx.size} indices for a {cols}x{rows} grid")
    if idx.size and (idx.min() < 0 or idx.max() >= len(palette)):
        raise GridShapeError(f"index out of range for a {len(palette)}-colour palette")

    charset = get_charset(settings.character_set)
    lines: List[str] = []

    if original is not None:
        samples = np.asarray(original, dtype=np.float64)
        if samples.size != cols * rows * 3:
            raise GridShapeError(
                f"original holds {samples.size} samples, expected {cols * rows * 3}"
            )
        flat = samples.reshape(-1, 3)
        lum = 0.299 * flat[:, 0] + 0.587 * flat[:, 1] + 0.114 * flat[:, 2]
        for y in range(rows):
            row = lum[y * cols : (y + 1) * cols]
            lines.append(
                "".join(luminance_to_char(v, charset, settings.invert) for v in row)
            )
    else:
        # one glyph per palette entry is enough
        glyph_of = [
            palette_index_to_char(i, palette, charset, settings.invert)
            for i in range(len(palette))
        ]
        for y in range(rows):
            row = idx[y * cols : (y + 1) * cols]
            lines.append("".join(glyph_of[int(ci)] for ci in row))

    return DitherResult(
        text="\n".join(lines),
        color_indices=tuple(int(v) for v in idx),
        cols=int(cols),
        rows=int(rows),
        palette=tuple((int(r), int(g), int(b)) for r, g, b in palette),
        processing_time=float(processing_time),
    )


__all__ = ["build_ascii_result"]
