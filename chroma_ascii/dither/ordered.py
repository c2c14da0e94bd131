from __future__ import annotations

"""
Bayer 4x4 ordered dithering.

No error is carried between cells: each sample gets a threshold offset from
the tiled matrix on all three channels and is then matched to the palette.
The input grid is left untouched.
"""

import numpy as np

from ..colour_match import closest_indices
from ..core_types import FloatGrid, IndexGrid, Palette, palette_to_array
from ._grid import as_cell_view, check_palette

BAYER_4X4 = np.array(
    [
        [0, 8, 2, 10],
        [12, 4, 14, 6],
        [3, 11, 1, 9],
        [15, 7, 13, 5],
    ],
    dtype=np.float64,
)

# How far the threshold pushes each channel (total swing, centred on 0).
BAYER_SPREAD = 64.0


def bayer_thresholds(width: int, height: int, spread: float = BAYER_SPREAD) -> np.ndarray:
    """(height, width) offsets: (matrix[y % 4][x % 4] / 16 - 0.5) * spread."""
    ys = np.arange(height) % 4
    xs = np.arange(width) % 4
    return (BAYER_4X4[ys[:, None], xs[None, :]] / 16.0 - 0.5) * spread


def bayer(grid: FloatGrid, width: int, height: int, palette: Palette) -> IndexGrid:
    check_palette(palette)
    cells = as_cell_view(grid, width, height)
    shifted = cells + bayer_thresholds(width, height)[:, :, None]
    idx = closest_indices(shifted.reshape(-1, 3), palette_to_array(palette))
    return idx.astype(np.uint8 if len(palette) <= 256 else np.int64)


__all__ = ["BAYER_4X4", "BAYER_SPREAD", "bayer_thresholds", "bayer"]
