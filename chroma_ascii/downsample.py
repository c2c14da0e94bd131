from __future__ import annotations

"""
Box downsampling of a full-resolution image into the coarse character grid.

Cell width is W / cols, cell height is cell width / aspect_ratio. Every output
cell averages the source pixels in its floor-truncated rectangle. Each band of
source rows is summed straight from the uint8 buffer into int64 columns, and
only those band sums get a running total along x, so working memory scales
with rows x W rather than with the full image.
"""

import math
from typing import Tuple

import numpy as np

from .core_types import FloatGrid, InvalidDimensions, U8Image


def grid_size(src_w: int, src_h: int, cols: int, aspect_ratio: float) -> Tuple[int, float, float]:
    """Return (rows, cell_w, cell_h) for a source size, column count and aspect ratio."""
    cell_w = src_w / cols
    cell_h = cell_w / aspect_ratio
    rows = max(1, int(math.floor(src_h / cell_h)))
    return rows, cell_w, cell_h


def _cell_edges(count: int, step: float, limit: int) -> Tuple[np.ndarray, np.ndarray]:
    """Start/end source coordinates per cell: floor(i*step) .. min(floor((i+1)*step), limit)."""
    starts = np.array([math.floor(i * step) for i in range(count)], dtype=np.int64)
    ends = np.array([math.floor((i + 1) * step) for i in range(count)], dtype=np.int64)
    starts = np.minimum(starts, limit)
    ends = np.minimum(ends, limit)
    return starts, ends


def downsample(pixels: U8Image, cols: int, aspect_ratio: float) -> Tuple[FloatGrid, int, int]:
    """
    Average an (H, W, 3|4) image into a (rows, cols, 3) float64 grid.

    Alpha is ignored. Returns (grid, width, height) where width == cols.
    Cells whose rectangle is empty keep zero channels.

    Raises InvalidDimensions for cols < 1, a zero-area image, or a
    non-positive / non-finite aspect ratio.
    """
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] < 3:
        raise InvalidDimensions(f"expected (H, W, 3|4) pixels, got shape {arr.shape}")
    src_h, src_w = int(arr.shape[0]), int(arr.shape[1])
    cols = int(cols)
    if src_w <= 0 or src_h <= 0:
        raise InvalidDimensions(f"zero-area image {src_w}x{src_h}")
    if cols < 1:
        raise InvalidDimensions(f"column count must be >= 1, got {cols}")
    if not (math.isfinite(aspect_ratio) and aspect_ratio > 0):
        raise InvalidDimensions(f"aspect ratio must be positive, got {aspect_ratio}")

    rows, cell_w, cell_h = grid_size(src_w, src_h, cols, aspect_ratio)

    rgb = arr[..., :3]
    x0, x1 = _cell_edges(cols, cell_w, src_w)
    y0, y1 = _cell_edges(rows, cell_h, src_h)

    # per-band column sums; the image itself is never converted or copied
    acc = np.int64 if np.issubdtype(rgb.dtype, np.integer) else np.float64
    bands = np.zeros((rows, src_w + 1, 3), dtype=acc)
    for i in range(rows):
        if y1[i] > y0[i]:
            bands[i, 1:] = rgb[y0[i] : y1[i]].sum(axis=0, dtype=acc)
    bands = np.cumsum(bands, axis=1)

    region_sum = (bands[:, x1] - bands[:, x0]).astype(np.float64)
    count = ((y1 - y0)[:, None] * (x1 - x0)[None, :]).astype(np.float64)

    grid = np.zeros((rows, cols, 3), dtype=np.float64)
    filled = count > 0
    grid[filled] = region_sum[filled] / count[filled][:, None]
    return grid, cols, rows


__all__ = ["grid_size", "downsample"]
