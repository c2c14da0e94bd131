from __future__ import annotations

"""Shape checks shared by the dithering algorithms."""

import numpy as np

from ..core_types import FloatGrid, GridShapeError, Palette


def as_cell_view(grid: FloatGrid, width: int, height: int) -> np.ndarray:
    """
    (height, width, 3) view of a flat or shaped sample buffer.

    Float ndarrays are viewed, not copied, so in-place updates reach the
    caller's buffer. Anything else is converted to a fresh float64 array.
    """
    if width < 1 or height < 1:
        raise GridShapeError(f"grid must be at least 1x1, got {width}x{height}")
    if isinstance(grid, np.ndarray) and np.issubdtype(grid.dtype, np.floating):
        arr = grid
    else:
        arr = np.asarray(grid, dtype=np.float64)
    expected = width * height * 3
    if arr.size != expected:
        raise GridShapeError(
            f"grid holds {arr.size} samples, expected {width}x{height}x3 = {expected}"
        )
    view = arr.reshape(height, width, 3)
    if arr.size and not np.shares_memory(view, arr):
        raise GridShapeError("grid is not contiguous; pass np.ascontiguousarray(grid)")
    return view


def check_palette(palette: Palette) -> None:
    if len(palette) == 0:
        raise ValueError("palette must hold at least one colour")


__all__ = ["as_cell_view", "check_palette"]
