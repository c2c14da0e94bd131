from __future__ import annotations

"""
Error-diffusion dithering (Floyd-Steinberg, Atkinson, Sierra two-row).

All three scan left to right, top to bottom, pick the nearest palette entry for
the (already perturbed) sample, and push the per-channel error onto forward
neighbours according to a kernel of (dx, dy, weight) rows. Neighbours outside
the grid are skipped. The grid is mutated in place; copy it first if the
original samples are still needed.

Atkinson only diffuses 6/8 of the error. The lost quarter is never recovered,
which is what gives it the lighter, higher-contrast look.
"""

from typing import Tuple

import numpy as np

from ..colour_match import closest_index
from ..core_types import FloatGrid, IndexGrid, Palette
from ._grid import as_cell_view, check_palette

Kernel = Tuple[Tuple[int, int, float], ...]

#   _  X  7
#   3  5  1   (/16)
FLOYD_STEINBERG: Kernel = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)

#   _  X  1  1
#   1  1  1       (/8)
#      1
ATKINSON: Kernel = (
    (1, 0, 1 / 8),
    (2, 0, 1 / 8),
    (-1, 1, 1 / 8),
    (0, 1, 1 / 8),
    (1, 1, 1 / 8),
    (0, 2, 1 / 8),
)

#         X  4  3
#   1  2  3  2  1   (/16)
SIERRA: Kernel = (
    (1, 0, 4 / 16),
    (2, 0, 3 / 16),
    (-2, 1, 1 / 16),
    (-1, 1, 2 / 16),
    (0, 1, 3 / 16),
    (1, 1, 2 / 16),
    (2, 1, 1 / 16),
)


def kernel_weight(kernel: Kernel) -> float:
    """Fraction of the quantisation error a kernel passes on."""
    return float(sum(w for _dx, _dy, w in kernel))


def diffuse(
    grid: FloatGrid, width: int, height: int, palette: Palette, kernel: Kernel
) -> IndexGrid:
    """Generic error diffusion over a (height, width, 3) view of grid."""
    check_palette(palette)
    cells = as_cell_view(grid, width, height)
    pal = [(float(r), float(g), float(b)) for r, g, b in palette]
    out: IndexGrid = np.zeros(width * height, dtype=np.uint8 if len(pal) <= 256 else np.int64)

    for y in range(height):
        row = cells[y]
        for x in range(width):
            r, g, b = (float(v) for v in row[x])
            ci = closest_index((r, g, b), pal)
            out[y * width + x] = ci

            pr, pg, pb = pal[ci]
            err = np.array((r - pr, g - pg, b - pb), dtype=np.float64)
            for dx, dy, w in kernel:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and ny < height:
                    cells[ny, nx] += err * w

    return out


def floyd_steinberg(grid: FloatGrid, width: int, height: int, palette: Palette) -> IndexGrid:
    """Classic four-neighbour diffusion; passes on all of the error."""
    return diffuse(grid, width, height, palette, FLOYD_STEINBERG)


def atkinson(grid: FloatGrid, width: int, height: int, palette: Palette) -> IndexGrid:
    """Atkinson (classic Macintosh) diffusion; passes on 3/4 of the error."""
    return diffuse(grid, width, height, palette, ATKINSON)


def sierra(grid: FloatGrid, width: int, height: int, palette: Palette) -> IndexGrid:
    """Sierra two-row diffusion; widest footprint of the three."""
    return diffuse(grid, width, height, palette, SIERRA)


__all__ = [
    "Kernel",
    "FLOYD_STEINBERG",
    "ATKINSON",
    "SIERRA",
    "kernel_weight",
    "diffuse",
    "floyd_steinberg",
    "atkinson",
    "sierra",
]
