"""
Dithering algorithms and the name-based dispatcher.

Each algorithm maps (grid, width, height, palette) to a flat index grid.
Unknown algorithm names fall back to Floyd-Steinberg.
"""

from typing import Callable, Dict

from ..core_types import FloatGrid, IndexGrid, Palette
from .diffusion import (
    ATKINSON,
    FLOYD_STEINBERG,
    SIERRA,
    atkinson,
    diffuse,
    floyd_steinberg,
    kernel_weight,
    sierra,
)
from .ordered import BAYER_4X4, BAYER_SPREAD, bayer, bayer_thresholds

DitherFn = Callable[[FloatGrid, int, int, Palette], IndexGrid]

ALGORITHM_TABLE: Dict[str, DitherFn] = {
    "floyd-steinberg": floyd_steinberg,
    "atkinson": atkinson,
    "sierra": sierra,
    "bayer": bayer,
}


def apply_dithering(
    algorithm: str, grid: FloatGrid, width: int, height: int, palette: Palette
) -> IndexGrid:
    """Run the named algorithm; anything unrecognised runs Floyd-Steinberg."""
    fn = ALGORITHM_TABLE.get(algorithm, floyd_steinberg)
    return fn(grid, width, height, palette)


__all__ = [
    "DitherFn",
    "ALGORITHM_TABLE",
    "apply_dithering",
    "FLOYD_STEINBERG",
    "ATKINSON",
    "SIERRA",
    "BAYER_4X4",
    "BAYER_SPREAD",
    "kernel_weight",
    "diffuse",
    "floyd_steinberg",
    "atkinson",
    "sierra",
    "bayer",
    "bayer_thresholds",
]
