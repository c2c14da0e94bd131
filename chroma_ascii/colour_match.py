from __future__ import annotations

"""
Nearest-colour matching in plain RGB.

Squared Euclidean distance, no perceptual colour space. Ties always resolve to
the lowest palette index.
"""

from typing import Sequence

import numpy as np

from .core_types import Palette, RGBTuple


def luminance(r: float, g: float, b: float) -> float:
    """Rec. 601 luma on 0..255 channels. Not clamped."""
    return 0.299 * r + 0.587 * g + 0.114 * b


def closest_index(sample: Sequence[float], palette: Palette) -> int:
    """
    Index of the palette entry nearest to sample by squared RGB distance.
    Scans in palette order with a strict comparison so the first minimum wins.
    """
    r, g, b = float(sample[0]), float(sample[1]), float(sample[2])
    best_idx = 0
    best_dist = float("inf")
    for i, (pr, pg, pb) in enumerate(palette):
        dr = r - pr
        dg = g - pg
        db = b - pb
        dist = dr * dr + dg * dg + db * db
        if dist < best_dist:
            best_dist = dist
            best_idx = i
    return best_idx


def closest_indices(samples: np.ndarray, palette_arr: np.ndarray) -> np.ndarray:
    """
    Vectorised closest_index for (N, 3) samples against a (P, 3) palette array.
    np.argmin returns the first minimum, which keeps the lowest-index tie rule.
    """
    src = np.asarray(samples, dtype=np.float64).reshape(-1, 3)
    pal = np.asarray(palette_arr, dtype=np.float64).reshape(-1, 3)
    diff = src[:, None, :] - pal[None, :, :]
    dist2 = np.sum(diff * diff, axis=2)
    return np.argmin(dist2, axis=1).astype(np.int64)


def palette_luminances(palette: Sequence[RGBTuple]) -> np.ndarray:
    """Luminance of every palette entry, in palette order."""
    arr = np.asarray(palette, dtype=np.float64).reshape(-1, 3)
    return 0.299 * arr[:, 0] + 0.587 * arr[:, 1] + 0.114 * arr[:, 2]


__all__ = ["luminance", "closest_index", "closest_indices", "palette_luminances"]
