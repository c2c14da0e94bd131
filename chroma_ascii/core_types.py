from __future__ import annotations

"""
Core type aliases, settings/result value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field, replace
from typing import Literal, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str
Palette = Sequence[RGBTuple]

U8Image = NDArray[np.uint8]  # (H, W, 3) or (H, W, 4)
FloatGrid = NDArray[np.float64]  # (rows, cols, 3), unclamped samples
IndexGrid = NDArray[np.uint8]  # (rows * cols,)

AlgorithmName = Literal["floyd-steinberg", "atkinson", "sierra", "bayer"]
CharacterSetName = Literal["dense-to-sparse", "box-drawing", "braille"]
PaletteMode = Literal["1-bit", "2-bit", "4-bit", "custom"]

# Bounds for the user-facing knobs

DENSITY_MIN = 1
DENSITY_MAX = 200
ASPECT_MIN = 0.3
ASPECT_MAX = 1.0


class InvalidDimensions(ValueError):
    """Zero-area image or non-positive column count."""


class GridShapeError(ValueError):
    """A sample or index buffer disagrees with its declared width x height."""


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive, '#' optional) into an RGB tuple."""
    s = hex_str.strip().lower()
    if s.startswith("0x"):
        s = s[2:]
    if not s.startswith("#"):
        s = f"#{s}"
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError(f"hex must be '#rrggbb' or '#rgb', got {hex_str!r}")
    try:
        return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))
    except ValueError:
        raise ValueError(f"invalid hex colour {hex_str!r}") from None


def palette_to_array(palette: Palette) -> NDArray[np.float64]:
    """(P, 3) float64 view of a palette, in palette order."""
    return np.asarray(palette, dtype=np.float64).reshape(-1, 3)


# Value objects


@dataclass(frozen=True)
class DitherSettings:
    """
    Per-run configuration. Immutable; use with_changes() to derive a new one.

    font_size and font_family only affect rendering. custom_palette is only
    read when palette_mode is "custom".
    """

    algorithm: str = "floyd-steinberg"
    character_set: str = "dense-to-sparse"
    palette_mode: str = "1-bit"
    preset: Optional[str] = None
    density: int = 80
    aspect_ratio: float = 0.5
    font_size: float = 8.0
    font_family: str = "monospace"
    invert: bool = False
    custom_palette: Tuple[RGBTuple, ...] = field(default_factory=tuple)

    def with_changes(self, **changes) -> "DitherSettings":
        if "custom_palette" in changes:
            changes["custom_palette"] = tuple(
                (int(r), int(g), int(b)) for r, g, b in changes["custom_palette"]
            )
        return replace(self, **changes)

    def clamped(self) -> "DitherSettings":
        """Copy with density and aspect ratio forced into their supported range."""
        density = int(clamp_value(int(self.density), DENSITY_MIN, DENSITY_MAX))
        aspect = float(self.aspect_ratio)
        if not np.isfinite(aspect):
            aspect = DEFAULT_SETTINGS.aspect_ratio
        aspect = clamp_value(aspect, ASPECT_MIN, ASPECT_MAX)
        if density == self.density and aspect == self.aspect_ratio:
            return self
        return replace(self, density=density, aspect_ratio=aspect)


DEFAULT_SETTINGS = DitherSettings()


@dataclass(frozen=True)
class DitherResult:
    """Output of one pipeline run. Replaced wholesale on every new run."""

    text: str
    color_indices: Tuple[int, ...]
    cols: int
    rows: int
    palette: Tuple[RGBTuple, ...]
    processing_time: float  # milliseconds

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n") if self.text else []

    def colour_at(self, x: int, y: int) -> RGBTuple:
        """Matched palette colour of cell (x, y)."""
        return self.palette[self.color_indices[y * self.cols + x]]


__all__ = [
    "RGBTuple",
    "HexStr",
    "Palette",
    "U8Image",
    "FloatGrid",
    "IndexGrid",
    "AlgorithmName",
    "CharacterSetName",
    "PaletteMode",
    "DENSITY_MIN",
    "DENSITY_MAX",
    "ASPECT_MIN",
    "ASPECT_MAX",
    "InvalidDimensions",
    "GridShapeError",
    "clamp_value",
    "rgb_to_hex",
    "hex_to_rgb",
    "palette_to_array",
    "DitherSettings",
    "DEFAULT_SETTINGS",
    "DitherResult",
]
