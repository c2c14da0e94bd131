from __future__ import annotations

"""
Glyph ramps and luminance-to-glyph mapping.

Every ramp is ordered from the most ink-dense glyph to blank, so index 0 is
used for black and the last index (a space) for white. Ramps are data only;
the mapping functions work with any of them.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .colour_match import luminance
from .core_types import RGBTuple, clamp_value


@dataclass(frozen=True)
class CharacterSet:
    name: str
    label: str
    chars: Tuple[str, ...]  # dense -> sparse, last entry blank


DENSE_TO_SPARSE = CharacterSet(
    name="dense-to-sparse",
    label="Standard",
    chars=tuple("@#WMB8&%$XDQO0ZUJCLYT{/\\|()1jil!;:,\"^`'. "),
)

BOX_DRAWING = CharacterSet(
    name="box-drawing",
    label="Box Drawing",
    chars=tuple("█▓▒░▐▌▀▄■□▪▫●○◆◇◼◻▣▢▩▨▧▦╳╬╪┼─│· "),
)

BRAILLE = CharacterSet(
    name="braille",
    label="Braille",
    chars=tuple("⣿⣷⣯⣟⡿⢿⣻⣽⣾⣶⣮⣞⡾⢾⣺⣼⣤⣠⣄⡤⢤⣰⣸⣴⡆⢰⡄⢠⡀⢀⠁⠂⠄⠈⠐⠠ "),
)

CHARACTER_SETS: Dict[str, CharacterSet] = {
    cs.name: cs for cs in (DENSE_TO_SPARSE, BOX_DRAWING, BRAILLE)
}


def get_charset(name: Optional[str]) -> CharacterSet:
    """Ramp by name; unknown names get the standard ASCII ramp."""
    return CHARACTER_SETS.get(name or "", DENSE_TO_SPARSE)


def luminance_to_char(lum: float, charset: CharacterSet, invert: bool = False) -> str:
    """
    0 -> densest glyph, 255 -> blank. invert flips the ramp.
    Out-of-range luminance (possible after diffusion) is clamped first.
    """
    chars = charset.chars
    normalized = clamp_value(float(lum), 0.0, 255.0) / 255.0
    if invert:
        normalized = 1.0 - normalized
    index = min(int(normalized * len(chars)), len(chars) - 1)
    return chars[index]


def palette_index_to_char(
    color_index: int,
    palette: Sequence[RGBTuple],
    charset: CharacterSet,
    invert: bool = False,
) -> str:
    """Glyph for a matched palette entry, from that colour's luminance."""
    r, g, b = palette[color_index]
    return luminance_to_char(luminance(r, g, b), charset, invert)


__all__ = [
    "CharacterSet",
    "DENSE_TO_SPARSE",
    "BOX_DRAWING",
    "BRAILLE",
    "CHARACTER_SETS",
    "get_charset",
    "luminance_to_char",
    "palette_index_to_char",
]
