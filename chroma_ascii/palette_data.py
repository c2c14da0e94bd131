# chroma_ascii/palette_data.py
from __future__ import annotations

"""
Palette definitions, the preset catalog, and palette text parsing.

Exports:
  PALETTE_1BIT, PALETTE_2BIT, PALETTE_4BIT: fixed palettes, index order is stable.
  PRESETS: dict[name, Preset] in display order.
  palette_for_mode(mode, custom_palette=()) -> list[RGBTuple]
  get_preset(name) -> Preset | None
  parse_palette_text(text) -> list[RGBTuple]
  load_palette_file(path) -> list[RGBTuple]
"""

import string
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .core_types import RGBTuple, hex_to_rgb
from .utils import debug_log


PALETTE_1BIT: List[RGBTuple] = [(0, 0, 0), (255, 255, 255)]

PALETTE_2BIT: List[RGBTuple] = [
    (0, 0, 0),
    (85, 85, 85),
    (170, 170, 170),
    (255, 255, 255),
]

# CGA 16-colour table
PALETTE_4BIT: List[RGBTuple] = [
    (0, 0, 0),  # black
    (0, 0, 170),  # blue
    (0, 170, 0),  # green
    (0, 170, 170),  # cyan
    (170, 0, 0),  # red
    (170, 0, 170),  # magenta
    (170, 85, 0),  # brown
    (170, 170, 170),  # light gray
    (85, 85, 85),  # dark gray
    (85, 85, 255),  # light blue
    (85, 255, 85),  # light green
    (85, 255, 255),  # light cyan
    (255, 85, 85),  # light red
    (255, 85, 255),  # light magenta
    (255, 255, 85),  # yellow
    (255, 255, 255),  # white
]

ZX_SPECTRUM_COLORS: List[RGBTuple] = [
    (0, 0, 0),
    (0, 0, 215),
    (215, 0, 0),
    (215, 0, 215),
    (0, 215, 0),
    (0, 215, 215),
    (215, 215, 0),
    (215, 215, 215),
    (0, 0, 255),
    (255, 0, 0),
    (255, 0, 255),
    (0, 255, 0),
    (0, 255, 255),
    (255, 255, 0),
    (255, 255, 255),
]

TELETEXT_COLORS: List[RGBTuple] = [
    (0, 0, 0),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
]


@dataclass(frozen=True)
class Preset:
    """Named bundle of algorithm, character set, palette mode, palette and display colours."""

    name: str
    label: str
    algorithm: str
    character_set: str
    palette_mode: str
    palette: Tuple[RGBTuple, ...]
    background: RGBTuple
    foreground: RGBTuple


PRESETS: Dict[str, Preset] = {
    p.name: p
    for p in (
        Preset(
            name="terminal-green",
            label="Terminal Green",
            algorithm="floyd-steinberg",
            character_set="dense-to-sparse",
            palette_mode="custom",
            palette=((0, 0, 0), (0, 255, 0)),
            background=(0, 0, 0),
            foreground=(0, 255, 0),
        ),
        Preset(
            name="amber-crt",
            label="Amber CRT",
            algorithm="floyd-steinberg",
            character_set="dense-to-sparse",
            palette_mode="custom",
            palette=((0, 0, 0), (255, 176, 0)),
            background=(0, 0, 0),
            foreground=(255, 176, 0),
        ),
        Preset(
            name="teletext",
            label="Teletext",
            algorithm="bayer",
            character_set="box-drawing",
            palette_mode="custom",
            palette=tuple(TELETEXT_COLORS),
            background=(0, 0, 0),
            foreground=(255, 255, 255),
        ),
        Preset(
            name="1-bit-mac",
            label="1-bit Mac",
            algorithm="atkinson",
            character_set="dense-to-sparse",
            palette_mode="1-bit",
            palette=tuple(PALETTE_1BIT),
            background=(255, 255, 255),
            foreground=(0, 0, 0),
        ),
        Preset(
            name="zx-spectrum",
            label="ZX Spectrum",
            algorithm="floyd-steinberg",
            character_set="box-drawing",
            palette_mode="custom",
            palette=tuple(ZX_SPECTRUM_COLORS),
            background=(0, 0, 0),
            foreground=(255, 255, 255),
        ),
    )
}


def get_preset(name: Optional[str]) -> Optional[Preset]:
    """Look up a preset by name; None for None or unknown names."""
    if not name:
        return None
    return PRESETS.get(name)


def palette_for_mode(
    mode: str, custom_palette: Sequence[RGBTuple] = (), *, debug: bool = False
) -> List[RGBTuple]:
    """
    Palette for a bit-depth mode.

    "custom" returns the caller's palette verbatim, or black/white when it is
    empty. Unknown modes resolve to 1-bit.
    """
    if mode == "2-bit":
        return list(PALETTE_2BIT)
    if mode == "4-bit":
        return list(PALETTE_4BIT)
    if mode == "custom":
        if len(custom_palette) > 0:
            return [(int(r), int(g), int(b)) for r, g, b in custom_palette]
        if debug:
            debug_log("custom palette is empty; using black/white")
        return list(PALETTE_1BIT)
    if mode != "1-bit" and debug:
        debug_log(f"unknown palette mode {mode!r}; using 1-bit")
    return list(PALETTE_1BIT)


# Palette text / file parsing


def _is_gpl_row(line: str) -> bool:
    parts = line.split()
    return len(parts) >= 3 and all(part.isdigit() for part in parts[:3])


def _is_hex_colour_line(line: str) -> bool:
    """A '#' line is a colour only when it is a lone #rgb or #rrggbb token."""
    parts = line.split()
    if len(parts) != 1:
        return False
    body = parts[0].rstrip(",")[1:]
    return len(body) in (3, 6) and all(c in string.hexdigits for c in body)


def _parse_gpl_row(line: str) -> Optional[RGBTuple]:
    parts = line.split()
    r, g, b = (int(parts[0]), int(parts[1]), int(parts[2]))
    if max(r, g, b) > 255:
        return None
    return (r, g, b)


def parse_palette_text(text: str) -> List[RGBTuple]:
    """
    Read colours from hex lines ('#rrggbb', 'rrggbb', '0xrrggbb', '#rgb') or
    GIMP .gpl rows ('R G B name'). Comments, headers and junk lines are skipped.
    A line starting with '#' is a colour only when it holds nothing but the
    hex code, so '#add more blues' reads as a comment.
    Order is preserved; duplicates are kept.
    """
    colours: List[RGBTuple] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("GIMP", "Name:", "Columns:", ";", "//")):
            continue
        if _is_gpl_row(line):
            gpl = _parse_gpl_row(line)
            if gpl is not None:
                colours.append(gpl)
            continue
        if line.startswith("#") and not _is_hex_colour_line(line):
            continue  # comment line
        token = line.split()[0].rstrip(",")
        try:
            colours.append(hex_to_rgb(token))
        except ValueError:
            continue
    return colours


def load_palette_file(path: Path) -> List[RGBTuple]:
    """Read a palette file (.gpl, .hex, .txt) with parse_palette_text."""
    return parse_palette_text(Path(path).read_text(encoding="utf-8", errors="ignore"))


__all__ = [
    "PALETTE_1BIT",
    "PALETTE_2BIT",
    "PALETTE_4BIT",
    "ZX_SPECTRUM_COLORS",
    "TELETEXT_COLORS",
    "Preset",
    "PRESETS",
    "get_preset",
    "palette_for_mode",
    "parse_palette_text",
    "load_palette_file",
]
