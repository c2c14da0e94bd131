from __future__ import annotations

"""
Name resolution and preset helpers.

Exports:
- resolve_algorithm(name) -> AlgorithmName
- resolve_character_set(name) -> CharacterSetName
- resolve_palette_mode(name) -> PaletteMode
- apply_preset(settings, name) -> DitherSettings
- with_choice(settings, **choices) -> DitherSettings
- effective_settings(settings) -> DitherSettings
- resolve_palette(settings) -> list[RGBTuple]

Notes:
- Unknown names never raise. Algorithms fall back to "floyd-steinberg",
  character sets to "dense-to-sparse", palette modes to "1-bit".
- A preset supersedes algorithm, character set and palette mode. The effective
  view of a preset run always reports palette_mode "custom".
"""

from typing import List, Optional, Tuple

from .core_types import (
    AlgorithmName,
    CharacterSetName,
    DitherSettings,
    PaletteMode,
    RGBTuple,
)
from .palette_data import get_preset, palette_for_mode


ALGORITHMS: Tuple[AlgorithmName, ...] = ("floyd-steinberg", "atkinson", "sierra", "bayer")
CHARACTER_SETS: Tuple[CharacterSetName, ...] = ("dense-to-sparse", "box-drawing", "braille")
PALETTE_MODES: Tuple[PaletteMode, ...] = ("1-bit", "2-bit", "4-bit", "custom")

DEFAULT_ALGORITHM: AlgorithmName = "floyd-steinberg"
DEFAULT_CHARACTER_SET: CharacterSetName = "dense-to-sparse"
DEFAULT_PALETTE_MODE: PaletteMode = "1-bit"


def resolve_algorithm(name: Optional[str]) -> AlgorithmName:
    if name in ALGORITHMS:
        return name  # type: ignore[return-value]
    return DEFAULT_ALGORITHM


def resolve_character_set(name: Optional[str]) -> CharacterSetName:
    if name in CHARACTER_SETS:
        return name  # type: ignore[return-value]
    return DEFAULT_CHARACTER_SET


def resolve_palette_mode(name: Optional[str]) -> PaletteMode:
    if name in PALETTE_MODES:
        return name  # type: ignore[return-value]
    return DEFAULT_PALETTE_MODE


def apply_preset(settings: DitherSettings, name: Optional[str]) -> DitherSettings:
    """
    Select a preset the way the control panel does.

    Copies the preset's algorithm, character set and palette mode into the
    settings and stores its palette as the custom palette. None clears the
    preset and keeps the other fields. Unknown names return settings unchanged.
    """
    if name is None:
        return settings.with_changes(preset=None)
    preset = get_preset(name)
    if preset is None:
        return settings
    return settings.with_changes(
        preset=preset.name,
        algorithm=preset.algorithm,
        character_set=preset.character_set,
        palette_mode=preset.palette_mode,
        custom_palette=preset.palette,
    )


def with_choice(settings: DitherSettings, **choices) -> DitherSettings:
    """
    Change algorithm / character_set / palette_mode individually.
    Any such change drops the active preset.
    """
    allowed = {"algorithm", "character_set", "palette_mode"}
    unknown = set(choices) - allowed
    if unknown:
        raise TypeError(f"with_choice() got unexpected fields: {sorted(unknown)}")
    return settings.with_changes(preset=None, **choices)


def effective_settings(settings: DitherSettings) -> DitherSettings:
    """
    Settings as seen by the dithering and character stages.
    - Preset active -> its overrides win, palette_mode becomes "custom".
    - Otherwise names are resolved to known values.
    Density and aspect ratio are clamped into range in both cases.
    """
    base = settings.clamped()
    preset = get_preset(base.preset)
    if preset is not None:
        return base.with_changes(
            algorithm=preset.algorithm,
            character_set=preset.character_set,
            palette_mode="custom",
            custom_palette=preset.palette,
        )
    return base.with_changes(
        algorithm=resolve_algorithm(base.algorithm),
        character_set=resolve_character_set(base.character_set),
        palette_mode=resolve_palette_mode(base.palette_mode),
    )


def resolve_palette(settings: DitherSettings, *, debug: bool = False) -> List[RGBTuple]:
    """Preset palette when a preset is active, else the mode palette."""
    preset = get_preset(settings.preset)
    if preset is not None:
        return list(preset.palette)
    return palette_for_mode(settings.palette_mode, settings.custom_palette, debug=debug)


__all__ = [
    "ALGORITHMS",
    "CHARACTER_SETS",
    "PALETTE_MODES",
    "DEFAULT_ALGORITHM",
    "DEFAULT_CHARACTER_SET",
    "DEFAULT_PALETTE_MODE",
    "resolve_algorithm",
    "resolve_character_set",
    "resolve_palette_mode",
    "apply_preset",
    "with_choice",
    "effective_settings",
    "resolve_palette",
]
