import pytest

from chroma_ascii.core_types import DitherSettings
from chroma_ascii.mode import (
    apply_preset,
    effective_settings,
    resolve_algorithm,
    resolve_character_set,
    resolve_palette,
    resolve_palette_mode,
    with_choice,
)


def test_one_bit_mac_overrides_previous_choices() -> None:
    before = DitherSettings(algorithm="bayer", palette_mode="4-bit", character_set="braille")
    after = apply_preset(before, "1-bit-mac")
    assert after.preset == "1-bit-mac"
    assert after.algorithm == "atkinson"
    assert after.palette_mode == "1-bit"
    assert after.character_set == "dense-to-sparse"
    assert after.custom_palette == ((0, 0, 0), (255, 255, 255))
    # untouched fields survive
    assert after.density == before.density
    assert before.algorithm == "bayer"


def test_effective_view_of_a_preset_is_custom_mode() -> None:
    eff = effective_settings(apply_preset(DitherSettings(), "1-bit-mac"))
    assert eff.palette_mode == "custom"
    assert eff.algorithm == "atkinson"


def test_preset_wins_even_if_fields_were_edited_afterwards() -> None:
    s = apply_preset(DitherSettings(), "teletext").with_changes(algorithm="sierra")
    eff = effective_settings(s)
    assert eff.algorithm == "bayer"
    assert eff.character_set == "box-drawing"
    assert resolve_palette(s)[1] == (255, 0, 0)


def test_unknown_preset_leaves_settings_alone() -> None:
    s = DitherSettings(algorithm="sierra")
    assert apply_preset(s, "c64") is s


def test_clearing_the_preset_keeps_fields() -> None:
    s = apply_preset(DitherSettings(), "zx-spectrum")
    cleared = apply_preset(s, None)
    assert cleared.preset is None
    assert cleared.character_set == "box-drawing"
    assert cleared.palette_mode == "custom"
    assert len(resolve_palette(cleared)) == 15


def test_individual_choice_drops_the_preset() -> None:
    s = apply_preset(DitherSettings(), "amber-crt")
    changed = with_choice(s, algorithm="bayer")
    assert changed.preset is None
    assert changed.algorithm == "bayer"
    with pytest.raises(TypeError):
        with_choice(s, density=3)


def test_unknown_names_resolve_to_defaults() -> None:
    assert resolve_algorithm("jarvis") == "floyd-steinberg"
    assert resolve_algorithm("sierra") == "sierra"
    assert resolve_character_set("emoji") == "dense-to-sparse"
    assert resolve_palette_mode("24-bit") == "1-bit"
    eff = effective_settings(DitherSettings(algorithm="x", character_set="y", palette_mode="z"))
    assert (eff.algorithm, eff.character_set, eff.palette_mode) == (
        "floyd-steinberg",
        "dense-to-sparse",
        "1-bit",
    )


def test_density_and_aspect_are_clamped() -> None:
    eff = effective_settings(DitherSettings(density=0, aspect_ratio=3.0))
    assert eff.density == 1
    assert eff.aspect_ratio == 1.0
    eff = effective_settings(DitherSettings(density=999, aspect_ratio=0.01))
    assert eff.density == 200
    assert eff.aspect_ratio == 0.3


def test_mode_palette_without_preset() -> None:
    assert len(resolve_palette(DitherSettings(palette_mode="4-bit"))) == 16
    s = DitherSettings(palette_mode="custom", custom_palette=((9, 9, 9),))
    assert resolve_palette(s) == [(9, 9, 9)]
