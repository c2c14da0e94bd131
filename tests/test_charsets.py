import pytest

from chroma_ascii.charsets import (
    BOX_DRAWING,
    BRAILLE,
    CHARACTER_SETS,
    DENSE_TO_SPARSE,
    get_charset,
    luminance_to_char,
    palette_index_to_char,
)


def test_ramp_lengths_and_blank_tail() -> None:
    assert len(DENSE_TO_SPARSE.chars) == 41
    assert len(BOX_DRAWING.chars) == 32
    assert len(BRAILLE.chars) == 37
    for cs in CHARACTER_SETS.values():
        assert cs.chars[-1] == " "
        assert all(len(ch) == 1 for ch in cs.chars)


def test_ramp_ends() -> None:
    assert DENSE_TO_SPARSE.chars[0] == "@"
    assert BOX_DRAWING.chars[0] == "█"
    assert BRAILLE.chars[0] == "⣿"


@pytest.mark.parametrize("cs", [DENSE_TO_SPARSE, BOX_DRAWING, BRAILLE])
def test_black_is_densest_and_white_is_blank(cs) -> None:
    assert luminance_to_char(0, cs) == cs.chars[0]
    assert luminance_to_char(255, cs) == " "


@pytest.mark.parametrize("cs", [DENSE_TO_SPARSE, BOX_DRAWING, BRAILLE])
def test_invert_swaps_the_ends(cs) -> None:
    assert luminance_to_char(0, cs, invert=True) == " "
    assert luminance_to_char(255, cs, invert=True) == cs.chars[0]


def test_out_of_range_luminance_is_clamped() -> None:
    assert luminance_to_char(-80.0, DENSE_TO_SPARSE) == "@"
    assert luminance_to_char(900.0, DENSE_TO_SPARSE) == " "


def test_index_is_floor_of_normalised_position() -> None:
    chars = DENSE_TO_SPARSE.chars
    # 128/255 * 41 = 20.58 -> index 20
    assert luminance_to_char(128, DENSE_TO_SPARSE) == chars[20]
    # 254/255 * 41 = 40.84 -> index 40 (blank)
    assert luminance_to_char(254, DENSE_TO_SPARSE) == " "


def test_ramp_is_monotonic_in_luminance() -> None:
    chars = DENSE_TO_SPARSE.chars
    positions = [chars.index(luminance_to_char(v, DENSE_TO_SPARSE)) for v in range(256)]
    assert positions == sorted(positions)


def test_unknown_charset_falls_back_to_ascii() -> None:
    assert get_charset("runes") is DENSE_TO_SPARSE
    assert get_charset(None) is DENSE_TO_SPARSE
    assert get_charset("braille") is BRAILLE


def test_palette_index_uses_palette_luminance() -> None:
    palette = [(0, 0, 0), (255, 255, 255), (255, 0, 0)]
    assert palette_index_to_char(0, palette, DENSE_TO_SPARSE) == "@"
    assert palette_index_to_char(1, palette, DENSE_TO_SPARSE) == " "
    # red: 0.299 * 255 = 76.2 -> 76.2/255*41 = 12.25 -> index 12
    assert palette_index_to_char(2, palette, DENSE_TO_SPARSE) == DENSE_TO_SPARSE.chars[12]
