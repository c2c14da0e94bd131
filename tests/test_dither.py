import numpy as np
import pytest

from chroma_ascii.core_types import GridShapeError
from chroma_ascii.dither import (
    ALGORITHM_TABLE,
    ATKINSON,
    BAYER_4X4,
    FLOYD_STEINBERG,
    SIERRA,
    apply_dithering,
    atkinson,
    bayer,
    bayer_thresholds,
    floyd_steinberg,
    kernel_weight,
    sierra,
)
from chroma_ascii.palette_data import PALETTE_1BIT, PALETTE_4BIT

BW = PALETTE_1BIT


def _uniform(width: int, height: int, value: float) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.float64)


def test_kernel_weights() -> None:
    assert kernel_weight(FLOYD_STEINBERG) == 1.0
    assert kernel_weight(SIERRA) == 1.0
    assert kernel_weight(ATKINSON) == 0.75


def test_all_black_maps_to_index_zero() -> None:
    for name in ALGORITHM_TABLE:
        out = apply_dithering(name, _uniform(4, 4, 0.0), 4, 4, BW)
        assert out.tolist() == [0] * 16, name


def test_floyd_steinberg_spreads_error_forward() -> None:
    grid = np.zeros((3, 3, 3), dtype=np.float64)
    grid[0, 0] = 100.0
    out = floyd_steinberg(grid, 3, 3, BW)
    assert out.tolist() == [0] * 9
    # 7/16 of 100 to the right
    assert grid[0, 1].tolist() == [43.75] * 3
    # 5/16 of 100 from above plus 3/16 of 43.75 from the upper right
    assert grid[1, 0].tolist() == [39.453125] * 3


def test_atkinson_drops_a_quarter_of_the_error() -> None:
    grid = np.zeros((1, 3, 3), dtype=np.float64)
    grid[0, 0] = 80.0
    atkinson(grid, 3, 1, BW)
    assert grid[0, 1].tolist() == [10.0] * 3
    # 80/8 from (0,0) plus 10/8 from (1,0)
    assert grid[0, 2].tolist() == [11.25] * 3


def test_floyd_steinberg_mid_grey_tracks_source_level() -> None:
    size = 64
    out = floyd_steinberg(_uniform(size, size, 128.0), size, size, BW)
    white_share = float(np.mean(out))
    assert abs(white_share * 255.0 - 128.0) < 3.0
    rows = out.reshape(size, size)
    assert all(0 < int(r.sum()) < size for r in rows)


def test_error_diffusion_mutates_grid_in_place() -> None:
    flat = np.zeros(2 * 2 * 3, dtype=np.float64)
    flat[:3] = 100.0
    floyd_steinberg(flat, 2, 2, BW)
    assert flat[3:6].tolist() == [43.75] * 3


def test_bayer_threshold_matrix() -> None:
    th = bayer_thresholds(4, 4)
    assert th[0, 0] == -32.0
    assert th[3, 0] == (15 / 16 - 0.5) * 64
    assert np.array_equal(bayer_thresholds(8, 8)[4:, 4:], th)


def test_bayer_mid_grey_follows_matrix() -> None:
    out = bayer(_uniform(4, 4, 128.0), 4, 4, BW).reshape(4, 4)
    assert np.array_equal(out == 1, BAYER_4X4 >= 8)
    assert int(out.sum()) == 8


def test_bayer_is_pure(colour_rgba) -> None:
    grid = colour_rgba[:40, :60, :3].astype(np.float64)
    before = grid.copy()
    first = bayer(grid, 60, 40, PALETTE_4BIT)
    second = bayer(grid, 60, 40, PALETTE_4BIT)
    assert np.array_equal(first, second)
    assert np.array_equal(grid, before)


def test_unknown_algorithm_falls_back_to_floyd_steinberg(colour_rgba) -> None:
    src = colour_rgba[:20, :30, :3].astype(np.float64)
    expected = floyd_steinberg(src.copy(), 30, 20, PALETTE_4BIT)
    got = apply_dithering("blue-noise", src.copy(), 30, 20, PALETTE_4BIT)
    assert np.array_equal(expected, got)


@pytest.mark.parametrize("name", sorted(ALGORITHM_TABLE))
def test_indices_address_the_palette(colour_rgba, name) -> None:
    src = colour_rgba[:30, :45, :3].astype(np.float64)
    out = apply_dithering(name, src, 45, 30, PALETTE_4BIT)
    assert out.shape == (45 * 30,)
    assert int(out.min()) >= 0
    assert int(out.max()) < len(PALETTE_4BIT)


@pytest.mark.parametrize("name", sorted(ALGORITHM_TABLE))
def test_size_mismatch_is_rejected(name) -> None:
    with pytest.raises(GridShapeError):
        apply_dithering(name, np.zeros(10, dtype=np.float64), 2, 2, BW)


def test_empty_palette_is_rejected() -> None:
    with pytest.raises(ValueError):
        floyd_steinberg(_uniform(2, 2, 0.0), 2, 2, [])


def _greys(*levels: int) -> list:
    return [(v, v, v) for v in levels]


def _received(grid: np.ndarray) -> dict:
    return {
        (x, y): float(grid[y, x, 0])
        for y in range(grid.shape[0])
        for x in range(grid.shape[1])
        if grid[y, x, 0] != 0.0
    }


def test_sierra_footprint() -> None:
    # every receiving cell lands exactly on a palette grey, so nothing spreads further
    grid = np.zeros((2, 5, 3), dtype=np.float64)
    grid[0, 2] = 200.0
    out = sierra(grid, 5, 2, _greys(0, 10, 20, 30, 40))
    assert out[2] == 4  # 200 -> 40, error 160
    received = _received(grid)
    del received[(2, 0)]
    assert received == {
        (3, 0): 40.0,
        (4, 0): 30.0,
        (0, 1): 10.0,
        (1, 1): 20.0,
        (2, 1): 30.0,
        (3, 1): 20.0,
        (4, 1): 10.0,
    }


def test_atkinson_footprint_reaches_two_rows_down() -> None:
    grid = np.zeros((3, 5, 3), dtype=np.float64)
    grid[0, 2] = 100.0
    atkinson(grid, 5, 3, _greys(0, 10, 20))
    received = _received(grid)
    del received[(2, 0)]
    # error 80, one eighth per tap
    assert received == {
        (3, 0): 10.0,
        (4, 0): 10.0,
        (1, 1): 10.0,
        (2, 1): 10.0,
        (3, 1): 10.0,
        (2, 2): 10.0,
    }


def test_floyd_steinberg_footprint() -> None:
    grid = np.zeros((2, 3, 3), dtype=np.float64)
    grid[0, 1] = 120.0
    floyd_steinberg(grid, 3, 2, _greys(*range(0, 45, 5)))
    received = _received(grid)
    del received[(1, 0)]
    # 120 -> 40, error 80
    assert received == {(2, 0): 35.0, (0, 1): 15.0, (1, 1): 25.0, (2, 1): 5.0}
