from pathlib import Path
import sys

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


def solid_rgba(width: int, height: int, rgb=(0, 0, 0), alpha: int = 255) -> np.ndarray:
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[..., 0] = rgb[0]
    img[..., 1] = rgb[1]
    img[..., 2] = rgb[2]
    img[..., 3] = alpha
    return img


@pytest.fixture
def black_4x4() -> np.ndarray:
    return solid_rgba(4, 4, (0, 0, 0))


@pytest.fixture
def gradient_rgba() -> np.ndarray:
    """Horizontal grey ramp 0..255, 256x128."""
    ramp = np.linspace(0, 255, 256).round().astype(np.uint8)
    img = np.zeros((128, 256, 4), dtype=np.uint8)
    img[..., 0] = ramp[None, :]
    img[..., 1] = ramp[None, :]
    img[..., 2] = ramp[None, :]
    img[..., 3] = 255
    return img


@pytest.fixture
def colour_rgba() -> np.ndarray:
    """Deterministic noisy colour image, 120x90."""
    rng = np.random.default_rng(1234)
    img = rng.integers(0, 256, size=(90, 120, 4), dtype=np.uint8)
    img[..., 3] = 255
    return img


@pytest.fixture
def make_rgba():
    return solid_rgba
