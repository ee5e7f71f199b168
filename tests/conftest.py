"""Shared synthetic image fixtures."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def make_checkerboard(size: int = 400, square: int = 20) -> np.ndarray:
    """Black/white checkerboard, uint8 RGB."""
    idx = np.arange(size) // square
    board = ((idx[:, None] + idx[None, :]) % 2 * 255).astype(np.uint8)
    return np.stack([board, board, board], axis=-1)


def make_noise(size: int = 300, seed: int = 0) -> np.ndarray:
    """Uniform random noise, uint8 RGB."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(size, size, 3), dtype=np.uint8)


def make_flat(value, height: int = 300, width: int = 300) -> np.ndarray:
    """Single-colour uint8 RGB image; ``value`` is an int or an (r, g, b) tuple."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :] = value
    return img


@pytest.fixture
def write_image(tmp_path):
    """Factory writing an array to tmp_path and returning the file path."""

    def _write(image: np.ndarray, name: str = "image.png") -> Path:
        path = tmp_path / name
        Image.fromarray(image).save(path)
        return path

    return _write
