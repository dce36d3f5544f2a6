"""Shared fixtures for imagecli tests."""

from __future__ import annotations

import numpy as np
import pytest

from imagecli.core.types import Bitmap


@pytest.fixture
def random_bitmap():
    """24x16 RGB bitmap of random bytes."""
    rng = np.random.default_rng(42)
    return Bitmap(rng.integers(0, 256, size=(16, 24, 3), dtype=np.uint8))


@pytest.fixture
def random_rgba_bitmap():
    """12x10 RGBA bitmap with a random alpha plane."""
    rng = np.random.default_rng(7)
    return Bitmap(rng.integers(0, 256, size=(10, 12, 4), dtype=np.uint8))


@pytest.fixture
def edge_bitmap():
    """1x3 bitmap of black, white and mid gray."""
    pixels = np.array([[[0, 0, 0], [255, 255, 255], [128, 128, 128]]], dtype=np.uint8)
    return Bitmap(pixels)


@pytest.fixture
def gray_bitmap():
    """32x32 uniform mid-gray bitmap."""
    return Bitmap.filled(32, 32, (128, 128, 128))


@pytest.fixture
def empty_bitmap():
    """Zero-width bitmap."""
    return Bitmap(np.zeros((4, 0, 3), dtype=np.uint8))


@pytest.fixture
def all_bytes_bitmap():
    """256x1 bitmap whose pixels run through every byte value."""
    ramp = np.arange(256, dtype=np.uint8)
    return Bitmap(np.stack([ramp, ramp, ramp], axis=-1)[np.newaxis, :, :])


@pytest.fixture
def tmp_image_dir(tmp_path):
    """Temporary directory for test images."""
    d = tmp_path / "images"
    d.mkdir()
    return d
