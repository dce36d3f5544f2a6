"""Tests for image loading, saving and validation."""

from __future__ import annotations

import numpy as np
import pytest

from imagecli.core.types import Bitmap
from imagecli.errors import ImageDimensionError, ImageError, ImageFormatError
from imagecli.io.image import (
    encode_image,
    is_raw_path,
    load_image,
    save_image,
    to_bitmap,
    validate_input_path,
    validate_output_path,
)


class TestPathValidation:
    """Tests for input/output path checks."""

    def test_nonexistent_path(self):
        """Missing input files should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            validate_input_path("/completely/bogus/path.png")

    def test_invalid_extension(self, tmp_path):
        """Disallowed extensions should raise."""
        p = tmp_path / "malicious.exe"
        p.write_text("not an image")
        with pytest.raises(ImageFormatError):
            validate_input_path(p)

    def test_directory_rejected(self, tmp_path):
        """Directories are not images."""
        d = tmp_path / "dir.png"
        d.mkdir()
        with pytest.raises(ImageError):
            validate_input_path(d)

    def test_output_parent_must_exist(self):
        """Output path with a missing parent should raise."""
        with pytest.raises(FileNotFoundError):
            validate_output_path("/nonexistent/directory/output.png")

    def test_output_extension_checked(self, tmp_path):
        """Unknown output formats should raise."""
        with pytest.raises(ImageFormatError):
            validate_output_path(tmp_path / "out.xyz")

    def test_raw_suffix(self):
        """RAW suffixes are recognized case-insensitively."""
        assert is_raw_path("photo.NEF")
        assert not is_raw_path("photo.png")


class TestToBitmap:
    """Tests for decoded array normalization."""

    def test_uint8_rgb_passthrough(self):
        """8-bit RGB data should be kept as-is."""
        raw = np.arange(24, dtype=np.uint8).reshape(2, 4, 3)
        np.testing.assert_array_equal(to_bitmap(raw).pixels, raw)

    def test_2d_gray(self):
        """2D arrays become single-channel bitmaps."""
        bitmap = to_bitmap(np.zeros((3, 5), dtype=np.uint8))
        assert bitmap.channels == 1

    def test_16_bit_rescaled(self):
        """16-bit values should map onto the 8-bit range."""
        raw = np.array([[[0, 32896, 65535]]], dtype=np.uint16)
        np.testing.assert_array_equal(to_bitmap(raw).pixels[0, 0], [0, 128, 255])

    def test_float_rescaled(self):
        """Float data is taken as [0, 1]."""
        raw = np.array([[[0.0, 0.5, 1.5]]], dtype=np.float32)
        np.testing.assert_array_equal(to_bitmap(raw).pixels[0, 0], [0, 128, 255])

    def test_gray_alpha_expanded(self):
        """Gray+alpha becomes RGBA."""
        raw = np.array([[[10, 200]]], dtype=np.uint8)
        np.testing.assert_array_equal(to_bitmap(raw).pixels[0, 0], [10, 10, 10, 200])

    def test_bad_shape(self):
        """Five-channel data is rejected."""
        with pytest.raises(ImageFormatError):
            to_bitmap(np.zeros((2, 2, 5), dtype=np.uint8))

    def test_dimension_limit(self, monkeypatch):
        """Oversized images are rejected before conversion."""
        monkeypatch.setattr("imagecli.io.image.MAX_IMAGE_DIMENSION", 4)
        with pytest.raises(ImageDimensionError):
            to_bitmap(np.zeros((2, 5, 3), dtype=np.uint8))


class TestRoundTrip:
    """Tests for PNG save/load."""

    def test_png_rgb(self, random_bitmap, tmp_image_dir):
        """PNG is lossless for 8-bit RGB."""
        path = save_image(random_bitmap, tmp_image_dir / "rgb.png")
        loaded = load_image(path)
        np.testing.assert_array_equal(loaded.pixels, random_bitmap.pixels)

    def test_png_rgba(self, random_rgba_bitmap, tmp_image_dir):
        """Alpha should survive a PNG round trip."""
        path = save_image(random_rgba_bitmap, tmp_image_dir / "rgba.png")
        loaded = load_image(path)
        assert loaded.channels == 4
        np.testing.assert_array_equal(loaded.pixels, random_rgba_bitmap.pixels)

    def test_png_gray(self, tmp_image_dir):
        """Single-channel bitmaps save as grayscale PNG."""
        bitmap = Bitmap(np.full((4, 6, 1), 77, dtype=np.uint8))
        path = save_image(bitmap, tmp_image_dir / "gray.png")
        loaded = load_image(path)
        assert loaded.channels == 1
        assert np.all(loaded.pixels == 77)

    def test_encode_png_bytes(self, random_bitmap):
        """Encoding to bytes should produce a PNG stream."""
        data = encode_image(random_bitmap)
        assert data[:8] == b"\x89PNG\r\n\x1a\n"

    def test_corrupt_file(self, tmp_image_dir):
        """Undecodable data should raise ImageFormatError."""
        p = tmp_image_dir / "broken.png"
        p.write_bytes(b"\x89PNG\r\n\x1a\n garbage")
        with pytest.raises(ImageFormatError):
            load_image(p)
