"""Tests for temperature/tint/vibrance/saturation."""

from __future__ import annotations

import itertools

import numpy as np

from imagecli.adjust import color_balance
from imagecli.color.spaces import luminance
from imagecli.core.types import Bitmap, ColorBalanceParams


class TestChannelScales:
    """Tests for white balance multipliers."""

    def test_neutral(self):
        """Zero temperature and tint should give unit scales."""
        np.testing.assert_array_equal(color_balance.channel_scales(0, 0), [1.0, 1.0, 1.0])

    def test_warm(self):
        """Positive temperature should lift red and cut blue."""
        r, g, b = color_balance.channel_scales(100, 0)
        assert np.isclose(r, 1.15)
        assert np.isclose(g, 1.05)
        assert np.isclose(b, 0.85)

    def test_magenta_tint(self):
        """Positive tint should cut green."""
        r, g, b = color_balance.channel_scales(0, 100)
        assert np.isclose(r, 1.05)
        assert np.isclose(g, 0.85)
        assert np.isclose(b, 1.05)


class TestColorBalance:
    """Tests for color_balance.apply."""

    def test_identity(self, random_bitmap):
        """All-zero parameters should leave every pixel unchanged."""
        result = color_balance.apply(random_bitmap, ColorBalanceParams())
        np.testing.assert_array_equal(result.pixels, random_bitmap.pixels)

    def test_warm_gray(self, gray_bitmap):
        """Warming a gray image should make red exceed blue."""
        result = color_balance.apply(gray_bitmap, ColorBalanceParams(temperature=40))
        r, g, b = result.pixels[0, 0].astype(int)
        assert r > g > b

    def test_desaturate_to_luminance(self, random_bitmap):
        """Saturation -100 should collapse every pixel to its luminance."""
        result = color_balance.apply(random_bitmap, ColorBalanceParams(saturation=-100))
        px = result.pixels.astype(int)
        assert np.all(np.abs(px[..., 0] - px[..., 1]) <= 1)
        assert np.all(np.abs(px[..., 1] - px[..., 2]) <= 1)
        expected = luminance(random_bitmap.rgb())
        assert np.all(np.abs(px[..., 1] - expected) <= 0.5 + 1e-9)

    def test_saturation_golden_pixel(self):
        """Doubling chroma around luminance on a known pixel."""
        bitmap = Bitmap.filled(1, 1, (200, 100, 50))
        result = color_balance.apply(bitmap, ColorBalanceParams(saturation=100))
        np.testing.assert_array_equal(result.pixels[0, 0], [255, 82, 0])

    def test_vibrance_favors_muted_colors(self):
        """Vibrance should move a muted pixel further than a saturated one."""
        pixels = np.array([[[140, 120, 110], [250, 30, 20]]], dtype=np.uint8)
        bitmap = Bitmap(pixels)
        result = color_balance.apply(bitmap, ColorBalanceParams(vibrance=100))

        def chroma(px):
            px = px.astype(float)
            return px.max(axis=-1) - px.min(axis=-1)

        gain = chroma(result.pixels[0]) / chroma(pixels[0])
        assert gain[0] > gain[1]

    def test_black_pixel_no_division(self):
        """Black pixels have zero saturation and stay black."""
        bitmap = Bitmap.filled(2, 2, (0, 0, 0))
        result = color_balance.apply(bitmap, ColorBalanceParams(vibrance=100, saturation=100))
        assert result.pixels.max() == 0

    def test_out_of_range_params_clamped(self, random_bitmap):
        """Parameters beyond +/-100 should behave like +/-100."""
        a = color_balance.apply(random_bitmap, ColorBalanceParams(250, -300, 999, -999))
        b = color_balance.apply(random_bitmap, ColorBalanceParams(100, -100, 100, -100))
        np.testing.assert_array_equal(a.pixels, b.pixels)

    def test_extremes_stay_in_range(self, edge_bitmap):
        """Extreme parameter combinations should give valid bytes."""
        for temp, tint, vib, sat in itertools.product((-100, 0, 100), repeat=4):
            result = color_balance.apply(edge_bitmap, ColorBalanceParams(temp, tint, vib, sat))
            assert result.pixels.dtype == np.uint8
            assert result.pixels.shape == edge_bitmap.pixels.shape
