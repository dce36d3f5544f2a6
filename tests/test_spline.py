"""Tests for the natural cubic spline and the tone curve LUT."""

from __future__ import annotations

import numpy as np
import pytest

from imagecli.config import CURVE_XS
from imagecli.core.spline import (
    ControlPoints,
    build_lut,
    curve_points,
    evaluate_spline,
    spline_coefficients,
)
from imagecli.core.types import CurveAdjustments


class TestControlPoints:
    """Tests for control point construction."""

    def test_identity_ordinates(self):
        """Zero adjustments should give the identity ordinates."""
        points = curve_points(CurveAdjustments())
        assert points.xs == CURVE_XS
        assert points.ys == CURVE_XS

    def test_ordinates_clamped(self):
        """Adjusted ordinates should stay in [0, 100]."""
        points = curve_points(CurveAdjustments(darks=-15, mids=80, highlights=15))
        assert points.ys == (0.0, 25.0, 100.0, 75.0, 100.0)

    def test_adjustments_shift_ordinates(self):
        """Each adjustment should offset its own control point."""
        points = curve_points(CurveAdjustments(darks=20, middarks=-5, mids=3, midhighlights=7, highlights=-10))
        assert points.ys == (20.0, 20.0, 53.0, 82.0, 90.0)


class TestSplineCoefficients:
    """Tests for the tridiagonal solve."""

    def test_segment_count(self):
        """Five knots should give four segments."""
        coeffs = spline_coefficients(CURVE_XS, (0.0, 30.0, 45.0, 80.0, 100.0))
        assert len(coeffs) == 4

    def test_linear_data_is_linear(self):
        """Collinear knots should give zero curvature everywhere."""
        coeffs = spline_coefficients(CURVE_XS, CURVE_XS)
        for a, b, c, d in coeffs:
            assert np.isclose(b, 1.0)
            assert np.isclose(c, 0.0)
            assert np.isclose(d, 0.0)

    def test_natural_boundary(self):
        """Second derivative should vanish at both ends."""
        xs = CURVE_XS
        coeffs = spline_coefficients(xs, (0.0, 10.0, 60.0, 70.0, 100.0))
        a, b, c, d = coeffs[0]
        assert np.isclose(c, 0.0)
        a, b, c, d = coeffs[-1]
        h = xs[-1] - xs[-2]
        assert np.isclose(2.0 * c + 6.0 * d * h, 0.0, atol=1e-12)

    def test_continuity(self):
        """Value, slope and curvature should match at interior knots."""
        xs = CURVE_XS
        coeffs = spline_coefficients(xs, (5.0, 40.0, 35.0, 90.0, 60.0))
        for i in range(len(coeffs) - 1):
            a, b, c, d = coeffs[i]
            h = xs[i + 1] - xs[i]
            a2, b2, c2, _ = coeffs[i + 1]
            assert np.isclose(a + b * h + c * h ** 2 + d * h ** 3, a2)
            assert np.isclose(b + 2 * c * h + 3 * d * h ** 2, b2)
            assert np.isclose(2 * c + 6 * d * h, 2 * c2)


class TestEvaluateSpline:
    """Tests for spline evaluation."""

    def test_passes_through_knots(self):
        """The spline should interpolate every control point."""
        points = ControlPoints(CURVE_XS, (10.0, 20.0, 70.0, 65.0, 100.0))
        for x, y in zip(points.xs, points.ys):
            assert np.isclose(evaluate_spline(points, x), y)

    def test_array_matches_scalar(self):
        """Vectorized evaluation should agree with scalar calls."""
        points = ControlPoints(CURVE_XS, (0.0, 30.0, 45.0, 80.0, 100.0))
        x = np.linspace(0.0, 100.0, 37)
        values = evaluate_spline(points, x)
        for xi, vi in zip(x, values):
            assert evaluate_spline(points, float(xi)) == pytest.approx(vi)

    def test_extrapolates_with_end_segments(self):
        """Inputs outside [0, 100] should use the first/last segment."""
        points = ControlPoints(CURVE_XS, CURVE_XS)
        assert np.isclose(evaluate_spline(points, -10.0), -10.0)
        assert np.isclose(evaluate_spline(points, 110.0), 110.0)


class TestBuildLut:
    """Tests for LUT sampling."""

    def test_identity_lut(self):
        """Zero adjustments should give LUT[i] == i exactly."""
        lut = build_lut(curve_points(CurveAdjustments()))
        assert lut.dtype == np.uint8
        assert lut.shape == (256,)
        np.testing.assert_array_equal(lut, np.arange(256))

    def test_monotonic_ordinates_give_monotonic_lut(self):
        """Non-decreasing ordinates should give a non-decreasing LUT."""
        lut = build_lut(curve_points(CurveAdjustments(darks=-30, middarks=-15, mids=5, midhighlights=15, highlights=30)))
        assert np.all(np.diff(lut.astype(int)) >= 0)

    def test_s_curve_spline_sample(self):
        """darks=-15, highlights=15 clamps back to identity: 100 -> 100."""
        points = curve_points(CurveAdjustments(darks=-15, highlights=15))
        lut = build_lut(points)
        expected = evaluate_spline(points, 100 / 255 * 100) / 100 * 255
        assert lut[100] == int(np.floor(expected + 0.5))
        assert lut[100] == 100

    def test_non_monotonic_lut_allowed(self):
        """Inverted curves should produce a decreasing LUT."""
        points = ControlPoints(CURVE_XS, (100.0, 75.0, 50.0, 25.0, 0.0))
        lut = build_lut(points)
        assert lut[0] == 255
        assert lut[255] == 0
        assert np.all(np.diff(lut.astype(int)) <= 0)

    def test_overshoot_is_clamped(self):
        """Spline overshoot beyond [0, 100] should clamp to [0, 255]."""
        points = ControlPoints(CURVE_XS, (0.0, 100.0, 0.0, 100.0, 0.0))
        lut = build_lut(points)
        assert lut.min() == 0
        assert lut.max() == 255
