"""Natural cubic spline through the tone curve control points.

The curve lives on a 0-100 scale on both axes. Five control points sit at
fixed abscissas (0, 25, 50, 75, 100); their ordinates are the identity
value plus a signed user adjustment, clamped to [0, 100]. Ordinates need
not be monotonic.

Each segment i is stored as (a, b, c, d) with
    S_i(x) = a + b*dx + c*dx^2 + d*dx^3,   dx = x - xs[i]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from imagecli.config import CURVE_SCALE, CURVE_XS, LUT_SIZE
from imagecli.core.types import CurveAdjustments, quantize

logger = logging.getLogger(__name__)

Segment = tuple[float, float, float, float]


@dataclass(frozen=True)
class ControlPoints:
    """Spline knots on the 0-100 scale. ``xs`` must be strictly increasing."""
    xs: tuple[float, ...]
    ys: tuple[float, ...]

    @classmethod
    def from_adjustments(cls, adjustments: CurveAdjustments) -> "ControlPoints":
        """Identity ordinates shifted by the adjustments and clamped to [0, 100]."""
        ys = tuple(
            float(min(max(base + offset, 0.0), CURVE_SCALE))
            for base, offset in zip(CURVE_XS, adjustments.as_tuple())
        )
        return cls(xs=CURVE_XS, ys=ys)


def curve_points(adjustments: CurveAdjustments) -> ControlPoints:
    """Build the five tone curve control points from user adjustments."""
    return ControlPoints.from_adjustments(adjustments)


def spline_coefficients(xs, ys) -> list[Segment]:
    """Solve for natural cubic spline coefficients.

    Second derivatives are zero at both ends. The tridiagonal system for
    the quadratic coefficients is solved with a forward sweep and back
    substitution; b and d follow from the continuity recurrences.

    Args:
        xs: Strictly increasing abscissas, length n + 1.
        ys: Ordinates, same length.

    Returns:
        n segments as (a, b, c, d) tuples.
    """
    n = len(xs) - 1
    h = [xs[i + 1] - xs[i] for i in range(n)]

    alpha = [0.0] * (n + 1)
    for i in range(1, n):
        alpha[i] = (3.0 / h[i]) * (ys[i + 1] - ys[i]) - (3.0 / h[i - 1]) * (ys[i] - ys[i - 1])

    l = [1.0] * (n + 1)
    mu = [0.0] * (n + 1)
    z = [0.0] * (n + 1)
    for i in range(1, n):
        l[i] = 2.0 * (xs[i + 1] - xs[i - 1]) - h[i - 1] * mu[i - 1]
        mu[i] = h[i] / l[i]
        z[i] = (alpha[i] - h[i - 1] * z[i - 1]) / l[i]

    c = [0.0] * (n + 1)
    b = [0.0] * n
    d = [0.0] * n
    for j in range(n - 1, -1, -1):
        c[j] = z[j] - mu[j] * c[j + 1]
        b[j] = (ys[j + 1] - ys[j]) / h[j] - h[j] * (c[j + 1] + 2.0 * c[j]) / 3.0
        d[j] = (c[j + 1] - c[j]) / (3.0 * h[j])

    return [(float(ys[i]), b[i], c[i], d[i]) for i in range(n)]


def _evaluate(xs, coeffs: list[Segment], x: np.ndarray) -> np.ndarray:
    """Vectorized segment lookup and cubic evaluation.

    Inputs at or below xs[0] use the first segment, at or above xs[-1]
    the last one; in between, the segment whose left knot is the largest
    knot <= x.
    """
    knots = np.asarray(xs, dtype=np.float64)
    table = np.asarray(coeffs, dtype=np.float64)
    # Counting interior knots <= x gives the segment index directly.
    idx = np.searchsorted(knots[1:-1], x, side="right")
    dx = x - knots[idx]
    a, b, c, d = table[idx, 0], table[idx, 1], table[idx, 2], table[idx, 3]
    return a + b * dx + c * dx * dx + d * dx * dx * dx


def evaluate_spline(points: ControlPoints, x):
    """Evaluate the spline through ``points`` at ``x`` (0-100 scale).

    Args:
        points: Control points.
        x: Scalar or array of inputs.

    Returns:
        Float for scalar input, float64 array otherwise. Values are not
        clamped and may leave [0, 100] for non-monotonic curves.
    """
    coeffs = spline_coefficients(points.xs, points.ys)
    x = np.asarray(x, dtype=np.float64)
    result = _evaluate(points.xs, coeffs, x)
    if result.ndim == 0:
        return float(result)
    return result


def build_lut(points: ControlPoints) -> np.ndarray:
    """Sample the spline into a 256-entry byte lookup table.

    Entry i is the spline at i/255*100, rescaled to 0-255, rounded half
    away from zero and clamped.

    Returns:
        (256,) uint8 array.
    """
    coeffs = spline_coefficients(points.xs, points.ys)
    x = np.arange(LUT_SIZE, dtype=np.float64) / 255.0 * CURVE_SCALE
    y = _evaluate(points.xs, coeffs, x)
    lut = quantize(y / CURVE_SCALE * 255.0)
    logger.debug("Built curve LUT from ordinates %s", points.ys)
    return lut
