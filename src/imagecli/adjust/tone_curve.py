"""Tone curve: a five-point spline LUT applied to each RGB channel."""

from __future__ import annotations

import logging

from imagecli.core.spline import build_lut, curve_points
from imagecli.core.types import Bitmap, CurveAdjustments

logger = logging.getLogger(__name__)


def apply(bitmap: Bitmap, params: CurveAdjustments) -> Bitmap:
    """Map every RGB byte through the curve LUT.

    Args:
        bitmap: Input image; left untouched.
        params: Control point adjustments. Ordinates are clamped to
            [0, 100] when the control points are built.

    Returns:
        New bitmap of the same dimensions.
    """
    points = curve_points(params)
    lut = build_lut(points)
    logger.debug("Tone curve ordinates: %s", points.ys)
    return bitmap.with_rgb(lut[bitmap.rgb_bytes()])
