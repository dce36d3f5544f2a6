"""Lightroom-style vignette with adjustable roundness and feather."""

from __future__ import annotations

import logging

import numpy as np

from imagecli.config import VIGNETTE_MAX_FEATHER, VIGNETTE_MAX_RADIUS
from imagecli.core.blend import smoothblend
from imagecli.core.types import Bitmap, VignetteParams

logger = logging.getLogger(__name__)


def vignette_strength(width: int, height: int, params: VignetteParams) -> np.ndarray:
    """Per-pixel vignette strength in [0, 1].

    Coordinates are centered and scaled so the longer side spans [-0.5, 0.5]
    and the shorter side proportionally less, keeping the falloff shape
    independent of the aspect ratio. The distance blends Chebyshev
    (roundness -100) into Euclidean (roundness 100).

    Args:
        width: Image width in pixels (> 0).
        height: Image height in pixels (> 0).
        params: Vignette parameters.

    Returns:
        (height, width) float64 array.
    """
    params = params.clamped()
    w = float(width)
    h = float(height)
    longest = max(w, h)

    t = (params.roundness + 100.0) / 200.0
    inner = params.midpoint / 100.0 * VIGNETTE_MAX_RADIUS
    outer = inner + params.feather / 100.0 * VIGNETTE_MAX_FEATHER

    uv_x = (np.arange(width, dtype=np.float64) / w - 0.5) * (w / longest)
    uv_y = (np.arange(height, dtype=np.float64) / h - 0.5) * (h / longest)
    ux, uy = np.meshgrid(uv_x, uv_y)

    circle_dist = np.sqrt(ux * ux + uy * uy)
    rect_dist = np.maximum(np.abs(ux), np.abs(uy))
    dist = rect_dist + t * (circle_dist - rect_dist)
    return smoothblend(inner, outer, dist)


def apply(bitmap: Bitmap, params: VignetteParams) -> Bitmap:
    """Darken (amount < 0) or lighten (amount >= 0) toward the edges.

    Args:
        bitmap: Input image; left untouched.
        params: Vignette parameters.

    Returns:
        New bitmap of the same dimensions.
    """
    params = params.clamped()
    logger.debug("Vignette %s", params)
    if bitmap.is_empty:
        return bitmap.copy()

    amt = params.amount / 100.0
    strength = vignette_strength(bitmap.width, bitmap.height, params)[..., np.newaxis]
    v = bitmap.rgb()
    if amt < 0.0:
        out = v * (1.0 - strength * abs(amt))
    else:
        out = v + (255.0 - v) * strength * amt
    return bitmap.with_rgb(out)
