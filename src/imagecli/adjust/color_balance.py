"""White balance (temperature/tint) with vibrance and saturation."""

from __future__ import annotations

import logging

import numpy as np

from imagecli.color.spaces import luminance
from imagecli.config import (
    TEMPERATURE_MAJOR,
    TEMPERATURE_MINOR,
    TINT_MAJOR,
    TINT_MINOR,
)
from imagecli.core.types import Bitmap, ColorBalanceParams

logger = logging.getLogger(__name__)


def channel_scales(temperature: float, tint: float) -> np.ndarray:
    """Per-channel multipliers for temperature and tint in [-100, 100].

    Warm temperatures lift red and cut blue; positive tint moves toward
    magenta by cutting green.
    """
    r_scale = 1.0 + (temperature * TEMPERATURE_MAJOR + tint * TINT_MINOR) / 100.0
    g_scale = 1.0 + (temperature * TEMPERATURE_MINOR - tint * TINT_MAJOR) / 100.0
    b_scale = 1.0 - (temperature * TEMPERATURE_MAJOR - tint * TINT_MINOR) / 100.0
    return np.array([r_scale, g_scale, b_scale], dtype=np.float64)


def apply(bitmap: Bitmap, params: ColorBalanceParams) -> Bitmap:
    """Apply white balance, then a luminance-pivoted chroma scale.

    Saturation scales chroma uniformly. Vibrance is weighted by
    (1 - s), where s = (max - min) / max of the balanced pixel, so muted
    colors move more than saturated ones.

    Args:
        bitmap: Input image; left untouched.
        params: Balance parameters, clamped to [-100, 100].

    Returns:
        New bitmap of the same dimensions.
    """
    params = params.clamped()
    vibrance = params.vibrance / 100.0
    saturation = params.saturation / 100.0
    scales = channel_scales(params.temperature, params.tint)
    logger.debug("Color balance %s, channel scales %s", params, scales)

    rgb = np.clip(bitmap.rgb() * scales, 0.0, 255.0)
    lum = luminance(rgb)[..., np.newaxis]

    max_ch = rgb.max(axis=-1)
    min_ch = rgb.min(axis=-1)
    pixel_sat = np.divide(
        max_ch - min_ch, max_ch,
        out=np.zeros_like(max_ch), where=max_ch > 0.0,
    )

    factor = (1.0 + saturation) * (1.0 + vibrance * (1.0 - pixel_sat))
    return bitmap.with_rgb(lum + factor[..., np.newaxis] * (rgb - lum))
