"""Three-way color grade: tint and brighten shadows, midtones, highlights."""

from __future__ import annotations

import logging

import numpy as np

from imagecli.color.spaces import luminance, tint_direction
from imagecli.config import GRADE_LUM_SCALE, GRADE_TINT_SCALE
from imagecli.core.blend import smoothblend
from imagecli.core.types import Bitmap, ColorGradeParams

logger = logging.getLogger(__name__)


def band_weights(lum: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Shadow, midtone and highlight weights for luminance in [0, 1].

    The shadow and highlight ramps cover [0, 0.5] and [0.5, 1], so the
    midtone complement stays in [0, 1] and peaks at 0.5.
    """
    shadows = 1.0 - smoothblend(0.0, 0.5, lum)
    highlights = smoothblend(0.5, 1.0, lum)
    midtones = 1.0 - shadows - highlights
    return shadows, midtones, highlights


def apply(bitmap: Bitmap, params: ColorGradeParams) -> Bitmap:
    """Add per-band hue tints and apply a compounded luminance shift.

    For each pixel::

        offset = sum(direction_band * w_band * sat_band * 80)
        factor = prod(1 + lum_band * w_band * 0.5)
        out    = (channel + offset) * factor

    Args:
        bitmap: Input image; left untouched.
        params: Band parameters; hue reduced modulo 360, saturation
            clamped to [0, 100], luminance to [-100, 100].

    Returns:
        New bitmap of the same dimensions.
    """
    params = params.clamped()
    bands = (params.shadows, params.midtones, params.highlights)
    logger.debug("Color grade %s", params)

    rgb = bitmap.rgb()
    weights = band_weights(luminance(rgb) / 255.0)

    offset = np.zeros_like(rgb)
    lum_factor = np.ones(rgb.shape[:2], dtype=np.float64)
    for band, weight in zip(bands, weights):
        direction = tint_direction(band.hue)
        sat = band.saturation / 100.0
        shift = band.luminance / 100.0
        offset += direction * weight[..., np.newaxis] * sat * GRADE_TINT_SCALE
        lum_factor *= 1.0 + shift * weight * GRADE_LUM_SCALE

    return bitmap.with_rgb((rgb + offset) * lum_factor[..., np.newaxis])
