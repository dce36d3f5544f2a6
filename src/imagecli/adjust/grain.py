"""Procedural film grain composited as a density modulation.

The grain is a blend of smooth value noise (dye clouds) and per-pixel
hash noise (silver halide grit), masked so it fades out in deep shadows
and bright highlights. In color mode each channel samples its own seed
at a small sub-pixel offset, like misregistered emulsion layers. In
monochrome mode one field is shared by all channels.

The output is a pure function of the input bitmap and parameters.
"""

from __future__ import annotations

import logging

import numpy as np

from imagecli.color.spaces import luminance
from imagecli.config import (
    GRAIN_CHANNEL_OFFSETS,
    GRAIN_CHANNEL_SEEDS,
    GRAIN_HIGHLIGHT_EDGES,
    GRAIN_MAX_CELL_GROWTH,
    GRAIN_MONO_OFFSET,
    GRAIN_MONO_SEED,
    GRAIN_SHADOW_EDGES,
)
from imagecli.core.blend import smoothblend
from imagecli.core.noise import hash_noise, value_noise
from imagecli.core.types import Bitmap, GrainParams

logger = logging.getLogger(__name__)


def luminance_mask(lum: np.ndarray) -> np.ndarray:
    """Grain visibility for luminance in [0, 1]: 0 at black/white, 1 in midtones."""
    return smoothblend(*GRAIN_SHADOW_EDGES, lum) * (1.0 - smoothblend(*GRAIN_HIGHLIGHT_EDGES, lum))


def _grain_field(
    xx: np.ndarray,
    yy: np.ndarray,
    seed: int,
    offset: tuple[float, float],
    cell_size: float,
    roughness: float,
) -> np.ndarray:
    """Unmasked grain in [-1, 1] for one seed and sampling offset.

    The smooth component is sampled at the offset position; the fine
    component always uses the integer pixel coordinates.
    """
    ox, oy = offset
    smooth = value_noise(xx + ox, yy + oy, cell_size, seed)
    fine = hash_noise(xx, yy, seed)
    return smooth + roughness * (fine - smooth)


def grain_noise(bitmap: Bitmap, params: GrainParams) -> np.ndarray:
    """Signed per-channel density noise for every pixel.

    Args:
        bitmap: Source image; only its luminance is read.
        params: Grain parameters, clamped to [0, 100].

    Returns:
        (H, W, 3) float64 array, ``grain * strength * mask``. In
        monochrome mode the three planes are identical.
    """
    params = params.clamped()
    strength = params.amount / 100.0
    cell_size = 1.0 + (params.size / 100.0) * GRAIN_MAX_CELL_GROWTH
    roughness = params.roughness / 100.0

    rgb = bitmap.rgb()
    mask = luminance_mask(luminance(rgb) / 255.0)

    yy, xx = np.mgrid[0:bitmap.height, 0:bitmap.width].astype(np.int64)

    if params.monochrome:
        grain = _grain_field(xx, yy, GRAIN_MONO_SEED, GRAIN_MONO_OFFSET, cell_size, roughness)
        planes = [grain * strength * mask] * 3
    else:
        planes = [
            _grain_field(xx, yy, seed, offset, cell_size, roughness) * strength * mask
            for seed, offset in zip(GRAIN_CHANNEL_SEEDS, GRAIN_CHANNEL_OFFSETS)
        ]
    return np.stack(planes, axis=-1)


def apply(bitmap: Bitmap, params: GrainParams) -> Bitmap:
    """Composite film grain onto the bitmap.

    Positive noise darkens toward black (``v - v*n``); zero or negative
    noise lightens toward white (``v + (255 - v)*|n|``).

    Args:
        bitmap: Input image; left untouched.
        params: Grain parameters.

    Returns:
        New bitmap of the same dimensions.
    """
    logger.debug("Film grain %s", params.clamped())
    if bitmap.is_empty:
        return bitmap.copy()

    noise = grain_noise(bitmap, params)
    v = bitmap.rgb()
    out = np.where(noise > 0.0, v - v * noise, v + (255.0 - v) * np.abs(noise))
    return bitmap.with_rgb(out)
