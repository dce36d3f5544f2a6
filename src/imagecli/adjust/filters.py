"""Pass-through filters: blur, unsharp mask, grayscale, channel, resize, structure.

These delegate the heavy lifting to scipy.ndimage and Pillow.
"""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image
from scipy.ndimage import gaussian_filter

from imagecli.color.spaces import luminance
from imagecli.config import STRUCTURE_BASELINE, STRUCTURE_MIN_SIGMA, STRUCTURE_SIGMA
from imagecli.core.types import Bitmap, ChannelColor, quantize

logger = logging.getLogger(__name__)


def _gaussian(pixels: np.ndarray, sigma: float) -> np.ndarray:
    """Per-plane Gaussian blur of an (H, W, C) array, as float64."""
    return gaussian_filter(pixels.astype(np.float64), sigma=(sigma, sigma, 0), mode="nearest")


def blur(bitmap: Bitmap, sigma: float) -> Bitmap:
    """Gaussian blur of every channel, alpha included."""
    if sigma <= 0 or bitmap.is_empty:
        return bitmap.copy()
    logger.debug("Gaussian blur, sigma=%.2f", sigma)
    return Bitmap(quantize(_gaussian(bitmap.pixels, sigma)))


def unsharpen(bitmap: Bitmap, sigma: float, threshold: int) -> Bitmap:
    """Unsharp mask.

    Where the original differs from its blur by more than ``threshold``
    levels, the difference is added back; elsewhere pixels are kept.
    """
    if sigma <= 0 or bitmap.is_empty:
        return bitmap.copy()
    logger.debug("Unsharp mask, sigma=%.2f threshold=%d", sigma, threshold)
    original = bitmap.pixels.astype(np.float64)
    diff = original - np.floor(_gaussian(bitmap.pixels, sigma) + 0.5)
    out = np.where(np.abs(diff) > threshold, original + diff, original)
    return Bitmap(quantize(out))


def grayscale(bitmap: Bitmap) -> Bitmap:
    """Single-channel Rec. 709 luma image."""
    gray = quantize(luminance(bitmap.rgb()))
    return Bitmap(gray[..., np.newaxis])


def extract_channel(bitmap: Bitmap, channel: ChannelColor) -> Bitmap:
    """One RGB plane as a single-channel image."""
    plane = bitmap.rgb_bytes()[:, :, channel.index]
    return Bitmap(np.ascontiguousarray(plane[..., np.newaxis]))


def resize(bitmap: Bitmap, output_size: int) -> Bitmap:
    """Lanczos resize so the longest side equals ``output_size``.

    Images whose longest side is already <= ``output_size`` are returned
    unchanged.
    """
    longest = max(bitmap.width, bitmap.height)
    if longest <= output_size:
        return bitmap.copy()

    scale = output_size / longest
    new_w = max(int(np.floor(bitmap.width * scale + 0.5)), 1)
    new_h = max(int(np.floor(bitmap.height * scale + 0.5)), 1)
    logger.debug("Resize %dx%d -> %dx%d", bitmap.width, bitmap.height, new_w, new_h)

    pixels = bitmap.pixels
    if bitmap.channels == 1:
        pixels = pixels[:, :, 0]
    image = Image.fromarray(np.ascontiguousarray(pixels))
    resized = np.asarray(image.resize((new_w, new_h), Image.Resampling.LANCZOS))
    if resized.ndim == 2:
        resized = resized[..., np.newaxis]
    return Bitmap(np.ascontiguousarray(resized, dtype=np.uint8))


def structure(bitmap: Bitmap, amount: float) -> Bitmap:
    """Local contrast boost (negative amounts soften).

    A wide blur, scaled to the image size relative to a 1080 px baseline,
    serves as the local mean; ``out = orig + amount/100 * (orig - blurred)``.
    """
    amount = float(min(max(amount, -100), 100))
    if amount == 0 or bitmap.is_empty:
        return bitmap.copy()

    scale = min(bitmap.width, bitmap.height) / STRUCTURE_BASELINE
    sigma = max(STRUCTURE_SIGMA * scale, STRUCTURE_MIN_SIGMA)
    logger.debug("Structure %.0f, sigma=%.2f", amount, sigma)

    rgb = bitmap.rgb()
    blurred = _gaussian(bitmap.rgb_bytes(), sigma)
    return bitmap.with_rgb(rgb + amount / 100.0 * (rgb - blurred))
