"""Luminance and hue helpers shared by the color transforms."""

from __future__ import annotations

import numpy as np

from imagecli.config import LUMA_B, LUMA_G, LUMA_R


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Rec. 709 luminance of an (..., 3) array, in the input's scale."""
    return LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]


# Per sector, which of (0, x, 1) lands in R, G and B.
_HUE_SECTORS = (
    (2, 1, 0),  # red -> yellow
    (1, 2, 0),  # yellow -> green
    (0, 2, 1),  # green -> cyan
    (0, 1, 2),  # cyan -> blue
    (1, 0, 2),  # blue -> magenta
    (2, 0, 1),  # magenta -> red
)


def hue_to_rgb(hue: float) -> tuple[float, float, float]:
    """Fully saturated RGB (0-1 per channel) for a hue angle in degrees."""
    h = (hue % 360.0) / 60.0
    x = 1.0 - abs((h % 2.0) - 1.0)
    sector = min(int(h), 5)
    values = (0.0, x, 1.0)
    r, g, b = (values[k] for k in _HUE_SECTORS[sector])
    return r, g, b


def tint_direction(hue: float) -> np.ndarray:
    """Signed (-1..1) per-channel tint direction for a hue angle."""
    return (np.asarray(hue_to_rgb(hue), dtype=np.float64) - 0.5) * 2.0
