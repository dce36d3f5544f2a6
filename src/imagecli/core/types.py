"""Core data types, parameter records, and pixel helpers for imagecli.

CRITICAL CONVENTION:
    Bitmaps hold a (H, W, C) uint8 array, row-major, C in {1, 3, 4}.
    Transforms read the RGB planes as float64, work in the 0-255 range,
    and quantize back through ``quantize`` exactly once per transform.
    An alpha plane (C == 4) is carried through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

import numpy as np

from imagecli.errors import ImageFormatError


# ---------------------------------------------------------------------------
# Pixel helpers
# ---------------------------------------------------------------------------

def quantize(values: np.ndarray) -> np.ndarray:
    """Round half away from zero, clamp to [0, 255] and cast to uint8.

    ``np.round`` rounds half to even, which drifts by one level on exact
    .5 values, so the rounding is done from the floor and its remainder.
    Negative inputs clamp to 0 regardless of the rounding direction.
    """
    values = np.asarray(values, dtype=np.float64)
    floor = np.floor(values)
    rounded = floor + ((values - floor) >= 0.5)
    return np.clip(rounded, 0.0, 255.0).astype(np.uint8)


def _clamp(value: float, lo: float, hi: float) -> float:
    return float(min(max(value, lo), hi))


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ChannelColor(str, Enum):
    """Single RGB channel selector."""
    RED = "red"
    GREEN = "green"
    BLUE = "blue"

    @property
    def index(self) -> int:
        return ("red", "green", "blue").index(self.value)


# ---------------------------------------------------------------------------
# Bitmap
# ---------------------------------------------------------------------------

@dataclass
class Bitmap:
    """Decoded 8-bit image owned by the caller of a transform."""
    pixels: np.ndarray  # (H, W, C) uint8

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] not in (1, 3, 4):
            raise ImageFormatError(
                f"Bitmap must be (H, W, 1|3|4), got shape {self.pixels.shape}"
            )
        if self.pixels.dtype != np.uint8:
            raise ImageFormatError(f"Bitmap must be uint8, got {self.pixels.dtype}")

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def alpha(self) -> Optional[np.ndarray]:
        """(H, W) alpha plane, or None for opaque bitmaps."""
        if self.channels == 4:
            return self.pixels[:, :, 3]
        return None

    def rgb_bytes(self) -> np.ndarray:
        """(H, W, 3) uint8 RGB planes; gray bitmaps expand to three planes."""
        if self.channels == 1:
            return np.repeat(self.pixels, 3, axis=2)
        return self.pixels[:, :, :3]

    def rgb(self) -> np.ndarray:
        """RGB planes as a fresh (H, W, 3) float64 array."""
        return self.rgb_bytes().astype(np.float64)

    def with_rgb(self, rgb: np.ndarray) -> "Bitmap":
        """Build a new bitmap from transformed RGB planes.

        Float input is quantized; uint8 input is copied. The alpha plane
        of this bitmap, if any, is appended unchanged.
        """
        if rgb.dtype != np.uint8:
            rgb = quantize(rgb)
        if self.channels == 4:
            out = np.concatenate([rgb, self.pixels[:, :, 3:4]], axis=2)
        else:
            out = np.array(rgb, dtype=np.uint8, copy=True)
        return Bitmap(np.ascontiguousarray(out))

    def copy(self) -> "Bitmap":
        return Bitmap(self.pixels.copy())

    @classmethod
    def filled(cls, width: int, height: int, color: tuple[int, int, int]) -> "Bitmap":
        """Solid RGB bitmap."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)


# ---------------------------------------------------------------------------
# Parameter records
# ---------------------------------------------------------------------------

@dataclass
class CurveAdjustments:
    """Signed offsets for the five tone curve control points (0-100 scale)."""
    darks: float = 0
    middarks: float = 0
    mids: float = 0
    midhighlights: float = 0
    highlights: float = 0

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.darks, self.middarks, self.mids, self.midhighlights, self.highlights)


@dataclass
class ColorBalanceParams:
    """Temperature, tint, vibrance and saturation, each in [-100, 100]."""
    temperature: float = 0
    tint: float = 0
    vibrance: float = 0
    saturation: float = 0

    def clamped(self) -> "ColorBalanceParams":
        return ColorBalanceParams(
            temperature=_clamp(self.temperature, -100, 100),
            tint=_clamp(self.tint, -100, 100),
            vibrance=_clamp(self.vibrance, -100, 100),
            saturation=_clamp(self.saturation, -100, 100),
        )


@dataclass
class GradeBand:
    """Hue (degrees), saturation [0, 100] and luminance shift [-100, 100]."""
    hue: float = 0
    saturation: float = 0
    luminance: float = 0

    def clamped(self) -> "GradeBand":
        return GradeBand(
            hue=float(self.hue) % 360.0,
            saturation=_clamp(self.saturation, 0, 100),
            luminance=_clamp(self.luminance, -100, 100),
        )


@dataclass
class ColorGradeParams:
    """Three-band color grade."""
    shadows: GradeBand = field(default_factory=GradeBand)
    midtones: GradeBand = field(default_factory=GradeBand)
    highlights: GradeBand = field(default_factory=GradeBand)

    def clamped(self) -> "ColorGradeParams":
        return ColorGradeParams(
            shadows=self.shadows.clamped(),
            midtones=self.midtones.clamped(),
            highlights=self.highlights.clamped(),
        )


@dataclass
class GrainParams:
    """Film grain amount, size and roughness in [0, 100]."""
    amount: float = 30
    size: float = 30
    roughness: float = 50
    monochrome: bool = False

    def clamped(self) -> "GrainParams":
        return replace(
            self,
            amount=_clamp(self.amount, 0, 100),
            size=_clamp(self.size, 0, 100),
            roughness=_clamp(self.roughness, 0, 100),
        )


@dataclass
class VignetteParams:
    """Vignette amount/roundness in [-100, 100], midpoint/feather in [0, 100]."""
    amount: float = -50
    midpoint: float = 50
    roundness: float = 0
    feather: float = 50

    def clamped(self) -> "VignetteParams":
        return VignetteParams(
            amount=_clamp(self.amount, -100, 100),
            midpoint=_clamp(self.midpoint, 0, 100),
            roundness=_clamp(self.roundness, -100, 100),
            feather=_clamp(self.feather, 0, 100),
        )
