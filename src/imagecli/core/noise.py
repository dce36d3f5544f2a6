"""Deterministic hash and value noise for film grain.

All arithmetic is unsigned 64-bit with wraparound, so the pattern is
identical across runs and platforms. Negative coordinates are
reinterpreted as their two's complement bit pattern.
"""

from __future__ import annotations

import numpy as np

_PRIME_X = np.uint64(374761393)
_PRIME_Y = np.uint64(668265263)
_PRIME_SEED = np.uint64(1274126177)
_MIX_1 = np.uint64(0x85EBCA6B)
_MIX_2 = np.uint64(0xC2B2AE35)
_LOW_32 = np.uint64(0xFFFFFFFF)
_SHIFT_16 = np.uint64(16)
_SHIFT_13 = np.uint64(13)


def _as_u64(values) -> np.ndarray:
    return np.asarray(values, dtype=np.int64).view(np.uint64)


def hash_noise(x, y, seed: int) -> np.ndarray:
    """Hash integer lattice coordinates to floats in [-1, 1].

    Not cryptographic; only decorrelated.

    Args:
        x: Integer array (or scalar) of column coordinates.
        y: Integer array (or scalar) of row coordinates.
        seed: Non-negative integer seed.

    Returns:
        float64 array broadcast from ``x`` and ``y``.
    """
    ux = _as_u64(x)
    uy = _as_u64(y)
    useed = np.uint64(seed)
    with np.errstate(over="ignore"):
        h = (ux * _PRIME_X) ^ (uy * _PRIME_Y) ^ (useed * _PRIME_SEED)
        h = h * _PRIME_SEED
        h = h ^ (h >> _SHIFT_16)
        h = h * _MIX_1
        h = h ^ (h >> _SHIFT_13)
        h = h * _MIX_2
        h = h ^ (h >> _SHIFT_16)
    return (h & _LOW_32).astype(np.float64) / 2147483647.5 - 1.0


def value_noise(x, y, cell_size: float, seed: int) -> np.ndarray:
    """Smooth value noise: hashed lattice values blended with smoothstep weights.

    Args:
        x: Float array of sample columns (may be fractional or negative).
        y: Float array of sample rows.
        cell_size: Lattice spacing in pixels (> 0).
        seed: Hash seed.

    Returns:
        float64 array in [-1, 1].
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    gx = np.floor(x / cell_size)
    gy = np.floor(y / cell_size)
    fx = x / cell_size - gx
    fy = y / cell_size - gy

    gx = gx.astype(np.int64)
    gy = gy.astype(np.int64)

    c00 = hash_noise(gx, gy, seed)
    c10 = hash_noise(gx + 1, gy, seed)
    c01 = hash_noise(gx, gy + 1, seed)
    c11 = hash_noise(gx + 1, gy + 1, seed)

    sx = fx * fx * (3.0 - 2.0 * fx)
    sy = fy * fy * (3.0 - 2.0 * fy)

    top = c00 + sx * (c10 - c00)
    bot = c01 + sx * (c11 - c01)
    return top + sy * (bot - top)
