"""Smoothstep blending shared by the luminance- and distance-weighted transforms."""

from __future__ import annotations

import numpy as np


def smoothblend(edge0: float, edge1: float, x):
    """Cubic Hermite smoothstep of ``x`` between ``edge0`` and ``edge1``.

    Returns 0 below ``edge0``, 1 above ``edge1`` and ``t*t*(3-2t)`` in
    between. Equal edges degrade to a step: 0 below the edge, 1 at or
    above it.

    Args:
        edge0: Lower edge.
        edge1: Upper edge.
        x: Scalar or array.

    Returns:
        Float for scalar input, float64 array otherwise.
    """
    x = np.asarray(x, dtype=np.float64)
    if edge0 == edge1:
        result = np.where(x < edge0, 0.0, 1.0)
    else:
        t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
        result = t * t * (3.0 - 2.0 * t)
    if result.ndim == 0:
        return float(result)
    return result
