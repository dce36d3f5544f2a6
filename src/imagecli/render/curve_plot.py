"""Debug rendering of the tone curve as a 256x256 plot."""

from __future__ import annotations

import numpy as np

from imagecli.config import (
    PLOT_BACKGROUND,
    PLOT_CURVE,
    PLOT_DIAGONAL,
    PLOT_GRID,
    PLOT_POINT,
    PLOT_POINT_RADIUS,
    PLOT_SIZE,
)
from imagecli.core.spline import ControlPoints, evaluate_spline
from imagecli.core.types import Bitmap


def _round(value):
    return np.floor(np.asarray(value, dtype=np.float64) + 0.5).astype(np.int64)


def render_curve_plot(points: ControlPoints) -> Bitmap:
    """Draw grid, identity diagonal, spline curve and control points.

    Input runs left to right and output bottom to top, both 0-100.
    The curve is clamped to the plot and drawn 2 px thick.
    """
    size = PLOT_SIZE
    last = size - 1
    plot = Bitmap.filled(size, size, PLOT_BACKGROUND)
    px = plot.pixels

    for pct in (0.25, 0.5, 0.75):
        p = int(pct * size)
        px[:, p] = PLOT_GRID
        px[p, :] = PLOT_GRID

    cols = np.arange(size)
    px[last - cols, cols] = PLOT_DIAGONAL

    inputs = cols / last * 100.0
    outputs = np.clip(evaluate_spline(points, inputs), 0.0, 100.0)
    rows = _round((1.0 - outputs / 100.0) * last)
    for dy in (0, 1):
        for dx in (0, 1):
            px[np.minimum(rows + dy, last), np.minimum(cols + dx, last)] = PLOT_CURVE

    r = PLOT_POINT_RADIUS
    offsets = [(dx, dy) for dy in range(-r, r + 1) for dx in range(-r, r + 1) if dx * dx + dy * dy <= r * r]
    for x, y in zip(points.xs, points.ys):
        cx = int(_round(x / 100.0 * last))
        cy = int(_round((1.0 - y / 100.0) * last))
        for dx, dy in offsets:
            px[min(max(cy + dy, 0), last), min(max(cx + dx, 0), last)] = PLOT_POINT

    return plot
