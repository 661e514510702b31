"""Conversion of a requested pixel width and zoom into geographic spacing."""

from __future__ import annotations

import math

from metro_lines.layout.constants import (
    MAX_SPACING,
    MIN_LINE_WIDTH,
    MIN_SPACING,
    REFERENCE_ZOOM,
)


def _round_half_up(value: float, ndigits: int) -> float:
    scaled = value * 10 ** ndigits + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 10 ** ndigits


def _zoom_divisor(z: float) -> float:
    try:
        return 2.0 ** (z - REFERENCE_ZOOM)
    except OverflowError:
        return math.inf


def scale_spacing(width: float, zoom: float) -> float:
    """Return the spacing between parallel lines for a width and zoom.

    Wider lines need more separation; each zoom step doubles the pixels
    per kilometre, so the geographic spacing halves. Extreme inputs
    saturate to 0 or infinity instead of raising; clamp_spacing bounds
    the result.
    """
    w = max(MIN_LINE_WIDTH, width)
    z = _round_half_up(zoom, 2)
    numerator = 0.025 * (w * w) - 0.04 * w + 0.1
    divisor = _zoom_divisor(z)
    if divisor == 0:
        return math.inf
    return numerator / divisor


def clamp_spacing(spacing: float) -> float:
    """Bound a spacing to the range the renderer accepts.

    NaN, from infinite width or zoom, maps to the widest spacing.
    """
    if math.isnan(spacing):
        return MAX_SPACING
    return max(MIN_SPACING, min(MAX_SPACING, spacing))
