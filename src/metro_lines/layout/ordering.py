"""Deterministic stacking order for colors sharing a segment.

Colors are ranked by perceptual luminance so the same set of routes
always stacks the same way. The order is flipped for segments whose
start lies farther from the coordinate origin than their end, which
keeps offset slot i on the same physical side of the arc no matter
which end the topology lists first.
"""

from __future__ import annotations

__all__ = ["color_luminance", "is_reversed", "order_colors"]

from collections.abc import Sequence

from metro_lines.layout.constants import LUMINANCE_GAMMA, LUMINANCE_WEIGHTS
from metro_lines.layout.geodesy import haversine_km
from metro_lines.parser.model import Coord

ORIGIN: Coord = (0.0, 0.0)


def color_luminance(color: str) -> float:
    """Perceptual luminance of a ``#RRGGBB`` color, in [0, 1]."""
    hex_digits = color.lstrip("#")
    channels = [int(hex_digits[i:i + 2], 16) / 255 for i in (0, 2, 4)]
    return sum(w * c**LUMINANCE_GAMMA for w, c in zip(LUMINANCE_WEIGHTS, channels))


def is_reversed(geometry: Sequence[Coord]) -> bool:
    """True when the line starts farther from the origin than it ends."""
    return haversine_km(ORIGIN, geometry[0]) > haversine_km(ORIGIN, geometry[-1])


def order_colors(colors: Sequence[str], geometry: Sequence[Coord]) -> list[str]:
    """Return colors in stacking order for a segment, without mutating input."""
    ordered = sorted(colors, key=color_luminance)
    if is_reversed(geometry):
        ordered.reverse()
    return ordered
