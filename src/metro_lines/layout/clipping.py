"""Length-relative trimming of line ends."""

from __future__ import annotations

from collections.abc import Sequence

from metro_lines.layout.constants import (
    JUNCTION_MARGIN_FACTOR,
    JUNCTION_MARGIN_MIN,
    MIN_CLIP_VERTICES,
    SPACING_MARGIN_SCALE,
    TAPER_MARGIN_FACTOR,
    TAPER_MARGIN_MIN,
)
from metro_lines.layout.geodesy import line_length, slice_along
from metro_lines.parser.model import Coord


def clip_line(coords: Sequence[Coord], clip_distance: float) -> list[Coord]:
    """Trim clip_distance kilometres off both ends of a line.

    Lines shorter than three clip distances, or with fewer than
    MIN_CLIP_VERTICES vertices, come back unchanged. Otherwise the cut
    never reaches past the first or last third of the line.
    """
    total = line_length(coords)
    third = total / 3
    if third <= clip_distance or len(coords) < MIN_CLIP_VERTICES:
        return list(coords)

    start = min(third, clip_distance)
    end = max(third * 2, total - clip_distance)
    return slice_along(coords, start, end)


def junction_margin(spacing: float) -> float:
    """Margin trimmed from an arc before it is offset."""
    return max(JUNCTION_MARGIN_MIN, spacing * SPACING_MARGIN_SCALE) * JUNCTION_MARGIN_FACTOR


def taper_margin(spacing: float) -> float:
    """Margin used for the buffer and invasive trims of offset lines."""
    return max(TAPER_MARGIN_MIN, spacing * SPACING_MARGIN_SCALE) * TAPER_MARGIN_FACTOR
