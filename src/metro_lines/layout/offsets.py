"""Per-segment offset lines and the endpoint registry used for stitching.

Every (segment, color) pair gets its own parallel copy of the arc. The
stack of copies is centred on the arc, trimmed away from junctions, and
trimmed twice more so the stitcher has intermediate control points that
taper into each junction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from metro_lines.layout.clipping import clip_line, junction_margin, taper_margin
from metro_lines.layout.constants import (
    SMOOTH_LINES_BELOW,
    SMOOTH_LINES_FACTOR,
    SMOOTH_LINES_ITERATIONS,
)
from metro_lines.layout.geodesy import offset_line
from metro_lines.layout.ordering import order_colors
from metro_lines.layout.smoothing import smooth_path
from metro_lines.parser.model import Coord, EndpointTag, Segment


class EndpointVariant(Enum):
    """Clipping stage an endpoint was recorded at."""

    ACTUAL = "actual"
    BUFFER = "buffer"
    INVASIVE = "invasive"


class EndpointKey(NamedTuple):
    segment_id: int
    color: str
    tag: EndpointTag
    variant: EndpointVariant


@dataclass
class EndpointRegistry:
    """Endpoints of every offset line drawn during one render call."""

    points: dict[EndpointKey, Coord] = field(default_factory=dict)

    def record(
        self,
        segment_id: int,
        color: str,
        line: list[Coord],
        variant: EndpointVariant,
    ) -> None:
        self.points[EndpointKey(segment_id, color, EndpointTag.TOP, variant)] = line[0]
        self.points[EndpointKey(segment_id, color, EndpointTag.BOTTOM, variant)] = line[-1]

    def lookup(
        self,
        segment_id: int,
        color: str,
        tag: EndpointTag,
        variant: EndpointVariant,
    ) -> Coord | None:
        """Return the recorded endpoint, or None if it was never drawn."""
        return self.points.get(EndpointKey(segment_id, color, tag, variant))

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class RenderedLines:
    """Polylines grouped by color, in first-drawn color order."""

    by_color: dict[str, list[list[Coord]]] = field(default_factory=dict)

    def add(self, color: str, line: list[Coord]) -> None:
        self.by_color.setdefault(color, []).append(line)

    def colors(self) -> list[str]:
        return list(self.by_color)

    def __len__(self) -> int:
        return sum(len(lines) for lines in self.by_color.values())


def stack_offset(i: int, total: int, spacing: float) -> float:
    """Sideways offset of slot i in a stack of total lines centred on zero."""
    linespace = spacing * 2
    return i * linespace - ((total - 1) * linespace) / 2


def build_offset_lines(
    segment: Segment,
    spacing: float,
    registry: EndpointRegistry,
    rendered: RenderedLines,
) -> int:
    """Draw one offset line per color of a segment.

    Records the actual, buffer and invasive endpoints of each line in
    registry and appends the drawn line to rendered. Returns the number
    of lines drawn.
    """
    colors = order_colors(segment.colors, segment.geometry)
    total = len(colors)
    should_smooth = spacing < SMOOTH_LINES_BELOW
    margin = taper_margin(spacing)

    clipped = clip_line(segment.geometry, junction_margin(spacing))

    for i, color in enumerate(colors):
        offset = offset_line(clipped, stack_offset(i, total, spacing))
        buffer = clip_line(offset, margin)
        invasive = clip_line(buffer, margin)

        if should_smooth:
            processed = smooth_path(invasive, SMOOTH_LINES_ITERATIONS, SMOOTH_LINES_FACTOR)
        else:
            processed = invasive

        registry.record(segment.id, color, processed, EndpointVariant.ACTUAL)
        registry.record(segment.id, color, offset, EndpointVariant.INVASIVE)
        registry.record(segment.id, color, buffer, EndpointVariant.BUFFER)

        rendered.add(color, processed)

    return total
