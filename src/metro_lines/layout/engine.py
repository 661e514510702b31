"""Render pipeline: viewport culling, offset lines and stitching.

Runs synchronously against an ingested LineTopology. Every call builds
a fresh endpoint registry and set of rendered lines; nothing carries
over between calls.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from shapely import LineString, Polygon

from metro_lines.layout.offsets import (
    EndpointRegistry,
    RenderedLines,
    build_offset_lines,
)
from metro_lines.layout.spacing import clamp_spacing
from metro_lines.layout.stitching import stitch_connections
from metro_lines.parser.model import Coord, LineTopology, Segment

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Output of one render call plus counters for diagnostics."""

    lines: RenderedLines
    registry: EndpointRegistry
    spacing: float
    rendered_segments: int = 0
    skipped_segments: int = 0
    dropped_connections: int = 0
    elapsed_ms: float = 0.0


def viewport_polygon(viewbox: Sequence[Coord]) -> Polygon:
    """Build the viewport polygon from a closed ring of (lon, lat) pairs."""
    return Polygon(viewbox)


def bbox_ring(bbox: tuple[float, float, float, float]) -> list[Coord]:
    """Closed counter-clockwise ring around (min_lon, min_lat, max_lon, max_lat)."""
    min_x, min_y, max_x, max_y = bbox
    return [
        (min_x, min_y),
        (max_x, min_y),
        (max_x, max_y),
        (min_x, max_y),
        (min_x, min_y),
    ]


def filter_segments(
    segments: dict[int, Segment],
    viewbox: Sequence[Coord],
) -> Iterator[tuple[Segment, bool]]:
    """Yield (segment, visible) for every segment, in ingestion order."""
    viewport = viewport_polygon(viewbox)
    for segment in segments.values():
        yield segment, viewport.intersects(LineString(segment.geometry))


def render_lines(
    topology: LineTopology,
    requested_spacing: float,
    viewbox: Sequence[Coord],
) -> RenderResult:
    """Draw offset lines for every visible segment and stitch connections."""
    started = time.perf_counter()
    spacing = clamp_spacing(requested_spacing)

    result = RenderResult(
        lines=RenderedLines(),
        registry=EndpointRegistry(),
        spacing=spacing,
    )

    for segment, visible in filter_segments(topology.segments, viewbox):
        if not visible:
            result.skipped_segments += 1
            continue
        result.rendered_segments += 1
        build_offset_lines(segment, spacing, result.registry, result.lines)

    result.dropped_connections = stitch_connections(
        topology.connections, result.registry, result.lines, spacing
    )

    result.elapsed_ms = (time.perf_counter() - started) * 1000
    logger.debug(
        "Rendered in %.0fms: %d segments drawn, %d skipped, spacing=%g, "
        "%d connections dropped",
        result.elapsed_ms,
        result.rendered_segments,
        result.skipped_segments,
        spacing,
        result.dropped_connections,
    )
    return result
