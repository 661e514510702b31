"""Ingestion of TopoJSON line exports into segments and connections.

Routes in the export share arcs. Each arc becomes one Segment carrying
the colors of every route that uses it, and each consecutive pair of arc
references within a route becomes a Connection recording which end of
the first arc flows into which end of the second.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from metro_lines.parser.model import ArcRef, Connection, LineTopology, Segment
from metro_lines.parser.schema import Topology

logger = logging.getLogger(__name__)


class TopologyError(ValueError):
    """Raised when a topology payload does not match the expected schema."""


def parse_topology(data: object) -> Topology:
    """Validate a decoded JSON object as a lines topology."""
    if isinstance(data, Topology):
        return data
    try:
        return Topology.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise TopologyError(f"Invalid topology: {problems}") from e


def load_topology(path: Path | str) -> Topology:
    """Read and validate a TopoJSON lines export from disk."""
    text = Path(path).read_text()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TopologyError(f"Invalid JSON in {path}: {e}") from e
    return parse_topology(data)


def extract_connections(topology: Topology) -> list[Connection]:
    """Derive deduplicated arc-to-arc connections from every route."""
    connections: list[Connection] = []
    seen: set[str] = set()

    for route in topology.routes:
        color = route.properties.stroke
        refs = [ArcRef(a) for a in route.arcs]
        for prev, cur in zip(refs, refs[1:]):
            connection = Connection(
                from_id=prev.index,
                from_tag=prev.exit_tag,
                to_id=cur.index,
                to_tag=cur.entry_tag,
                color=color,
            )
            if connection.dedupe_key in seen:
                continue
            seen.add(connection.dedupe_key)
            connections.append(connection)

    return connections


def extract_segments(topology: Topology) -> dict[int, Segment]:
    """Build one Segment per arc with the colors of the routes using it."""
    arc_colors: dict[int, dict[str, None]] = {i: {} for i in range(len(topology.arcs))}
    for route in topology.routes:
        for raw in route.arcs:
            idx = ArcRef(raw).index
            if idx in arc_colors:
                arc_colors[idx].setdefault(route.properties.stroke)

    segments: dict[int, Segment] = {}
    for i, arc in enumerate(topology.arcs):
        segments[i] = Segment(
            id=i,
            geometry=tuple((float(x), float(y)) for x, y in arc),
            colors=tuple(arc_colors[i]),
        )
    return segments


def validate_topology(topology: Topology) -> list[str]:
    """Return well-formedness problems that ingestion tolerates.

    Dangling arc references produce connections whose endpoints can never
    be rendered; they are dropped at stitch time rather than rejected here.
    """
    problems: list[str] = []
    n_arcs = len(topology.arcs)
    for i, route in enumerate(topology.routes):
        name = route.properties.title or f"route {i}"
        if not route.arcs:
            problems.append(f"{name} ({route.properties.stroke}) references no arcs")
        for raw in route.arcs:
            idx = ArcRef(raw).index
            if idx >= n_arcs:
                problems.append(
                    f"{name} ({route.properties.stroke}) references arc {raw} "
                    f"but the topology has {n_arcs} arcs"
                )
    return problems


def ingest_topology(data: object) -> LineTopology:
    """Parse a topology payload into a fresh LineTopology."""
    topology = parse_topology(data)
    for problem in validate_topology(topology):
        logger.warning("Topology: %s", problem)

    result = LineTopology(
        segments=extract_segments(topology),
        connections=extract_connections(topology),
    )
    logger.info(
        "Ingested %d segments, %d connections from %d routes",
        len(result.segments), len(result.connections), len(topology.routes),
    )
    return result
