from metro_lines.parser.model import (
    ArcRef,
    Connection,
    EndpointTag,
    LineTopology,
    Segment,
)
from metro_lines.parser.schema import Topology
from metro_lines.parser.topojson import (
    TopologyError,
    extract_connections,
    extract_segments,
    ingest_topology,
    load_topology,
    parse_topology,
    validate_topology,
)

__all__ = [
    "ArcRef",
    "Connection",
    "EndpointTag",
    "LineTopology",
    "Segment",
    "Topology",
    "TopologyError",
    "extract_connections",
    "extract_segments",
    "ingest_topology",
    "load_topology",
    "parse_topology",
    "validate_topology",
]
