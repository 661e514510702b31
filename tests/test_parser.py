"""Tests for topology ingestion."""

import json

import pytest

from metro_lines.parser import (
    ArcRef,
    Connection,
    EndpointTag,
    TopologyError,
    extract_connections,
    extract_segments,
    ingest_topology,
    load_topology,
    parse_topology,
    validate_topology,
)

RED = "#E4002B"
BLUE = "#0033A0"
GREEN = "#00A651"


def test_arc_ref_forward():
    ref = ArcRef(3)
    assert ref.index == 3
    assert not ref.reversed
    assert ref.entry_tag == EndpointTag.TOP
    assert ref.exit_tag == EndpointTag.BOTTOM


def test_arc_ref_reversed():
    """-index-1 encodes arc index traversed backwards."""
    ref = ArcRef(-4)
    assert ref.index == 3
    assert ref.reversed
    assert ref.entry_tag == EndpointTag.BOTTOM
    assert ref.exit_tag == EndpointTag.TOP


def test_arc_ref_minus_one_is_arc_zero():
    assert ArcRef(-1).index == 0


def test_two_arcs_segments(two_arcs):
    segments = extract_segments(parse_topology(two_arcs))
    assert list(segments) == [0, 1]
    assert segments[0].top == (0.0, 0.0)
    assert segments[0].bottom == (1.0, 1.0)
    assert segments[1].colors == ("#FF0000",)


def test_two_arcs_connection(two_arcs):
    connections = extract_connections(parse_topology(two_arcs))
    assert connections == [
        Connection(0, EndpointTag.BOTTOM, 1, EndpointTag.TOP, "#FF0000")
    ]


def test_segment_colors_include_reversed_references(shared_corridor):
    segments = extract_segments(parse_topology(shared_corridor))
    assert segments[0].colors == (RED, BLUE)
    assert segments[1].colors == (RED, BLUE, GREEN)
    assert segments[2].colors == (RED,)
    assert segments[3].colors == (BLUE,)


def test_reversed_route_connections(shared_corridor):
    connections = extract_connections(parse_topology(shared_corridor))
    blue = [c for c in connections if c.color == BLUE]
    assert blue == [
        Connection(3, EndpointTag.TOP, 1, EndpointTag.BOTTOM, BLUE),
        Connection(1, EndpointTag.TOP, 0, EndpointTag.BOTTOM, BLUE),
    ]


def test_single_arc_route_has_no_connections(shared_corridor):
    connections = extract_connections(parse_topology(shared_corridor))
    assert not [c for c in connections if c.color == GREEN]


def test_duplicate_transitions_deduplicated(two_arcs):
    """A route crossing the same arc pair twice yields one connection per pair."""
    two_arcs["objects"]["lines"]["geometries"][0]["arcs"] = [0, 1, 0, 1]
    connections = extract_connections(parse_topology(two_arcs))
    assert len(connections) == 2
    assert len({c.dedupe_key for c in connections}) == 2


def test_same_transition_different_colors_kept(two_arcs):
    route = dict(two_arcs["objects"]["lines"]["geometries"][0])
    route["properties"] = {"stroke": "#00FF00"}
    two_arcs["objects"]["lines"]["geometries"].append(route)
    connections = extract_connections(parse_topology(two_arcs))
    assert {c.color for c in connections} == {"#FF0000", "#00FF00"}


def test_ingest_is_idempotent(shared_corridor):
    first = ingest_topology(shared_corridor)
    second = ingest_topology(shared_corridor)
    assert first.segments == second.segments
    assert first.connections == second.connections


def test_missing_stroke_defaults_to_black(two_arcs):
    two_arcs["objects"]["lines"]["geometries"][0]["properties"] = {}
    topology = ingest_topology(two_arcs)
    assert topology.segments[0].colors == ("#000000",)
    assert topology.connections[0].color == "#000000"


def test_segment_colors_listing(shared_corridor):
    topology = ingest_topology(shared_corridor)
    assert topology.segment_colors() == [RED, BLUE, GREEN]
    assert len(topology.connections_for(RED)) == 2


def test_rejects_wrong_type():
    with pytest.raises(TopologyError, match="type"):
        parse_topology({"type": "FeatureCollection", "features": []})


def test_rejects_single_point_arc(two_arcs):
    two_arcs["arcs"][0] = [[0, 0]]
    with pytest.raises(TopologyError, match="arc 0"):
        parse_topology(two_arcs)


def test_rejects_bad_color(two_arcs):
    two_arcs["objects"]["lines"]["geometries"][0]["properties"]["stroke"] = "red"
    with pytest.raises(TopologyError):
        parse_topology(two_arcs)


def test_validate_reports_dangling_reference(two_arcs):
    two_arcs["objects"]["lines"]["geometries"][0]["arcs"] = [0, 5]
    problems = validate_topology(parse_topology(two_arcs))
    assert len(problems) == 1
    assert "arc 5" in problems[0]


def test_dangling_reference_still_ingests(two_arcs):
    """Dangling references are tolerated; their connections never render."""
    two_arcs["objects"]["lines"]["geometries"][0]["arcs"] = [0, -7]
    topology = ingest_topology(two_arcs)
    assert len(topology.segments) == 2
    assert topology.connections[0].to_id == 6


def test_validate_reports_empty_route(two_arcs):
    two_arcs["objects"]["lines"]["geometries"][0]["arcs"] = []
    problems = validate_topology(parse_topology(two_arcs))
    assert any("references no arcs" in p for p in problems)


def test_load_topology(tmp_path, two_arcs):
    path = tmp_path / "lines.topojson"
    path.write_text(json.dumps(two_arcs))
    assert len(load_topology(path).arcs) == 2


def test_load_topology_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(TopologyError, match="Invalid JSON"):
        load_topology(path)


def test_extent_falls_back_to_arcs(shared_corridor):
    extent = parse_topology(shared_corridor).extent()
    assert extent == (144.95, -37.825, 145.005, -37.795)
