"""CLI for metro-lines."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from metro_lines import __version__
from metro_lines.layout import bbox_ring, render_lines, scale_spacing
from metro_lines.messages import ErrorDetail, WorkerError
from metro_lines.parser import (
    Topology,
    TopologyError,
    ingest_topology,
    load_topology,
    validate_topology,
)
from metro_lines.render import assemble_features, render_svg
from metro_lines.themes import DEFAULT_THEME, THEMES
from metro_lines.worker import LinesRendererWorker


def _load_or_exit(input_file: Path) -> Topology:
    try:
        return load_topology(input_file)
    except TopologyError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def _parse_bbox(value: str | None) -> tuple[float, float, float, float] | None:
    if value is None:
        return None
    parts = value.split(",")
    if len(parts) != 4:
        raise click.BadParameter("expected min_lon,min_lat,max_lon,max_lat")
    try:
        min_x, min_y, max_x, max_y = (float(p) for p in parts)
    except ValueError:
        raise click.BadParameter("bbox values must be numbers")
    return (min_x, min_y, max_x, max_y)


def _render(topology: Topology, width: float, zoom: float, bbox: str | None):
    box = _parse_bbox(bbox) or topology.extent()
    viewbox = bbox_ring(box)
    spacing = scale_spacing(width, zoom)
    result = render_lines(ingest_topology(topology), spacing, viewbox)
    return result, viewbox


_render_options = [
    click.argument("input_file", type=click.Path(exists=True, path_type=Path)),
    click.option("--width", type=float, default=3.0,
                 help="Requested line width in pixels (default: 3)"),
    click.option("--zoom", type=float, default=12.0,
                 help="Web-map zoom level (default: 12)"),
    click.option("--bbox", type=str, default=None,
                 help="Viewport as min_lon,min_lat,max_lon,max_lat. "
                      "Defaults to the topology extent"),
]


def render_options(func):
    for option in reversed(_render_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv)")
def cli(verbose: int) -> None:
    """metro-lines: Offset shared transit topologies into per-route lines."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO if verbose == 1 else logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )


@cli.command()
@render_options
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output GeoJSON path. Defaults to <input>.lines.geojson")
def render(
    input_file: Path,
    width: float,
    zoom: float,
    bbox: str | None,
    output: Path | None,
) -> None:
    """Render a topology to a GeoJSON FeatureCollection of offset lines."""
    topology = _load_or_exit(input_file)
    result, _ = _render(topology, width, zoom, bbox)
    collection = assemble_features(result.lines)

    if output is None:
        output = input_file.with_suffix(".lines.geojson")

    output.write_text(json.dumps(collection) + "\n")
    click.echo(f"Rendered {result.rendered_segments} segments, "
               f"{len(result.lines)} lines, "
               f"{len(collection['features'])} colors -> {output}")


@cli.command()
@render_options
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default=DEFAULT_THEME,
              help=f"Visual theme (default: {DEFAULT_THEME})")
@click.option("--canvas-width", type=int, default=800,
              help="SVG width in pixels (default: 800)")
@click.option("--title", type=str, default="", help="Optional title text")
def preview(
    input_file: Path,
    width: float,
    zoom: float,
    bbox: str | None,
    output: Path | None,
    theme: str,
    canvas_width: int,
    title: str,
) -> None:
    """Render a topology and draw the offset lines to an SVG preview."""
    topology = _load_or_exit(input_file)
    result, viewbox = _render(topology, width, zoom, bbox)
    collection = assemble_features(result.lines)
    svg = render_svg(collection, THEMES[theme], width=canvas_width,
                     title=title, viewbox=viewbox)

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg + "\n")
    click.echo(f"Previewed {len(collection['features'])} colors -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate a topology export."""
    topology = _load_or_exit(input_file)
    errors = validate_topology(topology)

    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(topology.arcs)} arcs, "
               f"{len(topology.routes)} routes")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a topology export."""
    topology = _load_or_exit(input_file)
    lines = ingest_topology(topology)

    click.echo(f"Arcs: {len(topology.arcs)}")
    click.echo(f"Segments: {len(lines.segments)}")
    click.echo(f"Connections: {len(lines.connections)}")
    click.echo(f"Routes: {len(topology.routes)}")
    for route in topology.routes:
        props = route.properties
        name = props.title or "(untitled)"
        agency = f" [{props.agency}]" if props.agency else ""
        click.echo(f"  {name}{agency} ({props.stroke}): {len(route.arcs)} arcs")
    shared = sum(1 for s in lines.segments.values() if len(s.colors) > 1)
    click.echo(f"Shared segments: {shared}")
    click.echo("Colors:")
    for color in lines.segment_colors():
        n_segments = sum(1 for s in lines.segments.values() if color in s.colors)
        n_connections = len(lines.connections_for(color))
        click.echo(f"  {color}: {n_segments} segments, {n_connections} connections")


@cli.command()
def serve() -> None:
    """Serve worker messages as JSON lines over stdin/stdout.

    Each input line is one inbound message; each outbound message is
    written as one JSON line.
    """
    def post(message: dict) -> None:
        click.echo(json.dumps(message))

    worker = LinesRendererWorker(post)
    for raw in click.get_text_stream("stdin"):
        raw = raw.strip()
        if not raw:
            continue
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            post(WorkerError(data=ErrorDetail(message=f"Invalid JSON: {e}")).model_dump())
            continue
        worker.handle_message(payload)
