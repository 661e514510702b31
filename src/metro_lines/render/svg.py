"""SVG previews of rendered line collections using drawsvg."""

from __future__ import annotations

from collections.abc import Sequence

import drawsvg as draw
from geojson import FeatureCollection

from metro_lines.parser.model import Coord
from metro_lines.render.style import Theme


def _feature_lines(collection: FeatureCollection) -> list[tuple[str, list[list[Coord]]]]:
    out = []
    for feature in collection["features"]:
        props = feature.get("properties") or {}
        lines = [[(x, y) for x, y in line] for line in feature["geometry"]["coordinates"]]
        out.append((props.get("stroke"), lines))
    return out


def _bounds(points: Sequence[Coord]) -> tuple[float, float, float, float]:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def render_svg(
    collection: FeatureCollection,
    theme: Theme,
    width: int = 800,
    height: int | None = None,
    padding: float = 40.0,
    title: str = "",
    viewbox: Sequence[Coord] | None = None,
) -> str:
    """Render a rendered-lines FeatureCollection to an SVG string.

    Coordinates are drawn equirectangular with latitude pointing up. The
    canvas is fitted to the viewbox when given, otherwise to the lines.
    """
    features = _feature_lines(collection)
    points = [p for _, lines in features for line in lines for p in line]
    if viewbox:
        points = list(viewbox)
    if not points:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    min_x, min_y, max_x, max_y = _bounds(points)
    span_x = max(max_x - min_x, 1e-12)
    span_y = max(max_y - min_y, 1e-12)

    inner_w = width - padding * 2
    scale = inner_w / span_x
    if height is None:
        height = int(span_y * scale + padding * 2)
    else:
        scale = min(scale, (height - padding * 2) / span_y)

    def project(p: Coord) -> tuple[float, float]:
        return (padding + (p[0] - min_x) * scale, height - padding - (p[1] - min_y) * scale)

    d = draw.Drawing(width, height)
    d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    if viewbox:
        outline = draw.Path(stroke=theme.viewport_stroke, fill="none")
        outline.M(*project(viewbox[0]))
        for p in viewbox[1:]:
            outline.L(*project(p))
        d.append(outline)

    for color, lines in features:
        path = draw.Path(
            stroke=color or theme.default_stroke,
            stroke_width=theme.line_width,
            fill="none",
            stroke_linecap="round",
            stroke_linejoin="round",
        )
        for line in lines:
            if len(line) < 2:
                continue
            path.M(*project(line[0]))
            for p in line[1:]:
                path.L(*project(p))
        d.append(path)

    if title:
        d.append(draw.Text(
            title,
            theme.title_font_size,
            padding, padding / 2 + theme.title_font_size / 2,
            fill=theme.title_color,
            font_family=theme.title_font_family,
            font_weight="bold",
        ))

    return d.as_svg()
