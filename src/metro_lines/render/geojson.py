"""Assembly of rendered lines into a GeoJSON FeatureCollection."""

from __future__ import annotations

from geojson import Feature, FeatureCollection, MultiLineString

from metro_lines.layout.offsets import RenderedLines

GEOJSON_COORDINATE_PRECISION = 8


def assemble_features(rendered: RenderedLines) -> FeatureCollection:
    """Emit one MultiLineString feature per color, in first-drawn order."""
    features = []
    for color, lines in rendered.by_color.items():
        coords = [[[x, y] for x, y in line] for line in lines]
        features.append(
            Feature(
                geometry=MultiLineString(coords, precision=GEOJSON_COORDINATE_PRECISION),
                properties={"id": color, "stroke": color},
            )
        )
    return FeatureCollection(features)
