"""Output assembly for rendered lines."""

from metro_lines.render.geojson import assemble_features
from metro_lines.render.svg import render_svg
from metro_lines.render.style import Theme

__all__ = ["Theme", "assemble_features", "render_svg"]
