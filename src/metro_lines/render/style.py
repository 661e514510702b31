"""Theme and style constants for line previews."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for an SVG preview of rendered lines."""

    name: str
    background_color: str
    line_width: float
    title_color: str
    title_font_family: str
    title_font_size: float
    viewport_stroke: str = "none"
    # Fallback stroke for features without one
    default_stroke: str = "#888888"
