"""Geometry pipeline turning a line topology into offset polylines."""

from metro_lines.layout.clipping import clip_line
from metro_lines.layout.engine import RenderResult, bbox_ring, filter_segments, render_lines
from metro_lines.layout.offsets import EndpointRegistry, EndpointVariant, RenderedLines
from metro_lines.layout.ordering import color_luminance, order_colors
from metro_lines.layout.smoothing import smooth_path
from metro_lines.layout.spacing import clamp_spacing, scale_spacing
from metro_lines.layout.stitching import stitch_connections

__all__ = [
    "EndpointRegistry",
    "EndpointVariant",
    "RenderResult",
    "RenderedLines",
    "bbox_ring",
    "clamp_spacing",
    "clip_line",
    "color_luminance",
    "filter_segments",
    "order_colors",
    "render_lines",
    "scale_spacing",
    "smooth_path",
    "stitch_connections",
]
