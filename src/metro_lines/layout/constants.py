"""Numeric policy constants for the line rendering pipeline.

Distances are kilometres along the Earth's surface unless noted.
"""

# ---------------------------------------------------------------------------
# Earth model
# ---------------------------------------------------------------------------
EARTH_RADIUS_KM: float = 6371.0088
"""Mean Earth radius used for haversine lengths and offsets."""

# ---------------------------------------------------------------------------
# Spacing
# ---------------------------------------------------------------------------
MIN_LINE_WIDTH: float = 1.0
"""Requested widths below this are treated as this width."""

REFERENCE_ZOOM: float = 10.0
"""Zoom level at which the spacing numerator applies unscaled."""

MIN_SPACING: float = 0.00005
"""Lower clamp for the geographic spacing between parallel lines."""

MAX_SPACING: float = 0.3
"""Upper clamp for the geographic spacing between parallel lines."""

# ---------------------------------------------------------------------------
# Clipping margins
# ---------------------------------------------------------------------------
JUNCTION_MARGIN_MIN: float = 0.0049
"""Floor of the per-spacing margin trimmed from arcs before offsetting."""

JUNCTION_MARGIN_FACTOR: float = 6.0
"""Multiplier applied to the junction margin."""

TAPER_MARGIN_MIN: float = 0.049
"""Floor of the margin for the buffer and invasive trims."""

TAPER_MARGIN_FACTOR: float = 2.0
"""Multiplier applied to the taper margin."""

SPACING_MARGIN_SCALE: float = 5.0
"""Spacing multiple compared against the margin floors."""

MIN_CLIP_VERTICES: int = 4
"""Lines with fewer vertices are never clipped."""

OFFSET_MITRE_LIMIT: float = 5.0
"""Largest offset corner distance from its vertex, in multiples of the offset."""

# ---------------------------------------------------------------------------
# Smoothing
# ---------------------------------------------------------------------------
SMOOTH_LINES_BELOW: float = 0.007
"""Offset lines are smoothed when the spacing is under this value."""

SMOOTH_LINES_ITERATIONS: int = 2
SMOOTH_LINES_FACTOR: float = 0.75

SMOOTH_CONNECTIONS_BELOW: float = 0.11
"""Stitched connection chains are smoothed when the spacing is under this."""

SMOOTH_CONNECTIONS_ITERATIONS: int = 7
SMOOTH_CONNECTIONS_FACTOR: float = 0.75

# ---------------------------------------------------------------------------
# Color ordering
# ---------------------------------------------------------------------------
LUMINANCE_WEIGHTS: tuple[float, float, float] = (0.2126, 0.7152, 0.0722)
"""Rec. 709 weights for the red, green and blue channels."""

LUMINANCE_GAMMA: float = 2.2
"""Gamma applied to normalised channel values before weighting."""
