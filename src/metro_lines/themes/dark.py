"""Dark grey theme."""

from metro_lines.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    line_width=3.0,
    title_color="#ffffff",
    title_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    title_font_size=20.0,
    viewport_stroke="rgba(255, 255, 255, 0.2)",
)
