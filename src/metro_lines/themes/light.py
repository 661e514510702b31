"""Light theme."""

from metro_lines.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    line_width=4.0,
    title_color="#111111",
    title_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    title_font_size=22.0,
    viewport_stroke="rgba(0, 0, 0, 0.1)",
    default_stroke="#333333",
)
