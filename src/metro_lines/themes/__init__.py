"""Color schemes for SVG previews of rendered line collections.

Route strokes come from the topology. A theme sets the canvas
background, the title text, the viewport outline and the stroke used
for features that carry none.
"""

from metro_lines.render.style import Theme
from metro_lines.themes.dark import DARK_THEME
from metro_lines.themes.light import LIGHT_THEME

THEMES: dict[str, Theme] = {theme.name: theme for theme in (DARK_THEME, LIGHT_THEME)}

DEFAULT_THEME = DARK_THEME.name

__all__ = ["THEMES", "DEFAULT_THEME", "DARK_THEME", "LIGHT_THEME"]
