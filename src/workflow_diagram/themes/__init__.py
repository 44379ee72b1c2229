"""Theme definitions for workflow diagrams."""

from workflow_diagram.themes.dark import DARK_THEME
from workflow_diagram.themes.light import LIGHT_THEME

THEMES = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
