"""Theme utilities for the dashboard charts."""

from __future__ import annotations

from enum import Enum
from typing import Union


class ThemeMode(str, Enum):
    """UI theme mode.

    Used by the figure builders and the page to coordinate theme settings.
    """

    DARK = "dark"
    LIGHT = "light"


def resolve_theme(theme: Union[str, ThemeMode, None]) -> ThemeMode:
    """Convert str to ThemeMode. Default to LIGHT."""
    if isinstance(theme, ThemeMode):
        return theme
    s = str(theme).lower()
    if s in ("dark", "plotly_dark"):
        return ThemeMode.DARK
    return ThemeMode.LIGHT


def toggled(theme: ThemeMode) -> ThemeMode:
    return ThemeMode.LIGHT if theme is ThemeMode.DARK else ThemeMode.DARK


def get_theme_colors(theme: ThemeMode) -> tuple[str, str]:
    """Get background and foreground colors for a theme."""
    if theme is ThemeMode.DARK:
        return "#0f172a", "#e2e8f0"
    return "#ffffff", "#0f172a"


def get_grid_color(theme: ThemeMode) -> str:
    if theme is ThemeMode.DARK:
        return "rgba(226,232,240,0.15)"
    return "rgba(15,23,42,0.1)"


def get_theme_template(theme: ThemeMode) -> str:
    """Get Plotly template name for a theme."""
    if theme is ThemeMode.DARK:
        return "plotly_dark"
    return "plotly_white"


# Series colors shared by both themes
PRIMARY_COLOR = "rgba(56, 189, 248, 0.9)"
PRIMARY_FILL = "rgba(56, 189, 248, 0.25)"
SECONDARY_COLOR = "rgba(129, 140, 248, 0.85)"
ACCENT_COLOR = "rgba(251, 146, 60, 0.9)"
RETURNING_FILL = "rgba(129, 140, 248, 0.55)"
NEW_FILL = "rgba(52, 211, 153, 0.55)"
