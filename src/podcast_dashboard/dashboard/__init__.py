"""NiceGUI rendering layer: chart cards, Plotly figures, theme and preferences."""

from podcast_dashboard.dashboard.chart_card import ChartCard
from podcast_dashboard.dashboard.figures import (
    CHART_SPECS,
    ChartFigureBuilder,
    ChartKind,
    ChartSpec,
    HoverPoint,
    activation_radius,
    nearest_point,
)
from podcast_dashboard.dashboard.preferences import PreferenceData, ThemePreferenceStore
from podcast_dashboard.dashboard.theme import ThemeMode, resolve_theme, toggled

__all__ = [
    "CHART_SPECS",
    "ChartCard",
    "ChartFigureBuilder",
    "ChartKind",
    "ChartSpec",
    "HoverPoint",
    "PreferenceData",
    "ThemeMode",
    "ThemePreferenceStore",
    "activation_radius",
    "nearest_point",
    "resolve_theme",
    "toggled",
]
