"""Podcast dashboard app: standalone NiceGUI application.

Run:
    podcast-dashboard
    python -m podcast_dashboard.dashboard.app

Env vars:
    PODCAST_DASHBOARD_DATA: dataset CSV (default podcast-metrics.csv in the working directory)
    PODCAST_DASHBOARD_LOG_LEVEL: log level (default INFO)
    HOST: bind host (default 127.0.0.1)
    PORT: bind port (default 8080)
"""

from __future__ import annotations

import os
from typing import List, Optional

from nicegui import ui

from podcast_dashboard.dashboard.chart_card import ChartCard
from podcast_dashboard.dashboard.figures import CHART_SPECS, ChartFigureBuilder
from podcast_dashboard.dashboard.preferences import ThemePreferenceStore
from podcast_dashboard.dashboard.theme import ThemeMode, toggled
from podcast_dashboard.series.data_source import DashboardData, PodcastDataSource, episodes_to_frame
from podcast_dashboard.series.insights import format_percent
from podcast_dashboard.series.records import SummaryStatistics
from podcast_dashboard.utils import setUpGuiDefaults
from podcast_dashboard.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

DATA_ENV = "PODCAST_DASHBOARD_DATA"
DEFAULT_DATA_PATH = "podcast-metrics.csv"
FALLBACK_MESSAGE = "Unable to load podcast metrics."

# one data source per process; the dataset is read once
_source: Optional[PodcastDataSource] = None


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_data_source() -> PodcastDataSource:
    """Process-wide data source, loaded on first use."""
    global _source
    if _source is None:
        _source = PodcastDataSource(os.getenv(DATA_ENV, DEFAULT_DATA_PATH))
    if not _source.loaded:
        _source.load()
    return _source


# ---------------------------------------------------------------------------
# Page parts
# ---------------------------------------------------------------------------

def build_header(store: ThemePreferenceStore, cards: List[ChartCard]) -> ui.dark_mode:
    """Header with title and a light/dark toggle persisted through ``store``."""
    dark_mode = ui.dark_mode()
    dark_mode.value = store.get_theme() is ThemeMode.DARK

    def _icon() -> str:
        return "light_mode" if dark_mode.value else "dark_mode"

    def _toggle_theme() -> None:
        theme = toggled(store.get_theme())
        store.set_theme(theme, save=False)
        try:
            store.save()
        except OSError as e:
            logger.warning(f"theme preference not persisted: {e}")
        dark_mode.value = theme is ThemeMode.DARK
        theme_btn.props(f"icon={_icon()}")
        for card in cards:
            card.set_theme(theme)
        logger.info(f"theme set to {theme.value}")

    with ui.header().classes("items-center justify-between").props("dense").style(
        "min-height: 40px; height: 40px; padding: 0 12px;"
    ):
        ui.label("Podcast Metrics Dashboard").classes("!text-lg font-bold text-white")
        theme_btn = ui.button(icon=_icon(), on_click=_toggle_theme).props(
            "flat round dense text-color=white"
        ).tooltip("Toggle dark / light mode")

    return dark_mode


def _summary_items(summary: SummaryStatistics) -> list[tuple[str, str, str]]:
    return [
        ("Episodes", f"{summary.total_episodes:,}", f"Latest: Ep {summary.latest_episode.episode}"),
        (
            "Avg downloads",
            f"{summary.average_downloads:,.0f}",
            f"{format_percent(summary.downloads_growth_percent)} recent vs. early",
        ),
        (
            "Avg completion",
            f"{summary.average_completion_rate * 100:.1f}%",
            f"{format_percent(summary.completion_rate_change)} recent vs. early",
        ),
        ("Avg duration", f"{summary.average_duration:.1f} min", ""),
        ("Subscribers", f"{summary.total_subscribers:,}", "gained across the catalog"),
    ]


def build_summary_strip(summary: SummaryStatistics) -> None:
    with ui.row().classes("w-full gap-4"):
        for title, value, caption in _summary_items(summary):
            with ui.card().classes("min-w-[10rem]"):
                ui.label(title).classes("text-xs uppercase opacity-70")
                ui.label(value).classes("!text-2xl font-semibold")
                if caption:
                    ui.label(caption).classes("text-xs opacity-70")


def build_charts(data: DashboardData, theme: ThemeMode) -> List[ChartCard]:
    """One ChartCard per chart spec, two per row."""
    builder = ChartFigureBuilder(episodes_to_frame(data.episodes), data.summary, theme=theme)
    cards: List[ChartCard] = []
    with ui.element("div").classes("w-full grid gap-4").style(
        "grid-template-columns: repeat(auto-fill, minmax(680px, 1fr));"
    ):
        for spec in CHART_SPECS:
            cards.append(ChartCard(spec, builder, insight=data.insights.get(spec.kind.value)))
    return cards


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: header, summary strip and the six chart cards."""

    setUpGuiDefaults("text-sm")

    ui.page_title("Podcast Metrics")

    store = ThemePreferenceStore.load()
    cards: List[ChartCard] = []
    build_header(store, cards)

    data = get_data_source().state()
    with ui.column().classes("w-full gap-4 p-4"):
        if not data.ok:
            if data.error is not None:
                logger.warning(f"showing fallback page: {data.error}")
            ui.label(FALLBACK_MESSAGE).classes("text-negative")
            return
        build_summary_strip(data.summary)
        cards.extend(build_charts(data, store.get_theme()))


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    """Start the dashboard. Configuration comes from env vars only."""
    configure_logging()

    host = os.getenv("HOST", "127.0.0.1")
    port = _env_int("PORT", 8080)

    logger.info(f"Starting podcast dashboard: host={host} port={port} data={os.getenv(DATA_ENV, DEFAULT_DATA_PATH)}")

    ui.run(host=host, port=port, reload=False, title="Podcast Metrics")


if __name__ in {"__main__", "__mp_main__"}:
    main()
