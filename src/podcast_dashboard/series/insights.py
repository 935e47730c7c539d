"""Narrative insight strings for the six dashboard charts."""

from __future__ import annotations

from podcast_dashboard.series.records import SummaryStatistics

INSIGHT_KEYS: tuple[str, ...] = (
    "downloads",
    "completion",
    "listener_mix",
    "subscriber_growth",
    "shares_to_subs",
    "duration",
)


def format_percent(value: float, digits: int = 1) -> str:
    """Signed percent string: ``12.345`` -> ``"+12.3%"``, ``-4`` -> ``"-4.0%"``."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.{digits}f}%"


def build_insights(summary: SummaryStatistics) -> dict[str, str]:
    """Map each insight key to its narrative sentence.

    Correlations of 0 or above use the positive phrasing; negative ones use
    the cautionary phrasing.
    """
    shares_r = summary.shares_subscribers_correlation
    duration_r = summary.duration_completion_correlation

    if shares_r >= 0:
        shares_text = f"Social sharing strongly correlates with subscriber gains (r = {shares_r:.2f})."
    else:
        shares_text = f"Higher social sharing currently coincides with fewer subscribers (r = {shares_r:.2f})."

    if duration_r >= 0:
        duration_text = f"Longer episodes trend toward stronger completion rates (r = {duration_r:.2f})."
    else:
        duration_text = (
            f"Longer episodes trend toward lower completion (r = {duration_r:.2f}); "
            "consider testing shorter cuts."
        )

    return {
        "downloads": (
            f"Recent episodes are averaging {format_percent(summary.downloads_growth_percent)} "
            "downloads versus the earliest half of the catalog."
        ),
        "completion": (
            f"Completion rate moved {format_percent(summary.completion_rate_change)} "
            "from early episodes to the latest half."
        ),
        "listener_mix": (
            f"New listeners make up {format_percent(summary.new_listener_share_change)} "
            "more of the audience in newer episodes."
        ),
        "subscriber_growth": (
            f"Total subscribers climbed to {summary.total_subscribers:,} with the latest release."
        ),
        "shares_to_subs": shares_text,
        "duration": duration_text,
    }
