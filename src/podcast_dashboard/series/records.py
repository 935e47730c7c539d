"""Value types for the podcast episode series.

RawRow is one parsed CSV record. EpisodeRecord is the fully derived data point
for one episode, and SummaryStatistics aggregates the whole series. All three
are immutable; any change to the input set means deriving everything again.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# CSV header of the input dataset, in file order.
CSV_COLUMNS: tuple[str, ...] = (
    "episode",
    "title",
    "description",
    "guest",
    "duration",
    "downloads",
    "completion_numbers",
    "new_listeners",
    "returning_listeners",
    "subscribers_gained",
    "social_media_shares",
)

# Columns that must hold non-negative integers.
COUNT_COLUMNS: tuple[str, ...] = (
    "downloads",
    "completion_numbers",
    "new_listeners",
    "returning_listeners",
    "subscribers_gained",
    "social_media_shares",
)

# Number of episodes in the trailing rolling window (current one included).
ROLLING_WINDOW = 7


@dataclass(frozen=True)
class RawRow:
    """One record of the metrics CSV after field coercion."""

    episode: int
    title: str
    description: str
    guest: str
    duration: str
    downloads: int
    completion_numbers: int
    new_listeners: int
    returning_listeners: int
    subscribers_gained: int
    social_media_shares: int


@dataclass(frozen=True)
class EpisodeRecord:
    """Derived metrics for a single episode at its position in the series."""

    episode: int
    title: str
    description: str
    guest: str
    duration_minutes: float
    downloads: int
    completion_numbers: int
    completion_rate: float
    new_listeners: int
    returning_listeners: int
    listeners_total: int
    new_listener_ratio: float
    returning_listener_ratio: float
    subscribers_gained: int
    social_media_shares: int
    cumulative_downloads: int
    cumulative_subscribers: int
    downloads_rolling: float
    completion_rolling: float
    subscribers_per_thousand_downloads: float
    shares_per_thousand_downloads: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SummaryStatistics:
    """Aggregate statistics over the whole episode series.

    The ``*_change`` fields compare the late half of the catalog with the
    early half (split at ``n // 2``) and are expressed in percentage points.
    ``downloads_growth_percent`` is a relative change in percent.
    """

    total_episodes: int
    average_downloads: float
    average_completion_rate: float
    average_duration: float
    total_subscribers: int
    downloads_growth_percent: float
    completion_rate_change: float
    new_listener_share_change: float
    shares_subscribers_correlation: float
    duration_completion_correlation: float
    latest_episode: EpisodeRecord

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
