"""Series derivation: raw rows -> ordered episode records -> summary.

Everything in this module is a pure function of its input. The rolling and
cumulative values are produced by one left-to-right fold over the sorted rows;
the trailing windows keep a running sum instead of re-summing every slice.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Sequence

from podcast_dashboard.series.errors import EmptySeriesError
from podcast_dashboard.series.parsing import parse_duration
from podcast_dashboard.series.records import (
    ROLLING_WINDOW,
    EpisodeRecord,
    RawRow,
    SummaryStatistics,
)
from podcast_dashboard.series.statistics import mean, pearson_correlation
from podcast_dashboard.utils.logging import get_logger

logger = get_logger(__name__)


class _TrailingWindow:
    """Mean over the last ``size`` pushed values (fewer at the start)."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"window size must be >= 1, got {size}")
        self._values: deque[float] = deque(maxlen=size)
        self._sum = 0.0

    def push(self, value: float) -> float:
        if len(self._values) == self._values.maxlen:
            self._sum -= self._values[0]
        self._values.append(value)
        self._sum += value
        return self._sum / len(self._values)


def _ratio(numerator: float, denominator: float) -> float:
    return 0.0 if denominator == 0 else numerator / denominator


def derive_episodes(rows: Iterable[RawRow], window: int = ROLLING_WINDOW) -> list[EpisodeRecord]:
    """Derive the full episode series from raw rows.

    Rows are stable-sorted by episode number (ties keep their input order),
    then folded once, carrying the cumulative sums and the trailing windows.

    Args:
        rows: Parsed rows, in any order.
        window: Trailing window size for the rolling means.

    Returns:
        EpisodeRecords in ascending episode order.

    Raises:
        MalformedDurationError: If any row has an unparsable duration.
    """
    ordered = sorted(rows, key=lambda row: row.episode)

    cumulative_downloads = 0
    cumulative_subscribers = 0
    downloads_window = _TrailingWindow(window)
    completion_window = _TrailingWindow(window)

    episodes: list[EpisodeRecord] = []
    for row in ordered:
        duration_minutes = parse_duration(row.duration)
        completion_rate = _ratio(row.completion_numbers, row.downloads)
        listeners_total = row.new_listeners + row.returning_listeners

        cumulative_downloads += row.downloads
        cumulative_subscribers += row.subscribers_gained

        episodes.append(
            EpisodeRecord(
                episode=row.episode,
                title=row.title,
                description=row.description,
                guest=row.guest,
                duration_minutes=duration_minutes,
                downloads=row.downloads,
                completion_numbers=row.completion_numbers,
                completion_rate=completion_rate,
                new_listeners=row.new_listeners,
                returning_listeners=row.returning_listeners,
                listeners_total=listeners_total,
                new_listener_ratio=_ratio(row.new_listeners, listeners_total),
                returning_listener_ratio=_ratio(row.returning_listeners, listeners_total),
                subscribers_gained=row.subscribers_gained,
                social_media_shares=row.social_media_shares,
                cumulative_downloads=cumulative_downloads,
                cumulative_subscribers=cumulative_subscribers,
                downloads_rolling=downloads_window.push(row.downloads),
                completion_rolling=completion_window.push(completion_rate),
                subscribers_per_thousand_downloads=_ratio(row.subscribers_gained, row.downloads) * 1000,
                shares_per_thousand_downloads=_ratio(row.social_media_shares, row.downloads) * 1000,
            )
        )

    logger.debug(f"derived {len(episodes)} episodes (window={window})")
    return episodes


def compute_summary(episodes: Sequence[EpisodeRecord]) -> SummaryStatistics:
    """Aggregate statistics over a derived series.

    The series is split at ``len(episodes) // 2`` into an early and a late
    half. With a single episode the early half is empty and all early-vs-late
    deltas are 0.

    Raises:
        EmptySeriesError: If ``episodes`` is empty.
    """
    if not episodes:
        raise EmptySeriesError("Cannot summarize an empty episode series")

    halfway = len(episodes) // 2
    early = episodes[:halfway]
    late = episodes[halfway:]

    if early:
        downloads_early = mean(e.downloads for e in early)
        downloads_late = mean(e.downloads for e in late)
        downloads_growth = (
            0.0 if downloads_early == 0 else (downloads_late - downloads_early) / downloads_early * 100
        )
        completion_change = (
            mean(e.completion_rate for e in late) - mean(e.completion_rate for e in early)
        ) * 100
        new_share_change = (
            mean(e.new_listener_ratio for e in late) - mean(e.new_listener_ratio for e in early)
        ) * 100
    else:
        downloads_growth = completion_change = new_share_change = 0.0

    return SummaryStatistics(
        total_episodes=len(episodes),
        average_downloads=mean(e.downloads for e in episodes),
        average_completion_rate=mean(e.completion_rate for e in episodes),
        average_duration=mean(e.duration_minutes for e in episodes),
        total_subscribers=episodes[-1].cumulative_subscribers,
        downloads_growth_percent=downloads_growth,
        completion_rate_change=completion_change,
        new_listener_share_change=new_share_change,
        shares_subscribers_correlation=pearson_correlation(
            episodes,
            lambda e: e.social_media_shares,
            lambda e: e.subscribers_gained,
        ),
        duration_completion_correlation=pearson_correlation(
            episodes,
            lambda e: e.duration_minutes,
            lambda e: e.completion_rate,
        ),
        latest_episode=episodes[-1],
    )


def derive_series(rows: Iterable[RawRow]) -> tuple[list[EpisodeRecord], SummaryStatistics]:
    """Derive episodes and their summary in one call.

    Raises:
        EmptySeriesError: If there are no rows.
        MalformedDurationError: If any row has an unparsable duration.
    """
    episodes = derive_episodes(rows)
    summary = compute_summary(episodes)
    logger.info(
        f"derived series: episodes={summary.total_episodes}, "
        f"avg_downloads={summary.average_downloads:.1f}, "
        f"total_subscribers={summary.total_subscribers}"
    )
    return episodes, summary
