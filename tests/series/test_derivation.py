"""Unit tests for the episode series fold and summary statistics."""

import pytest

from podcast_dashboard.series.derivation import compute_summary, derive_episodes, derive_series
from podcast_dashboard.series.errors import EmptySeriesError, MalformedDurationError


def test_completion_rate_guard(row_factory):
    """Zero downloads gives a completion rate of 0, not a division error."""
    episodes = derive_episodes([row_factory(1, downloads=0, completion_numbers=0)])
    assert episodes[0].completion_rate == 0.0
    assert episodes[0].new_listener_ratio == 0.0
    assert episodes[0].returning_listener_ratio == 0.0
    assert episodes[0].subscribers_per_thousand_downloads == 0.0


def test_rolling_window(weekly_rows):
    episodes = derive_episodes(weekly_rows)
    assert episodes[0].downloads_rolling == pytest.approx(10)
    assert episodes[1].downloads_rolling == pytest.approx(15)
    assert episodes[6].downloads_rolling == pytest.approx(40)
    # window slides: mean of 40..100
    assert episodes[9].downloads_rolling == pytest.approx(70)


def test_rolling_window_matches_trailing_slice(weekly_rows):
    episodes = derive_episodes(weekly_rows)
    rates = [e.completion_rate for e in episodes]
    for i, episode in enumerate(episodes):
        window = rates[max(0, i - 6): i + 1]
        assert episode.completion_rolling == pytest.approx(sum(window) / len(window))


def test_custom_window_size(weekly_rows):
    episodes = derive_episodes(weekly_rows, window=2)
    assert episodes[3].downloads_rolling == pytest.approx(35)


def test_cumulative_values_are_monotonic(weekly_rows):
    episodes = derive_episodes(weekly_rows)
    for prev, cur in zip(episodes, episodes[1:]):
        assert cur.cumulative_downloads >= prev.cumulative_downloads
        assert cur.cumulative_subscribers >= prev.cumulative_subscribers
    assert episodes[-1].cumulative_downloads == sum(r.downloads for r in weekly_rows)
    assert episodes[-1].cumulative_subscribers == sum(r.subscribers_gained for r in weekly_rows)


def test_rows_are_sorted_by_episode(row_factory):
    rows = [row_factory(3, downloads=30), row_factory(1, downloads=10), row_factory(2, downloads=20)]
    episodes = derive_episodes(rows)
    assert [e.episode for e in episodes] == [1, 2, 3]
    assert [e.cumulative_downloads for e in episodes] == [10, 30, 60]


def test_duplicate_episode_numbers_keep_input_order(row_factory):
    rows = [row_factory(2, title="second-a"), row_factory(1), row_factory(2, title="second-b")]
    episodes = derive_episodes(rows)
    assert [e.title for e in episodes] == ["Episode 1", "second-a", "second-b"]


def test_derived_fields(row_factory):
    row = row_factory(
        5,
        duration="01:23:45",
        downloads=2000,
        completion_numbers=1500,
        new_listeners=250,
        returning_listeners=750,
        subscribers_gained=40,
        social_media_shares=100,
    )
    (episode,) = derive_episodes([row])
    assert episode.duration_minutes == pytest.approx(83.75)
    assert episode.completion_rate == pytest.approx(0.75)
    assert episode.listeners_total == 1000
    assert episode.new_listener_ratio == pytest.approx(0.25)
    assert episode.returning_listener_ratio == pytest.approx(0.75)
    assert episode.subscribers_per_thousand_downloads == pytest.approx(20)
    assert episode.shares_per_thousand_downloads == pytest.approx(50)


def test_malformed_duration_aborts_batch(row_factory):
    rows = [row_factory(1), row_factory(2, duration="30:00")]
    with pytest.raises(MalformedDurationError):
        derive_episodes(rows)


def test_end_to_end_three_rows(three_rows):
    episodes, summary = derive_series(three_rows)
    assert len(episodes) == 3
    assert summary.total_episodes == 3
    assert summary.average_completion_rate == pytest.approx(0.5)
    assert summary.total_subscribers == 0
    assert summary.shares_subscribers_correlation == 0
    assert summary.average_downloads == pytest.approx(200)
    assert summary.latest_episode.episode == 3


def test_summary_early_vs_late(three_rows):
    """Three episodes split 1 early / 2 late."""
    summary = compute_summary(derive_episodes(three_rows))
    # early mean 100, late mean 250
    assert summary.downloads_growth_percent == pytest.approx(150.0)
    assert summary.completion_rate_change == pytest.approx(0.0)
    assert summary.new_listener_share_change == pytest.approx(0.0)


def test_summary_single_episode(row_factory):
    summary = compute_summary(derive_episodes([row_factory(1, downloads=100, completion_numbers=80)]))
    assert summary.total_episodes == 1
    assert summary.downloads_growth_percent == 0.0
    assert summary.completion_rate_change == 0.0
    assert summary.average_completion_rate == pytest.approx(0.8)


def test_summary_zero_early_downloads(row_factory):
    rows = [row_factory(1, downloads=0), row_factory(2, downloads=50)]
    summary = compute_summary(derive_episodes(rows))
    assert summary.downloads_growth_percent == 0.0


def test_summary_correlations(weekly_rows):
    summary = compute_summary(derive_episodes(weekly_rows))
    # shares and subscribers both grow linearly with the episode number
    assert summary.shares_subscribers_correlation == pytest.approx(1.0)
    assert -1.0 <= summary.duration_completion_correlation <= 1.0
    assert summary.total_subscribers == sum(r.subscribers_gained for r in weekly_rows)


def test_empty_series_raises():
    with pytest.raises(EmptySeriesError):
        compute_summary([])
    with pytest.raises(EmptySeriesError):
        derive_series([])


def test_records_to_dict(three_rows):
    episodes, summary = derive_series(three_rows)
    d = episodes[0].to_dict()
    assert d["episode"] == 1
    assert d["completion_rate"] == pytest.approx(0.5)
    assert summary.to_dict()["total_episodes"] == 3
