"""Fixtures for dashboard figure and preference tests."""

from __future__ import annotations

import pytest

from podcast_dashboard.dashboard.figures import ChartFigureBuilder
from podcast_dashboard.series.data_source import episodes_to_frame
from podcast_dashboard.series.derivation import derive_series
from podcast_dashboard.series.records import RawRow


@pytest.fixture
def rows() -> list[RawRow]:
    """Eight episodes with growing downloads and varied durations."""
    return [
        RawRow(
            episode=ep,
            title=f"Episode {ep}",
            description="",
            guest="",
            duration=f"00:{25 + (ep * 7) % 20}:00",
            downloads=1000 + ep * 150,
            completion_numbers=500 + ep * 60,
            new_listeners=100 + ep * 10,
            returning_listeners=400 + ep * 20,
            subscribers_gained=5 + ep * 2,
            social_media_shares=20 + ep * 9,
        )
        for ep in range(1, 9)
    ]


@pytest.fixture
def builder(rows) -> ChartFigureBuilder:
    episodes, summary = derive_series(rows)
    return ChartFigureBuilder(episodes_to_frame(episodes), summary)
