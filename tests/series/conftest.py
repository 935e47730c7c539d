"""Fixtures for series derivation tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from podcast_dashboard.series.records import CSV_COLUMNS, RawRow


def make_row(episode: int, **overrides) -> RawRow:
    """RawRow with zero counts and a 30 minute duration unless overridden."""
    values = dict(
        episode=episode,
        title=f"Episode {episode}",
        description="",
        guest="",
        duration="00:30:00",
        downloads=0,
        completion_numbers=0,
        new_listeners=0,
        returning_listeners=0,
        subscribers_gained=0,
        social_media_shares=0,
    )
    values.update(overrides)
    return RawRow(**values)


@pytest.fixture
def three_rows() -> list[RawRow]:
    """Episodes 1-3 with downloads 100/200/300, completions 50/100/150, all else zero."""
    return [
        make_row(1, downloads=100, completion_numbers=50),
        make_row(2, downloads=200, completion_numbers=100),
        make_row(3, downloads=300, completion_numbers=150),
    ]


@pytest.fixture
def weekly_rows() -> list[RawRow]:
    """Ten episodes with downloads 10, 20, ..., 100."""
    return [
        make_row(
            ep,
            downloads=ep * 10,
            completion_numbers=ep * 5,
            new_listeners=ep,
            returning_listeners=10 - ep,
            subscribers_gained=ep * 2,
            social_media_shares=ep * 3,
            duration=f"00:{20 + ep}:30",
        )
        for ep in range(1, 11)
    ]


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write a metrics CSV under tmp_path and return its path."""

    def _write(lines: list[str], *, header: str = ",".join(CSV_COLUMNS), name: str = "metrics.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def row_factory() -> Callable[..., RawRow]:
    return make_row
