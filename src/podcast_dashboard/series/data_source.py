"""Dataset loading plus memoized derivation for the rendering layer.

PodcastDataSource owns the raw rows read once at startup and hands the page a
DashboardData snapshot. Derivation is memoized against the identity of the
rows list: asking for the state again with the same list is free, while
supplying a new list recomputes everything from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from podcast_dashboard.series.derivation import derive_series
from podcast_dashboard.series.errors import EmptySeriesError, PodcastDataError
from podcast_dashboard.series.insights import build_insights
from podcast_dashboard.series.loader import read_dataset
from podcast_dashboard.series.records import EpisodeRecord, RawRow, SummaryStatistics
from podcast_dashboard.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DashboardData:
    """Everything the charts need.

    ``summary is None`` means there is no usable data and the page must show
    its fallback message instead of charts.
    """

    episodes: tuple[EpisodeRecord, ...] = ()
    summary: Optional[SummaryStatistics] = None
    insights: dict[str, str] = field(default_factory=dict)
    loading: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.summary is not None and self.error is None


LOADING = DashboardData(loading=True)


class PodcastDataSource:
    """Reads the dataset once and serves memoized DashboardData snapshots.

    Example:
        ```python
        source = PodcastDataSource("podcast-metrics.csv")
        source.load()
        data = source.state()
        ```
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._rows: Optional[Sequence[RawRow]] = None
        self._load_error: Optional[Exception] = None
        self._loaded = False

        self._memo_rows: Optional[Sequence[RawRow]] = None
        self._memo_state: Optional[DashboardData] = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> DashboardData:
        """Read the dataset at ``self.path`` and return the derived state.

        Read and parse errors are captured into ``DashboardData.error``; they
        are never retried.
        """
        if self.path is None:
            raise ValueError("PodcastDataSource.load() requires a dataset path")
        try:
            rows = read_dataset(self.path)
        except PodcastDataError as e:
            logger.error(f"failed to load dataset {self.path}: {e}")
            self._rows = None
            self._load_error = e
            self._loaded = True
            return self.state()
        return self.set_rows(rows)

    def set_rows(self, rows: Sequence[RawRow]) -> DashboardData:
        """Replace the raw input and return the (re)derived state."""
        self._rows = rows
        self._load_error = None
        self._loaded = True
        return self.state()

    def state(self) -> DashboardData:
        """Current DashboardData, derived at most once per rows object."""
        if not self._loaded:
            return LOADING
        if self._load_error is not None:
            return DashboardData(error=self._load_error)

        rows = self._rows if self._rows is not None else ()
        if self._memo_state is not None and rows is self._memo_rows:
            return self._memo_state

        state = _derive_state(rows)
        self._memo_rows = rows
        self._memo_state = state
        return state


def _derive_state(rows: Sequence[RawRow]) -> DashboardData:
    if not rows:
        logger.warning("dataset has no rows")
        return DashboardData(error=EmptySeriesError("Dataset contains no episodes"))
    try:
        episodes, summary = derive_series(rows)
    except PodcastDataError as e:
        logger.error(f"failed to derive episode series: {e}")
        return DashboardData(error=e)
    return DashboardData(
        episodes=tuple(episodes),
        summary=summary,
        insights=build_insights(summary),
    )


def episodes_to_frame(episodes: Sequence[EpisodeRecord]) -> pd.DataFrame:
    """One row per episode, one column per EpisodeRecord field."""
    columns = [f.name for f in fields(EpisodeRecord)]
    if not episodes:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([e.to_dict() for e in episodes], columns=columns)
