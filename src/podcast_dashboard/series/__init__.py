"""Series derivation engine: podcast metrics rows -> derived episode series."""

from podcast_dashboard.series.data_source import DashboardData, PodcastDataSource, episodes_to_frame
from podcast_dashboard.series.derivation import compute_summary, derive_episodes, derive_series
from podcast_dashboard.series.errors import (
    DatasetLoadError,
    EmptySeriesError,
    MalformedDurationError,
    MalformedNumericFieldError,
    PodcastDataError,
)
from podcast_dashboard.series.insights import build_insights, format_percent
from podcast_dashboard.series.loader import read_dataset
from podcast_dashboard.series.parsing import parse_count, parse_duration, parse_raw_row
from podcast_dashboard.series.records import EpisodeRecord, RawRow, SummaryStatistics
from podcast_dashboard.series.statistics import linear_regression, pearson_correlation

__all__ = [
    "DashboardData",
    "DatasetLoadError",
    "EmptySeriesError",
    "EpisodeRecord",
    "MalformedDurationError",
    "MalformedNumericFieldError",
    "PodcastDataError",
    "PodcastDataSource",
    "RawRow",
    "SummaryStatistics",
    "build_insights",
    "compute_summary",
    "derive_episodes",
    "derive_series",
    "episodes_to_frame",
    "format_percent",
    "linear_regression",
    "parse_count",
    "parse_duration",
    "parse_raw_row",
    "pearson_correlation",
    "read_dataset",
]
