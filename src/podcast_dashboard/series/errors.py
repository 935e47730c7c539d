"""Error kinds raised while loading and deriving the episode series.

Every error aborts the whole batch. There is no per-row skip, because a
dropped episode would corrupt the cumulative and rolling values of every
episode after it.
"""

from __future__ import annotations

from typing import Optional


class PodcastDataError(ValueError):
    """Base class for all dataset and derivation errors."""


class MalformedDurationError(PodcastDataError):
    """A duration string is not a valid ``HH:MM:SS`` value."""

    def __init__(self, value: object, reason: str = "expected HH:MM:SS") -> None:
        self.value = value
        super().__init__(f"Malformed duration {value!r}: {reason}")


class MalformedNumericFieldError(PodcastDataError):
    """A required numeric column holds a non-numeric or negative value."""

    def __init__(self, column: str, value: object, episode: Optional[object] = None) -> None:
        self.column = column
        self.value = value
        self.episode = episode
        where = f" (episode {episode})" if episode is not None else ""
        super().__init__(
            f"Column {column!r} must be a non-negative integer, got {value!r}{where}"
        )


class EmptySeriesError(PodcastDataError):
    """The series has no usable rows, so no summary can be computed."""


class DatasetLoadError(PodcastDataError):
    """The dataset could not be read at all."""
