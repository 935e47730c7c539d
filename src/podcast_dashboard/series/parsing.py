"""Field-level parsing of metrics CSV records.

All coercion happens here, before any derived value is computed, so a bad
field surfaces as a typed error instead of a NaN flowing into the charts.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from podcast_dashboard.series.errors import MalformedDurationError, MalformedNumericFieldError
from podcast_dashboard.series.records import COUNT_COLUMNS, RawRow

_COUNT_RE = re.compile(r"\d+", re.ASCII)
_DURATION_PART_RE = re.compile(r"\d+(\.\d+)?", re.ASCII)


def parse_duration(value: str) -> float:
    """Convert an ``HH:MM:SS`` duration into minutes.

    Components may or may not be zero padded (``"1:2:3"`` is accepted) and
    may carry a decimal fraction. Anything else in a component (a sign, an
    exponent, an underscore) is rejected.

    Args:
        value: Duration string.

    Returns:
        Duration in minutes as a float, e.g. ``"01:23:45"`` -> 83.75.

    Raises:
        MalformedDurationError: If the string does not split into exactly three
            plain decimal components.
    """
    if not isinstance(value, str):
        raise MalformedDurationError(value, "not a string")

    parts = value.strip().split(":")
    if len(parts) != 3:
        raise MalformedDurationError(value, f"expected 3 components, got {len(parts)}")

    numbers = []
    for part in parts:
        if not _DURATION_PART_RE.fullmatch(part):
            raise MalformedDurationError(value, f"component {part!r} is not a plain number")
        numbers.append(float(part))

    hours, minutes, seconds = numbers
    return hours * 60 + minutes + seconds / 60


def parse_count(value: Any, column: str, episode: Optional[object] = None) -> int:
    """Coerce a count field into a non-negative int.

    Raises:
        MalformedNumericFieldError: If the value is not a plain non-negative integer.
    """
    if isinstance(value, bool):
        raise MalformedNumericFieldError(column, value, episode)
    if isinstance(value, int):
        if value < 0:
            raise MalformedNumericFieldError(column, value, episode)
        return value
    if isinstance(value, str):
        text = value.strip()
        if _COUNT_RE.fullmatch(text):
            return int(text)
    raise MalformedNumericFieldError(column, value, episode)


def _text(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    return str(value)


def parse_raw_row(record: Mapping[str, Any]) -> RawRow:
    """Build a RawRow from one CSV record (column name -> cell string).

    ``guest`` and ``description`` may be missing or empty. The duration is
    validated here as well so a malformed row fails at load time.

    Raises:
        MalformedNumericFieldError: For a bad episode number or count column.
        MalformedDurationError: For a bad duration string.
    """
    episode = parse_count(record.get("episode"), "episode")
    counts = {column: parse_count(record.get(column), column, episode) for column in COUNT_COLUMNS}

    duration = _text(record, "duration").strip()
    parse_duration(duration)

    return RawRow(
        episode=episode,
        title=_text(record, "title"),
        description=_text(record, "description"),
        guest=_text(record, "guest"),
        duration=duration,
        **counts,
    )
