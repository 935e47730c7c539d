"""Read the podcast metrics CSV into RawRows.

The file is read with pandas using string dtypes and no NA coercion, so empty
``guest``/``description`` cells stay empty strings and every numeric cell is
validated by parse_raw_row() rather than silently becoming NaN.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

from podcast_dashboard.series.errors import DatasetLoadError
from podcast_dashboard.series.parsing import parse_raw_row
from podcast_dashboard.series.records import CSV_COLUMNS, RawRow
from podcast_dashboard.utils.logging import get_logger

logger = get_logger(__name__)

# Text columns that may be absent from the header.
OPTIONAL_COLUMNS = frozenset({"guest", "description"})


def read_frame(path: Union[str, Path]) -> pd.DataFrame:
    """Read the CSV at ``path`` as an all-string DataFrame.

    Raises:
        DatasetLoadError: If the file is missing, unreadable, not a CSV, or
            lacks a required column.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except FileNotFoundError as e:
        raise DatasetLoadError(f"Dataset not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise DatasetLoadError(f"Dataset is empty: {path}") from e
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise DatasetLoadError(f"Could not read dataset {path}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in CSV_COLUMNS if c not in df.columns and c not in OPTIONAL_COLUMNS]
    if missing:
        raise DatasetLoadError(f"Dataset {path} is missing required column(s): {', '.join(missing)}")
    return df


def rows_from_frame(df: pd.DataFrame) -> list[RawRow]:
    """Parse every record of ``df``; the first malformed row aborts."""
    return [parse_raw_row(record) for record in df.to_dict(orient="records")]


def read_dataset(path: Union[str, Path]) -> list[RawRow]:
    """Load and parse the metrics CSV.

    Raises:
        DatasetLoadError: If the file cannot be read.
        MalformedNumericFieldError: For a bad count or episode cell.
        MalformedDurationError: For a bad duration cell.
    """
    df = read_frame(path)
    rows = rows_from_frame(df)
    logger.info(f"read {len(rows)} rows from {path}")
    return rows
