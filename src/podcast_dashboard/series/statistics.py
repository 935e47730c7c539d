"""Small statistics helpers shared by the summary and the scatter charts."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; raises ValueError on an empty input."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        raise ValueError("mean() of an empty sequence")
    return float(arr.sum() / arr.size)


def pearson_correlation(
    series: Sequence[T],
    x_accessor: Callable[[T], float],
    y_accessor: Callable[[T], float],
) -> float:
    """Pearson correlation coefficient between two accessors over a series.

    Returns 0.0 when the series is empty or when either variable has zero
    variance, so the value can go straight into insight text. The result is
    symmetric in x and y and clipped to [-1, 1].
    """
    n = len(series)
    if n == 0:
        return 0.0

    xs = np.asarray([x_accessor(item) for item in series], dtype=float)
    ys = np.asarray([y_accessor(item) for item in series], dtype=float)

    # constant input: mean rounding would otherwise leave tiny residuals
    if np.ptp(xs) == 0 or np.ptp(ys) == 0:
        return 0.0

    dx = xs - xs.sum() / n
    dy = ys - ys.sum() / n
    numerator = float(np.sum(dx * dy))
    denominator = float(np.sqrt(np.sum(dx * dx) * np.sum(dy * dy)))
    if denominator == 0 or not np.isfinite(denominator):
        return 0.0
    return float(np.clip(numerator / denominator, -1.0, 1.0))


def linear_regression(points: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Least-squares line through (x, y) points.

    Returns:
        (slope, intercept). With no x variance the slope is 0 and the
        intercept is the mean of y (0.0 for no points).
    """
    n = len(points)
    if n == 0:
        return 0.0, 0.0

    xs = np.asarray([p[0] for p in points], dtype=float)
    ys = np.asarray([p[1] for p in points], dtype=float)
    sum_x = float(xs.sum())
    sum_y = float(ys.sum())
    sum_xy = float(np.sum(xs * ys))
    sum_xx = float(np.sum(xs * xs))

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return 0.0, sum_y / n
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept
