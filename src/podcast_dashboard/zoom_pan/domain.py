"""Data-domain math for zoomable chart axes.

A domain is an order-preserving ``(start, end)`` pair: ``start > end`` is a
descending axis. ``clamp_domain`` keeps a candidate window inside the base
(unzoomed) domain, and ``LinearScale`` maps between a domain and a pixel range.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Optional, Tuple

Domain = Tuple[float, float]

# Bounds closer than this are treated as equal; spans narrower than this are degenerate.
DOMAIN_EPSILON = 1e-6


def is_valid_domain(domain: Optional[Domain]) -> bool:
    """True when both bounds are finite and distinct."""
    if domain is None or len(domain) != 2:
        return False
    start, end = domain
    try:
        start = float(start)
        end = float(end)
    except (TypeError, ValueError):
        return False
    return math.isfinite(start) and math.isfinite(end) and start != end


def domains_equal(a: Optional[Domain], b: Optional[Domain]) -> bool:
    """True when both bounds differ by less than DOMAIN_EPSILON."""
    if a is b:
        return True
    if a is None or b is None:
        return False
    return abs(a[0] - b[0]) < DOMAIN_EPSILON and abs(a[1] - b[1]) < DOMAIN_EPSILON


def clamp_domain(candidate: Optional[Domain], base: Optional[Domain]) -> Optional[Domain]:
    """Clamp a candidate domain into the base domain.

    Steps, on (min, max) normalized copies of both domains:

    1. A candidate at least as wide as the base collapses to the base.
    2. Otherwise the window is translated back inside: shifted right by any
       overflow past the base min, then left by any overflow past the base
       max, and finally both ends are clipped to the base bounds.
    3. A result narrower than DOMAIN_EPSILON returns the base unchanged.

    The base domain's direction (ascending or descending) is re-applied to
    the result. Translating before clipping keeps the window width while
    panning against an edge: ``[-5, 40]`` in ``[1, 50]`` becomes ``[1, 46]``.
    """
    if candidate is None or base is None:
        return candidate if candidate is not None else base

    base_min = min(base[0], base[1])
    base_max = max(base[0], base[1])
    cand_min = min(candidate[0], candidate[1])
    cand_max = max(candidate[0], candidate[1])

    if cand_max - cand_min >= base_max - base_min:
        cand_min, cand_max = base_min, base_max
    else:
        if cand_min < base_min:
            shift = base_min - cand_min
            cand_min += shift
            cand_max += shift
        if cand_max > base_max:
            shift = cand_max - base_max
            cand_min -= shift
            cand_max -= shift
        cand_min = max(base_min, cand_min)
        cand_max = min(base_max, cand_max)

    # NaN spans fail this comparison too
    if not cand_max - cand_min >= DOMAIN_EPSILON:
        return (base[0], base[1])

    if base[1] >= base[0]:
        return (cand_min, cand_max)
    return (cand_max, cand_min)


@dataclass
class DomainWindow:
    """Mutable visible window of one axis.

    Owned by a single DomainTransformController; renderers only ever see the
    tuple returned by ``as_tuple()``.
    """

    start: float
    end: float

    @property
    def span(self) -> float:
        return abs(self.end - self.start)

    def as_tuple(self) -> Domain:
        return (self.start, self.end)

    def assign(self, domain: Domain) -> None:
        self.start, self.end = domain

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_domain(cls, domain: Domain) -> "DomainWindow":
        return cls(start=domain[0], end=domain[1])


class LinearScale:
    """Linear map from a data domain to a pixel range and back.

    A zero-width domain maps every value to the middle of the range, and a
    zero-width range inverts to the middle of the domain.
    """

    def __init__(self, domain: Domain, range_: Domain) -> None:
        self.domain: Domain = (float(domain[0]), float(domain[1]))
        self.range: Domain = (float(range_[0]), float(range_[1]))

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self.range})"

    def __call__(self, value: float) -> float:
        return self.to_pixel(value)

    def to_pixel(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        if span == 0:
            return 0.5 * (r0 + r1)
        return r0 + (value - d0) / span * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = r1 - r0
        if span == 0:
            return 0.5 * (d0 + d1)
        return d0 + (pixel - r0) / span * (d1 - d0)

    to_data = invert

    def with_domain(self, domain: Domain) -> "LinearScale":
        return LinearScale(domain, self.range)
