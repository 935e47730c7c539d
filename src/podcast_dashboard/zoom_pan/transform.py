"""Pixel-space zoom transform shared by both axes of a chart.

A ZoomTransform ``(k, x, y)`` maps a pixel point ``p`` to ``p * k + (x, y)``.
Rescaling a base scale through the transform yields the visible data domain:
the pixels of the plotting range are mapped back through the inverse
transform and then through the base scale's inverse.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from podcast_dashboard.zoom_pan.domain import LinearScale

Point = Tuple[float, float]
Extent = Tuple[Point, Point]


@dataclass(frozen=True)
class ZoomTransform:
    """Uniform scale ``k`` followed by a translation ``(x, y)``, in pixels."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        return (point[0] * self.k + self.x, point[1] * self.k + self.y)

    def apply_x(self, x: float) -> float:
        return x * self.k + self.x

    def apply_y(self, y: float) -> float:
        return y * self.k + self.y

    def invert(self, point: Point) -> Point:
        return ((point[0] - self.x) / self.k, (point[1] - self.y) / self.k)

    def invert_x(self, x: float) -> float:
        return (x - self.x) / self.k

    def invert_y(self, y: float) -> float:
        return (y - self.y) / self.k

    def scale_to(self, k: float) -> "ZoomTransform":
        """Same translation, new scale."""
        if k == self.k:
            return self
        return ZoomTransform(k, self.x, self.y)

    def translate_by(self, dx: float, dy: float) -> "ZoomTransform":
        """Translate by ``(dx, dy)`` expressed in untransformed pixels."""
        if dx == 0 and dy == 0:
            return self
        return ZoomTransform(self.k, self.x + self.k * dx, self.y + self.k * dy)

    def rescale_x(self, scale: LinearScale) -> LinearScale:
        r0, r1 = scale.range
        return scale.with_domain((scale.invert(self.invert_x(r0)), scale.invert(self.invert_x(r1))))

    def rescale_y(self, scale: LinearScale) -> LinearScale:
        r0, r1 = scale.range
        return scale.with_domain((scale.invert(self.invert_y(r0)), scale.invert(self.invert_y(r1))))

    @property
    def is_identity(self) -> bool:
        return self.k == 1.0 and self.x == 0.0 and self.y == 0.0

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.k) and math.isfinite(self.x) and math.isfinite(self.y) and self.k > 0


IDENTITY = ZoomTransform()


def anchor_point(transform: ZoomTransform, screen: Point, data: Point) -> ZoomTransform:
    """Translate so the untransformed point ``data`` lands on pixel ``screen``."""
    return ZoomTransform(
        transform.k,
        screen[0] - data[0] * transform.k,
        screen[1] - data[1] * transform.k,
    )


def constrain_transform(transform: ZoomTransform, extent: Extent, translate_extent: Extent) -> ZoomTransform:
    """Keep the viewport extent inside the translate extent.

    If the viewport is larger than the translate extent along an axis, it is
    centred on that axis instead.
    """
    (ex0, ey0), (ex1, ey1) = extent
    (tx0, ty0), (tx1, ty1) = translate_extent

    dx0 = transform.invert_x(ex0) - tx0
    dx1 = transform.invert_x(ex1) - tx1
    dy0 = transform.invert_y(ey0) - ty0
    dy1 = transform.invert_y(ey1) - ty1

    if dx1 > dx0:
        tx = (dx0 + dx1) / 2
    else:
        tx = min(0.0, dx0) or max(0.0, dx1)
    if dy1 > dy0:
        ty = (dy0 + dy1) / 2
    else:
        ty = min(0.0, dy0) or max(0.0, dy1)

    return transform.translate_by(tx, ty)


def interpolate_transform(start: ZoomTransform, end: ZoomTransform, t: float) -> ZoomTransform:
    """Blend two transforms at ``t`` in [0, 1].

    The scale is interpolated geometrically and the view centre linearly, so a
    zoom-out animation moves at a steady perceived speed. ``t >= 1`` returns
    ``end`` exactly.
    """
    if t <= 0:
        return start
    if t >= 1:
        return end
    k = start.k * (end.k / start.k) ** t
    # translation per unit scale is the (negated) view origin in base pixels
    ox = start.x / start.k + (end.x / end.k - start.x / start.k) * t
    oy = start.y / start.k + (end.y / end.k - start.y / start.k) * t
    return ZoomTransform(k, ox * k, oy * k)
