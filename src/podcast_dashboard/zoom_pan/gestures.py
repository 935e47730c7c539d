"""Gesture interpretation for zoomable charts.

ZoomGestureHandler keeps the chart's cumulative ZoomTransform, turns wheel and
drag events (in chart pixel coordinates) into new transforms, enforces the
scale extent ``[1, max_zoom]`` and the translate extent of the plotting area,
and forwards every transform to the chart's axis controllers.

Double-click is deliberately not a zoom gesture; charts reset through an
explicit control which animates back to the identity transform.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from podcast_dashboard.utils.logging import get_logger
from podcast_dashboard.zoom_pan.controller import DEFAULT_MAX_ZOOM, DomainTransformController
from podcast_dashboard.zoom_pan.domain import Domain
from podcast_dashboard.zoom_pan.transform import (
    IDENTITY,
    Extent,
    Point,
    ZoomTransform,
    anchor_point,
    constrain_transform,
    interpolate_transform,
)

logger = get_logger(__name__)

# Duration of the animated reset, in seconds.
RESET_DURATION_S = 0.2


@dataclass(frozen=True)
class Margin:
    """Chart margins in pixels."""

    top: float = 24
    right: float = 24
    bottom: float = 42
    left: float = 60


@dataclass(frozen=True)
class ChartGeometry:
    """Fixed pixel layout of a chart: outer size plus margins."""

    width: float = 640
    height: float = 360
    margin: Margin = field(default_factory=Margin)

    @property
    def plot_extent(self) -> Extent:
        """Plotting rectangle ``((x0, y0), (x1, y1))`` inside the margins."""
        m = self.margin
        return ((m.left, m.top), (self.width - m.right, self.height - m.bottom))

    @property
    def x_range(self) -> Domain:
        return (self.margin.left, self.width - self.margin.right)

    @property
    def y_range(self) -> Domain:
        # pixel y grows downward, so the range is inverted
        return (self.height - self.margin.bottom, self.margin.top)

    def contains(self, point: Point) -> bool:
        (x0, y0), (x1, y1) = self.plot_extent
        return x0 <= point[0] <= x1 and y0 <= point[1] <= y1


def wheel_delta(delta_y: float, delta_mode: int = 0, ctrl: bool = False) -> float:
    """Convert a DOM wheel delta into a base-2 zoom exponent.

    deltaMode 0 is pixels, 1 is lines, 2 is pages. Ctrl (pinch on trackpads)
    zooms ten times faster.
    """
    if delta_mode == 1:
        factor = 0.05
    elif delta_mode:
        factor = 1.0
    else:
        factor = 0.002
    return -delta_y * factor * (10 if ctrl else 1)


class ZoomGestureHandler:
    """Shared zoom/pan state of one chart, fanned out to its axis controllers.

    Args:
        geometry: Chart pixel layout; the plotting rectangle is both the zoom
            extent and the translate extent.
        controllers: Axis controllers to drive (typically one x controller,
            plus a y controller for scatter charts).
        max_zoom: Largest allowed scale factor.
    """

    def __init__(
        self,
        geometry: ChartGeometry,
        controllers: Iterable[DomainTransformController] = (),
        *,
        max_zoom: float = DEFAULT_MAX_ZOOM,
    ) -> None:
        if not max_zoom >= 1:
            raise ValueError(f"max_zoom must be >= 1, got {max_zoom!r}")
        self.geometry = geometry
        self.max_zoom = float(max_zoom)
        self.controllers: List[DomainTransformController] = list(controllers)

        self._transform: ZoomTransform = IDENTITY
        # pan anchor in untransformed pixels, set while dragging
        self._drag_anchor: Optional[Point] = None
        # transform at the start of an in-flight animated reset
        self._reset_from: Optional[ZoomTransform] = None

    # ------------- properties -------------

    @property
    def transform(self) -> ZoomTransform:
        return self._transform

    @property
    def dragging(self) -> bool:
        return self._drag_anchor is not None

    @property
    def resetting(self) -> bool:
        return self._reset_from is not None

    # ------------- gestures -------------

    def wheel(self, pointer: Point, delta_y: float, *, delta_mode: int = 0, ctrl: bool = False) -> bool:
        """Zoom anchored at ``pointer``. Returns True if the transform changed."""
        if not self.geometry.contains(pointer) or not math.isfinite(delta_y) or delta_y == 0:
            return False
        self._cancel_reset()

        t = self._transform
        k = t.k * 2 ** wheel_delta(delta_y, delta_mode, ctrl)
        k = min(max(k, 1.0), self.max_zoom)
        anchored = anchor_point(t.scale_to(k), pointer, t.invert(pointer))
        return self.set_transform(anchored)

    def drag_start(self, pointer: Point) -> bool:
        """Begin a pan at ``pointer``. Ignored outside the plotting area."""
        if not self.geometry.contains(pointer):
            return False
        self._cancel_reset()
        self._drag_anchor = self._transform.invert(pointer)
        return True

    def drag_move(self, pointer: Point) -> bool:
        """Pan so the point grabbed at drag_start stays under ``pointer``."""
        if self._drag_anchor is None:
            return False
        return self.set_transform(anchor_point(self._transform, pointer, self._drag_anchor))

    def drag_end(self) -> None:
        self._drag_anchor = None

    def double_click(self, pointer: Point) -> bool:
        """Double-click is neutral: it neither zooms nor resets."""
        logger.debug(f"double click at {pointer} ignored")
        return False

    # ------------- transform / reset -------------

    def set_transform(self, transform: ZoomTransform) -> bool:
        """Constrain ``transform`` and push it to every controller."""
        if not transform.is_finite:
            logger.debug(f"ignoring non-finite transform {transform}")
            return False
        k = min(max(transform.k, 1.0), self.max_zoom)
        extent = self.geometry.plot_extent
        constrained = constrain_transform(transform.scale_to(k), extent, extent)
        if constrained == self._transform:
            return False
        self._transform = constrained
        for controller in self.controllers:
            controller.set_gesture_transform(constrained)
        return True

    def reset(self) -> None:
        """Immediately return to the identity transform and the base domains."""
        self._reset_from = None
        self._drag_anchor = None
        self._transform = IDENTITY
        for controller in self.controllers:
            controller.reset()

    def begin_reset(self) -> bool:
        """Start an animated reset. Returns False when already at identity."""
        self._drag_anchor = None
        if self._transform.is_identity:
            self.reset()
            return False
        self._reset_from = self._transform
        return True

    def advance_reset(self, fraction: float) -> bool:
        """Move an animated reset to ``fraction`` of its duration.

        Returns:
            True once the reset is complete (the final step is an exact
            ``reset()`` so every axis reports its base domain bit for bit).
        """
        if self._reset_from is None:
            return True
        if fraction >= 1:
            self.reset()
            return True
        self._transform = interpolate_transform(self._reset_from, IDENTITY, fraction)
        for controller in self.controllers:
            controller.set_gesture_transform(self._transform)
        return False

    def _cancel_reset(self) -> None:
        if self._reset_from is not None:
            logger.debug("gesture interrupted animated reset")
            self._reset_from = None
