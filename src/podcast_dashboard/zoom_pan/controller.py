"""Per-axis domain transform controller.

A DomainTransformController turns the chart's pixel-space ZoomTransform into
the visible data domain of one axis, clamped so it never leaves the base
(unzoomed) domain. It is the single owner of that axis' DomainWindow; charts
read ``current_domain`` and register ``on_domain_changed`` handlers.

States:
    IDLE         current domain == base domain, identity transform
    TRANSFORMED  a gesture transform has been applied

``reset()`` and ``set_base_domain()`` always return to IDLE, even mid-gesture.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional

from podcast_dashboard.utils.logging import get_logger
from podcast_dashboard.zoom_pan.domain import (
    Domain,
    DomainWindow,
    LinearScale,
    clamp_domain,
    domains_equal,
    is_valid_domain,
)
from podcast_dashboard.zoom_pan.transform import IDENTITY, ZoomTransform

logger = get_logger(__name__)

DEFAULT_MAX_ZOOM = 12.0

OnDomainChanged = Callable[[Domain], None]


class ControllerState(str, Enum):
    """Lifecycle state of a DomainTransformController."""

    IDLE = "idle"
    TRANSFORMED = "transformed"


class DomainTransformController:
    """Maps gesture transforms to a clamped visible domain for one chart axis.

    Args:
        pixel_range: Pixel interval of the plotting area along this axis,
            e.g. ``(left, width - right)`` for x or ``(height - bottom, top)`` for y.
        base_domain: Full, unzoomed data domain of the axis. A domain with a
            NaN/inf bound or equal bounds disables the controller: it then
            reports the base domain verbatim and ignores gestures.
        max_zoom: Upper bound of the zoom scale factor (lower bound is 1).
        axis: ``"x"`` or ``"y"``; selects which half of the transform applies.
    """

    def __init__(
        self,
        *,
        pixel_range: Domain,
        base_domain: Optional[Domain],
        max_zoom: float = DEFAULT_MAX_ZOOM,
        axis: str = "x",
    ) -> None:
        if axis not in ("x", "y"):
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        if not max_zoom >= 1:
            raise ValueError(f"max_zoom must be >= 1, got {max_zoom!r}")

        self.axis = axis
        self.max_zoom = float(max_zoom)
        self._pixel_range: Domain = (float(pixel_range[0]), float(pixel_range[1]))
        self._base: Optional[Domain] = None
        self._window: Optional[DomainWindow] = None
        self._transform: ZoomTransform = IDENTITY
        self._state = ControllerState.IDLE
        self._domain_changed_handlers: List[OnDomainChanged] = []

        self._install_base(base_domain)

    def __repr__(self) -> str:
        return (
            f"DomainTransformController(axis={self.axis!r}, state={self._state.value}, "
            f"base={self._base}, current={self.current_domain})"
        )

    # ------------- properties -------------

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def active(self) -> bool:
        """False when the base domain is degenerate and gestures are ignored."""
        return self._window is not None

    @property
    def base_domain(self) -> Optional[Domain]:
        return self._base

    @property
    def current_domain(self) -> Optional[Domain]:
        """Currently visible domain (a copy; never the live window)."""
        if self._window is None:
            return self._base
        return self._window.as_tuple()

    @property
    def pixel_range(self) -> Domain:
        return self._pixel_range

    @property
    def transform(self) -> ZoomTransform:
        return self._transform

    @property
    def scale(self) -> LinearScale:
        """Scale for the visible domain, used for rendering."""
        domain = self.current_domain
        if domain is None:
            domain = (0.0, 1.0)
        return LinearScale(domain, self._pixel_range)

    # ------------- event registration -------------

    def on_domain_changed(self, handler: OnDomainChanged) -> None:
        """Register a callback invoked with the new domain whenever it is published."""
        self._domain_changed_handlers.append(handler)

    # ------------- commands -------------

    def set_gesture_transform(self, transform: ZoomTransform) -> bool:
        """Apply the chart's cumulative gesture transform.

        Returns:
            True if a new domain was published.
        """
        if self._window is None or self._base is None:
            return False
        if not transform.is_finite:
            logger.debug(f"{self.axis}: ignoring non-finite transform {transform}")
            return False

        k = min(max(transform.k, 1.0), self.max_zoom)
        transform = transform.scale_to(k)

        base_scale = LinearScale(self._base, self._pixel_range)
        if self.axis == "x":
            candidate = transform.rescale_x(base_scale).domain
        else:
            candidate = transform.rescale_y(base_scale).domain

        clamped = clamp_domain(candidate, self._base)
        if not is_valid_domain(clamped):
            clamped = self._base

        self._transform = transform
        self._state = ControllerState.TRANSFORMED

        if domains_equal(self._window.as_tuple(), clamped):
            return False
        self._window.assign(clamped)
        self._emit()
        return True

    def reset(self) -> None:
        """Snap back to the base domain and the identity transform."""
        self._transform = IDENTITY
        self._state = ControllerState.IDLE
        if self._window is None or self._base is None:
            return
        prev = self._window.as_tuple()
        # exact base, even when prev is within tolerance of it
        self._window.assign(self._base)
        logger.debug(f"{self.axis}: reset to base domain {self._base}")
        if not domains_equal(prev, self._base):
            self._emit()

    def set_base_domain(self, base_domain: Optional[Domain]) -> None:
        """Replace the base domain (new underlying data); always a hard reset."""
        self._install_base(base_domain)
        logger.debug(f"{self.axis}: base domain changed to {self._base}")
        self._emit()

    def set_pixel_range(self, pixel_range: Domain) -> None:
        """Change the plotting range (chart resized); resets the zoom."""
        self._pixel_range = (float(pixel_range[0]), float(pixel_range[1]))
        self.reset()

    # ------------- scale conversion -------------

    def to_pixel(self, value: float) -> float:
        """Data value -> pixel position within the visible domain."""
        return self.scale.to_pixel(value)

    def to_data(self, pixel: float) -> float:
        """Pixel position -> data value within the visible domain."""
        return self.scale.invert(pixel)

    # ------------- internals -------------

    def _install_base(self, base_domain: Optional[Domain]) -> None:
        self._transform = IDENTITY
        self._state = ControllerState.IDLE
        if base_domain is None:
            self._base = None
            self._window = None
            return
        self._base = (base_domain[0], base_domain[1])
        if is_valid_domain(self._base):
            self._window = DomainWindow.from_domain(self._base)
        else:
            logger.debug(f"{self.axis}: degenerate base domain {self._base}, controller disabled")
            self._window = None

    def _emit(self) -> None:
        domain = self.current_domain
        if domain is None:
            return
        for handler in list(self._domain_changed_handlers):
            try:
                handler(domain)
            except Exception:
                logger.exception("Error in domain_changed handler")


def configure(
    *,
    pixel_range: Domain,
    base_domain: Optional[Domain],
    max_zoom: float = DEFAULT_MAX_ZOOM,
    axis: str = "x",
) -> DomainTransformController:
    """Create a controller for one chart axis."""
    return DomainTransformController(
        pixel_range=pixel_range,
        base_domain=base_domain,
        max_zoom=max_zoom,
        axis=axis,
    )
