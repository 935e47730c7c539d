"""Zoom/pan domain transform controllers for chart axes."""

from podcast_dashboard.zoom_pan.controller import (
    DEFAULT_MAX_ZOOM,
    ControllerState,
    DomainTransformController,
    configure,
)
from podcast_dashboard.zoom_pan.domain import (
    DOMAIN_EPSILON,
    Domain,
    DomainWindow,
    LinearScale,
    clamp_domain,
    domains_equal,
    is_valid_domain,
)
from podcast_dashboard.zoom_pan.gestures import ChartGeometry, Margin, ZoomGestureHandler
from podcast_dashboard.zoom_pan.transform import IDENTITY, ZoomTransform

__all__ = [
    "DEFAULT_MAX_ZOOM",
    "DOMAIN_EPSILON",
    "ChartGeometry",
    "ControllerState",
    "Domain",
    "DomainTransformController",
    "DomainWindow",
    "IDENTITY",
    "LinearScale",
    "Margin",
    "ZoomGestureHandler",
    "ZoomTransform",
    "clamp_domain",
    "configure",
    "domains_equal",
    "is_valid_domain",
]
