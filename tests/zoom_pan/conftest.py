"""Fixtures for zoom/pan controller tests."""

from __future__ import annotations

import pytest

from podcast_dashboard.zoom_pan.controller import DomainTransformController, configure
from podcast_dashboard.zoom_pan.gestures import ChartGeometry, ZoomGestureHandler


@pytest.fixture
def controller() -> DomainTransformController:
    """x controller over episodes 1-50 drawn across 490 pixels."""
    return configure(pixel_range=(0.0, 490.0), base_domain=(1.0, 50.0))


@pytest.fixture
def geometry() -> ChartGeometry:
    """Default 640x360 chart: plotting area (60, 24) - (616, 318)."""
    return ChartGeometry()


@pytest.fixture
def chart(geometry):
    """Gesture handler driving an x controller (1-50) and a y controller (0-1)."""
    x = configure(pixel_range=geometry.x_range, base_domain=(1.0, 50.0), axis="x")
    y = configure(pixel_range=geometry.y_range, base_domain=(0.0, 1.0), axis="y")
    return ZoomGestureHandler(geometry, [x, y]), x, y
