"""Tests for wheel/drag/reset gesture interpretation."""

import math

import pytest

from podcast_dashboard.zoom_pan.gestures import ChartGeometry, Margin, ZoomGestureHandler, wheel_delta
from podcast_dashboard.zoom_pan.transform import IDENTITY, ZoomTransform

CENTER = (338.0, 171.0)


def test_geometry(geometry):
    assert geometry.plot_extent == ((60, 24), (616, 318))
    assert geometry.x_range == (60, 616)
    assert geometry.y_range == (318, 24)
    assert geometry.contains(CENTER)
    assert not geometry.contains((10.0, 10.0))


def test_custom_margin():
    g = ChartGeometry(width=400, height=200, margin=Margin(top=10, right=10, bottom=10, left=10))
    assert g.plot_extent == ((10, 10), (390, 190))


@pytest.mark.parametrize(
    "delta_y, mode, ctrl, expected",
    [(-100, 0, False, 0.2), (100, 0, False, -0.2), (-3, 1, False, 0.15), (-1, 2, False, 1.0), (-100, 0, True, 2.0)],
)
def test_wheel_delta(delta_y, mode, ctrl, expected):
    assert wheel_delta(delta_y, mode, ctrl) == pytest.approx(expected)


def test_wheel_zoom_in_is_anchored_at_pointer(chart):
    gestures, x, y = chart
    published = []
    x.on_domain_changed(published.append)

    assert gestures.wheel(CENTER, -500.0)
    assert gestures.transform.k == pytest.approx(2.0)
    # the data value under the pointer stays put
    assert x.current_domain == pytest.approx((13.25, 37.75))
    assert y.current_domain == pytest.approx((0.25, 0.75))
    assert len(published) == 1


def test_wheel_outside_plot_area_is_ignored(chart):
    gestures, x, _ = chart
    assert not gestures.wheel((10.0, 10.0), -500.0)
    assert gestures.transform is IDENTITY
    assert x.current_domain == (1.0, 50.0)


def test_wheel_zoom_is_limited_to_max_zoom(chart):
    gestures, x, _ = chart
    gestures.wheel(CENTER, -100000.0)
    assert gestures.transform.k == gestures.max_zoom
    lo, hi = x.current_domain
    assert hi - lo == pytest.approx(49.0 / gestures.max_zoom)


def test_wheel_zoom_out_at_identity_does_nothing(chart):
    gestures, x, _ = chart
    assert not gestures.wheel(CENTER, 500.0)
    assert x.current_domain == (1.0, 50.0)


def test_drag_pans_the_view(chart):
    gestures, x, _ = chart
    gestures.wheel(CENTER, -500.0)
    lo, hi = x.current_domain

    assert gestures.drag_start(CENTER)
    assert gestures.dragging
    assert gestures.drag_move((CENTER[0] + 100.0, CENTER[1]))
    gestures.drag_end()
    assert not gestures.dragging

    new_lo, new_hi = x.current_domain
    assert new_lo < lo
    assert new_hi - new_lo == pytest.approx(hi - lo)


def test_drag_at_identity_stays_at_base(chart):
    gestures, x, _ = chart
    gestures.drag_start(CENTER)
    assert not gestures.drag_move((CENTER[0] + 100.0, CENTER[1]))
    assert x.current_domain == (1.0, 50.0)


def test_drag_move_without_start(chart):
    gestures, _, _ = chart
    assert not gestures.drag_move(CENTER)


def test_drag_start_outside_plot_area(chart):
    gestures, _, _ = chart
    assert not gestures.drag_start((5.0, 5.0))
    assert not gestures.dragging


def test_double_click_is_neutral(chart):
    gestures, x, _ = chart
    gestures.wheel(CENTER, -500.0)
    before = (gestures.transform, x.current_domain)
    assert not gestures.double_click(CENTER)
    assert (gestures.transform, x.current_domain) == before


def test_animated_reset_ends_exactly_at_base(chart):
    gestures, x, y = chart
    gestures.wheel(CENTER, -800.0)
    gestures.drag_start(CENTER)
    gestures.drag_move((CENTER[0] + 40.0, CENTER[1] - 20.0))
    gestures.drag_end()

    assert gestures.begin_reset()
    assert gestures.resetting
    assert not gestures.advance_reset(0.5)
    lo, hi = x.current_domain
    assert 1.0 <= lo and hi <= 50.0

    assert gestures.advance_reset(1.0)
    assert not gestures.resetting
    assert gestures.transform is IDENTITY
    assert x.current_domain == (1.0, 50.0)
    assert y.current_domain == (0.0, 1.0)


def test_begin_reset_at_identity(chart):
    gestures, x, _ = chart
    published = []
    x.on_domain_changed(published.append)
    assert not gestures.begin_reset()
    assert not gestures.resetting
    assert published == []
    assert gestures.advance_reset(0.3)


def test_gesture_cancels_reset(chart):
    gestures, _, _ = chart
    gestures.wheel(CENTER, -500.0)
    gestures.begin_reset()
    gestures.advance_reset(0.25)
    gestures.wheel(CENTER, -100.0)
    assert not gestures.resetting
    assert gestures.advance_reset(0.9)


def test_zero_wheel_does_not_cancel_reset(chart):
    gestures, x, _ = chart
    gestures.wheel(CENTER, -500.0)
    gestures.begin_reset()
    gestures.advance_reset(0.25)
    assert not gestures.wheel(CENTER, 0.0)
    assert not gestures.wheel(CENTER, math.nan)
    assert gestures.resetting
    assert gestures.advance_reset(1.0)
    assert x.current_domain == (1.0, 50.0)


def test_immediate_reset(chart):
    gestures, x, y = chart
    gestures.wheel(CENTER, -500.0)
    gestures.reset()
    assert gestures.transform is IDENTITY
    assert x.current_domain == (1.0, 50.0)
    assert y.current_domain == (0.0, 1.0)


def test_set_transform_is_constrained(chart):
    gestures, x, _ = chart
    assert gestures.set_transform(ZoomTransform(k=2.0, x=500.0, y=0.0))
    # pushed back so the left edge of the data meets the left edge of the plot
    assert x.current_domain[0] == pytest.approx(1.0)
    assert not gestures.set_transform(gestures.transform)


def test_invalid_max_zoom(geometry):
    with pytest.raises(ValueError):
        ZoomGestureHandler(geometry, max_zoom=0.5)
