"""Tests for Plotly figure dict generation."""

import pandas as pd
import pytest

from podcast_dashboard.dashboard.figures import (
    CHART_SPECS,
    ChartFigureBuilder,
    ChartKind,
    HoverPoint,
    SCATTER_GEOMETRY,
    activation_radius,
    nearest_point,
)
from podcast_dashboard.dashboard.theme import ThemeMode
from podcast_dashboard.series.insights import INSIGHT_KEYS
from podcast_dashboard.zoom_pan.domain import LinearScale
from podcast_dashboard.zoom_pan.gestures import ChartGeometry


def test_chart_specs_cover_every_insight():
    assert [spec.kind.value for spec in CHART_SPECS] == list(INSIGHT_KEYS)
    assert {spec.kind for spec in CHART_SPECS if spec.zoom_y} == {
        ChartKind.SHARES_SUBSCRIBERS,
        ChartKind.DURATION_COMPLETION,
    }


def test_builder_rejects_empty_frame(builder):
    with pytest.raises(ValueError):
        ChartFigureBuilder(pd.DataFrame(), builder.summary)


@pytest.mark.parametrize("spec", CHART_SPECS, ids=lambda s: s.kind.value)
def test_make_figure_returns_dict(builder, spec):
    fig = builder.make_figure(spec)
    assert isinstance(fig, dict)
    assert fig["data"]
    layout = fig["layout"]
    assert layout["width"] == spec.geometry.width
    assert layout["height"] == spec.geometry.height
    assert layout["xaxis"]["fixedrange"] is True
    assert layout["yaxis"]["fixedrange"] is True
    base_x, base_y = builder.base_domains(spec.kind)
    assert tuple(layout["xaxis"]["range"]) == pytest.approx(base_x)
    assert tuple(layout["yaxis"]["range"]) == pytest.approx(base_y)


def test_make_figure_uses_visible_domain(builder):
    spec = CHART_SPECS[0]
    fig = builder.make_figure(spec, x_domain=(3.0, 5.5))
    assert tuple(fig["layout"]["xaxis"]["range"]) == (3.0, 5.5)


def test_scatter_trend_line_spans_visible_domain(builder):
    spec = next(s for s in CHART_SPECS if s.kind is ChartKind.SHARES_SUBSCRIBERS)
    fig = builder.make_figure(spec, x_domain=(40.0, 60.0))
    trend = fig["data"][-1]
    assert list(trend["x"]) == [40.0, 60.0]
    # subscribers = (shares - 20) * 2 / 9 + 5 exactly
    assert trend["y"][0] == pytest.approx((40 - 20) * 2 / 9 + 5)


def test_theme_changes_template(builder):
    spec = CHART_SPECS[0]
    light = builder.make_figure(spec)
    builder.theme = ThemeMode.DARK
    dark = builder.make_figure(spec)
    assert light["layout"]["paper_bgcolor"] != dark["layout"]["paper_bgcolor"]


def test_base_domains(builder):
    df = builder.df
    assert builder.base_domains(ChartKind.DOWNLOADS) == (
        (1.0, 8.0),
        (0.0, pytest.approx(float(df["downloads"].max()) * 1.05)),
    )
    assert builder.base_domains(ChartKind.LISTENER_MIX)[1] == (0.0, 1.0)
    lo, hi = builder.base_domains(ChartKind.COMPLETION)[1]
    assert lo <= 0.45 and hi >= 0.95
    x, _ = builder.base_domains(ChartKind.SHARES_SUBSCRIBERS)
    assert x == (29.0, 92.0)


def test_hover_points(builder):
    points = builder.hover_points(ChartKind.DOWNLOADS)
    assert len(points) == 8
    first = points[0]
    assert first.episode == 1
    assert first.y == 1150
    assert first.label.startswith("Episode 1 · Downloads 1,150")
    assert "7-ep avg 1,150" in first.label

    scatter = builder.hover_points(ChartKind.SHARES_SUBSCRIBERS)
    assert (scatter[0].x, scatter[0].y) == (29, 7)


def test_nearest_point():
    points = [HoverPoint(1, 0.0, 0.0, "a"), HoverPoint(2, 10.0, 10.0, "b")]
    x = LinearScale((0.0, 10.0), (0.0, 100.0))
    y = LinearScale((0.0, 10.0), (100.0, 0.0))
    assert nearest_point(points, (95.0, 5.0), x, y, 24).label == "b"
    assert nearest_point(points, (3.0, 97.0), x, y, 24).label == "a"
    assert nearest_point(points, (50.0, 50.0), x, y, 24) is None
    assert nearest_point([], (0.0, 0.0), x, y, 24) is None


def test_activation_radius():
    assert activation_radius(SCATTER_GEOMETRY) == 24.0
    assert activation_radius(ChartGeometry(width=1200, height=800)) == 40.0
