"""Plotly figure generation for the six dashboard charts.

ChartFigureBuilder turns the derived episode frame into Plotly figure dicts
(never go.Figure) for ``ui.plotly`` / ``update_figure``. Each figure is drawn
inside the visible domains published by the chart's axis controllers, so the
builder only needs the base domains (to configure the controllers) and the
current domains (to render).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Union

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from podcast_dashboard.dashboard.theme import (
    ACCENT_COLOR,
    NEW_FILL,
    PRIMARY_COLOR,
    PRIMARY_FILL,
    RETURNING_FILL,
    SECONDARY_COLOR,
    ThemeMode,
    get_grid_color,
    get_theme_colors,
    get_theme_template,
    resolve_theme,
)
from podcast_dashboard.series.records import SummaryStatistics
from podcast_dashboard.series.statistics import linear_regression
from podcast_dashboard.utils.logging import get_logger
from podcast_dashboard.zoom_pan.domain import Domain
from podcast_dashboard.zoom_pan.gestures import ChartGeometry, Margin

logger = get_logger(__name__)

TIME_SERIES_GEOMETRY = ChartGeometry(width=640, height=360, margin=Margin(top=24, right=24, bottom=42, left=60))
SCATTER_GEOMETRY = ChartGeometry(width=640, height=360, margin=Margin(top=24, right=32, bottom=52, left=68))


class ChartKind(str, Enum):
    """The six dashboard charts; values double as insight keys."""

    DOWNLOADS = "downloads"
    COMPLETION = "completion"
    LISTENER_MIX = "listener_mix"
    SUBSCRIBER_GROWTH = "subscriber_growth"
    SHARES_SUBSCRIBERS = "shares_to_subs"
    DURATION_COMPLETION = "duration"


@dataclass(frozen=True)
class ChartSpec:
    """Static description of one chart card."""

    kind: ChartKind
    title: str
    description: str
    legend: tuple[tuple[str, str], ...] = ()  # (label, color)
    geometry: ChartGeometry = field(default_factory=lambda: TIME_SERIES_GEOMETRY)
    zoom_y: bool = False  # scatter charts zoom both axes


CHART_SPECS: tuple[ChartSpec, ...] = (
    ChartSpec(
        kind=ChartKind.DOWNLOADS,
        title="Downloads Momentum",
        description=(
            "Episode downloads continue to climb; the rolling average smooths the growth "
            "trend and highlights seasonal dips you can prep for."
        ),
        legend=(("Episode downloads", PRIMARY_COLOR), ("7-episode moving average", SECONDARY_COLOR)),
    ),
    ChartSpec(
        kind=ChartKind.COMPLETION,
        title="Completion Rate",
        description="Share of downloads that were listened to the end, with a 7-episode rolling average.",
        legend=(
            ("Completion rate", PRIMARY_COLOR),
            ("7-episode moving average", SECONDARY_COLOR),
            ("Catalog average", ACCENT_COLOR),
        ),
    ),
    ChartSpec(
        kind=ChartKind.LISTENER_MIX,
        title="Listener Mix",
        description="Returning versus new listeners as a share of each episode's audience.",
        legend=(("Returning listeners", RETURNING_FILL), ("New listeners", NEW_FILL)),
    ),
    ChartSpec(
        kind=ChartKind.SUBSCRIBER_GROWTH,
        title="Subscriber Growth",
        description="Cumulative subscribers gained across the catalog.",
        legend=(("Cumulative subscribers", PRIMARY_COLOR),),
    ),
    ChartSpec(
        kind=ChartKind.SHARES_SUBSCRIBERS,
        title="Shares vs. Subscribers",
        description="Does social sharing convert into subscribers? Each point is one episode.",
        legend=(("Episode", PRIMARY_COLOR), ("Trend line", ACCENT_COLOR)),
        geometry=SCATTER_GEOMETRY,
        zoom_y=True,
    ),
    ChartSpec(
        kind=ChartKind.DURATION_COMPLETION,
        title="Duration vs. Completion",
        description="How episode length relates to the share of listeners who finish.",
        legend=(("Episode", PRIMARY_COLOR), ("Trend line", ACCENT_COLOR)),
        geometry=SCATTER_GEOMETRY,
        zoom_y=True,
    ),
)


@dataclass(frozen=True)
class HoverPoint:
    """One hoverable data point and its tooltip text."""

    episode: int
    x: float
    y: float
    label: str


def _extent(values: pd.Series) -> Domain:
    return (float(values.min()), float(values.max()))


def _completion_domain(rates: pd.Series) -> Domain:
    return (min(0.45, float(rates.min()) - 0.02), max(0.95, float(rates.max()) + 0.02))


def nearest_point(
    points: Sequence[HoverPoint],
    pointer: tuple[float, float],
    to_pixel_x: Callable[[float], float],
    to_pixel_y: Callable[[float], float],
    radius: float,
) -> Optional[HoverPoint]:
    """Closest point to ``pointer`` (in pixels) within ``radius``, else None."""
    best: Optional[HoverPoint] = None
    best_distance = math.inf
    for point in points:
        distance = math.hypot(to_pixel_x(point.x) - pointer[0], to_pixel_y(point.y) - pointer[1])
        if distance < best_distance:
            best, best_distance = point, distance
    if best is None or best_distance > radius:
        return None
    return best


def activation_radius(geometry: ChartGeometry) -> float:
    """Hover radius in pixels: 5% of the smaller chart side, at least 24."""
    return max(24.0, min(geometry.width, geometry.height) * 0.05)


class ChartFigureBuilder:
    """Builds Plotly figure dicts for the dashboard charts.

    Attributes:
        df: Episode frame from ``episodes_to_frame()``, sorted by episode.
        summary: Summary statistics of the same series.
        theme: Current theme mode.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        summary: SummaryStatistics,
        *,
        theme: Union[str, ThemeMode] = ThemeMode.LIGHT,
    ) -> None:
        if df.empty:
            raise ValueError("ChartFigureBuilder needs at least one episode")
        self.df = df
        self.summary = summary
        self.theme = resolve_theme(theme)

    # ------------- domains -------------

    def base_domains(self, kind: ChartKind) -> tuple[Domain, Domain]:
        """Full (unzoomed) x and y domains of a chart."""
        df = self.df
        if kind is ChartKind.SHARES_SUBSCRIBERS:
            return _extent(df["social_media_shares"]), (0.0, float(df["subscribers_gained"].max()) * 1.1)
        if kind is ChartKind.DURATION_COMPLETION:
            return _extent(df["duration_minutes"]), _completion_domain(df["completion_rate"])

        x_domain = _extent(df["episode"])
        if kind is ChartKind.DOWNLOADS:
            return x_domain, (0.0, float(df["downloads"].max()) * 1.05)
        if kind is ChartKind.COMPLETION:
            return x_domain, _completion_domain(df["completion_rate"])
        if kind is ChartKind.LISTENER_MIX:
            return x_domain, (0.0, 1.0)
        if kind is ChartKind.SUBSCRIBER_GROWTH:
            return x_domain, (0.0, float(df["cumulative_subscribers"].max()) * 1.05)
        raise ValueError(f"Unknown chart kind: {kind!r}")

    # ------------- hover -------------

    def hover_points(self, kind: ChartKind) -> list[HoverPoint]:
        """Hoverable points of a chart, in data coordinates."""
        points = []
        for row in self.df.itertuples(index=False):
            ep = int(row.episode)
            if kind is ChartKind.DOWNLOADS:
                points.append(HoverPoint(ep, ep, row.downloads,
                    f"Episode {ep} · Downloads {row.downloads:,} · 7-ep avg {int(round(row.downloads_rolling)):,}"))
            elif kind is ChartKind.COMPLETION:
                points.append(HoverPoint(ep, ep, row.completion_rate,
                    f"Episode {ep} · Completion {row.completion_rate:.1%} · 7-ep avg {row.completion_rolling:.1%}"))
            elif kind is ChartKind.LISTENER_MIX:
                points.append(HoverPoint(ep, ep, row.returning_listener_ratio,
                    f"Episode {ep} · New {row.new_listener_ratio:.1%} · Returning {row.returning_listener_ratio:.1%}"
                    f" · Total {row.listeners_total:,}"))
            elif kind is ChartKind.SUBSCRIBER_GROWTH:
                points.append(HoverPoint(ep, ep, row.cumulative_subscribers,
                    f"Episode {ep} · Total subscribers {row.cumulative_subscribers:,}"
                    f" · Gained {row.subscribers_gained:,}"))
            elif kind is ChartKind.SHARES_SUBSCRIBERS:
                points.append(HoverPoint(ep, row.social_media_shares, row.subscribers_gained,
                    f"Episode {ep} · {row.title} · Shares {row.social_media_shares:,}"
                    f" · Subscribers {row.subscribers_gained:,}"))
            elif kind is ChartKind.DURATION_COMPLETION:
                points.append(HoverPoint(ep, row.duration_minutes, row.completion_rate,
                    f"Episode {ep} · {row.duration_minutes:.1f} min · Completion {row.completion_rate:.1%}"))
        return points

    # ------------- figures -------------

    def make_figure(
        self,
        spec: ChartSpec,
        x_domain: Optional[Domain] = None,
        y_domain: Optional[Domain] = None,
    ) -> dict:
        """Figure dict for ``spec`` drawn within the given visible domains.

        Missing domains default to the chart's base domains.
        """
        base_x, base_y = self.base_domains(spec.kind)
        x_domain = x_domain if x_domain is not None else base_x
        y_domain = y_domain if y_domain is not None else base_y

        logger.debug(f"make_figure: kind={spec.kind.value}, x={x_domain}, y={y_domain}")

        fig = go.Figure()
        kind = spec.kind
        if kind is ChartKind.DOWNLOADS:
            self._downloads_traces(fig)
        elif kind is ChartKind.COMPLETION:
            self._completion_traces(fig)
        elif kind is ChartKind.LISTENER_MIX:
            self._listener_mix_traces(fig)
        elif kind is ChartKind.SUBSCRIBER_GROWTH:
            self._subscriber_traces(fig)
        elif kind is ChartKind.SHARES_SUBSCRIBERS:
            self._scatter_traces(fig, "social_media_shares", "subscribers_gained", x_domain)
        elif kind is ChartKind.DURATION_COMPLETION:
            self._scatter_traces(fig, "duration_minutes", "completion_rate", x_domain)
        else:
            raise ValueError(f"Unknown chart kind: {kind!r}")

        self._apply_layout(fig, spec, x_domain, y_domain)
        return fig.to_dict()

    def _line(self, fig: go.Figure, column: str, color: str, *, fill: Optional[str] = None, width: float = 2) -> None:
        fig.add_trace(
            go.Scatter(
                x=self.df["episode"].tolist(),
                y=self.df[column].tolist(),
                mode="lines",
                line=dict(color=color, width=width, shape="spline"),
                fill="tozeroy" if fill else None,
                fillcolor=fill,
                name=column,
            )
        )

    def _downloads_traces(self, fig: go.Figure) -> None:
        self._line(fig, "downloads", PRIMARY_COLOR, fill=PRIMARY_FILL)
        self._line(fig, "downloads_rolling", SECONDARY_COLOR, width=2.5)
        latest = self.summary.latest_episode
        fig.add_trace(
            go.Scatter(
                x=[latest.episode],
                y=[latest.downloads],
                mode="markers",
                marker=dict(size=10, color=ACCENT_COLOR),
                name="latest",
            )
        )
        fig.add_annotation(
            x=latest.episode,
            y=latest.downloads,
            text=f"{latest.downloads:,} downloads",
            showarrow=False,
            xanchor="right",
            yshift=14,
        )

    def _completion_traces(self, fig: go.Figure) -> None:
        self._line(fig, "completion_rate", PRIMARY_COLOR)
        self._line(fig, "completion_rolling", SECONDARY_COLOR, width=2.5)
        average = self.summary.average_completion_rate
        fig.add_hline(
            y=average,
            line_dash="dash",
            line_color=ACCENT_COLOR,
            annotation_text=f"Avg {average:.1%}",
            annotation_position="top left",
        )

    def _listener_mix_traces(self, fig: go.Figure) -> None:
        episodes = self.df["episode"].tolist()
        for column, color in (("returning_listener_ratio", RETURNING_FILL), ("new_listener_ratio", NEW_FILL)):
            fig.add_trace(
                go.Scatter(
                    x=episodes,
                    y=self.df[column].tolist(),
                    mode="lines",
                    line=dict(width=0.5, color=color, shape="spline"),
                    fillcolor=color,
                    stackgroup="mix",
                    name=column,
                )
            )

    def _subscriber_traces(self, fig: go.Figure) -> None:
        self._line(fig, "cumulative_subscribers", PRIMARY_COLOR, fill=PRIMARY_FILL)

    def _scatter_traces(self, fig: go.Figure, xcol: str, ycol: str, x_domain: Domain) -> None:
        xs = self.df[xcol].to_numpy(dtype=float)
        ys = self.df[ycol].to_numpy(dtype=float)
        fig.add_trace(
            go.Scatter(
                x=xs.tolist(),
                y=ys.tolist(),
                mode="markers",
                marker=dict(size=9, color=PRIMARY_COLOR, line=dict(width=1, color=SECONDARY_COLOR)),
                name=ycol,
            )
        )

        slope, intercept = linear_regression(list(zip(xs.tolist(), ys.tolist())))
        line_x = [x_domain[0], x_domain[1]]
        fig.add_trace(
            go.Scatter(
                x=line_x,
                y=[slope * x + intercept for x in line_x],
                mode="lines",
                line=dict(color=ACCENT_COLOR, width=2, dash="dash"),
                name="trend",
            )
        )

        top = int(np.argmax(xs))
        fig.add_annotation(
            x=float(xs[top]),
            y=float(ys[top]),
            text=f"Ep {int(self.df['episode'].iloc[top])}",
            showarrow=True,
            arrowhead=0,
            ax=-30,
            ay=-24,
        )

    def _apply_layout(self, fig: go.Figure, spec: ChartSpec, x_domain: Domain, y_domain: Domain) -> None:
        bg_color, fg_color = get_theme_colors(self.theme)
        grid_color = get_grid_color(self.theme)
        geometry = spec.geometry
        m = geometry.margin

        xaxis = dict(
            range=[x_domain[0], x_domain[1]],
            fixedrange=True,
            color=fg_color,
            gridcolor=grid_color,
            zeroline=False,
        )
        yaxis = dict(
            range=[y_domain[0], y_domain[1]],
            fixedrange=True,
            color=fg_color,
            gridcolor=grid_color,
            zeroline=False,
        )

        if spec.kind is ChartKind.SHARES_SUBSCRIBERS:
            xaxis["title"] = "Social media shares"
            yaxis["title"] = "Subscribers gained"
        elif spec.kind is ChartKind.DURATION_COMPLETION:
            xaxis["title"] = "Duration (minutes)"
            yaxis["title"] = "Completion rate"
            yaxis["tickformat"] = ".0%"
        else:
            xaxis["tickprefix"] = "Ep "
            if spec.kind in (ChartKind.COMPLETION, ChartKind.LISTENER_MIX):
                yaxis["tickformat"] = ".0%"
            if spec.kind is ChartKind.LISTENER_MIX:
                yaxis["tickvals"] = [0, 0.25, 0.5, 0.75, 1]

        fig.update_layout(
            template=get_theme_template(self.theme),
            paper_bgcolor=bg_color,
            plot_bgcolor=bg_color,
            font=dict(color=fg_color),
            width=geometry.width,
            height=geometry.height,
            autosize=False,
            margin=dict(l=m.left, r=m.right, t=m.top, b=m.bottom),
            xaxis=xaxis,
            yaxis=yaxis,
            showlegend=False,
            hovermode=False,
            dragmode=False,
        )
