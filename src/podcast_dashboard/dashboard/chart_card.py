"""NiceGUI card hosting one zoomable dashboard chart.

The card renders a Plotly figure with every built-in Plotly interaction
disabled and lays a transparent overlay over the plotting rectangle. Wheel,
drag and double-click events from the overlay go to a ZoomGestureHandler,
which drives one DomainTransformController per zoomable axis. Whenever a
controller publishes a new visible domain the figure is rebuilt for that
domain and pushed with ``update_figure``.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from nicegui import events, ui

from podcast_dashboard.dashboard.figures import (
    ChartFigureBuilder,
    ChartSpec,
    activation_radius,
    nearest_point,
)
from podcast_dashboard.dashboard.theme import ThemeMode, resolve_theme
from podcast_dashboard.utils.logging import get_logger
from podcast_dashboard.zoom_pan.controller import DEFAULT_MAX_ZOOM, DomainTransformController, configure
from podcast_dashboard.zoom_pan.domain import Domain, LinearScale
from podcast_dashboard.zoom_pan.gestures import RESET_DURATION_S, ZoomGestureHandler

logger = get_logger(__name__)

RESET_FRAME_S = 0.02
PLOT_CONFIG = {"displayModeBar": False, "doubleClick": False, "scrollZoom": False, "staticPlot": True}


def _number(args: dict, key: str, default: float = 0.0) -> float:
    value = args.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


class ChartCard:
    """One chart card: title, description, legend, zoomable plot and insight.

    Args:
        spec: Static chart description.
        builder: Figure builder for the current episode series.
        insight: Insight sentence shown under the chart.
        max_zoom: Largest allowed scale factor.
        parent: Optional container; a new card is created inside it.
    """

    def __init__(
        self,
        spec: ChartSpec,
        builder: ChartFigureBuilder,
        *,
        insight: Optional[str] = None,
        max_zoom: float = DEFAULT_MAX_ZOOM,
        parent=None,
    ) -> None:
        self.spec = spec
        self.builder = builder
        self.geometry = spec.geometry

        base_x, base_y = builder.base_domains(spec.kind)
        self.x_controller = configure(
            pixel_range=self.geometry.x_range, base_domain=base_x, max_zoom=max_zoom, axis="x"
        )
        self.y_controller: Optional[DomainTransformController] = None
        controllers = [self.x_controller]
        if spec.zoom_y:
            self.y_controller = configure(
                pixel_range=self.geometry.y_range, base_domain=base_y, max_zoom=max_zoom, axis="y"
            )
            controllers.append(self.y_controller)
        self._fixed_y_scale = LinearScale(base_y, self.geometry.y_range)

        self.gestures = ZoomGestureHandler(self.geometry, controllers, max_zoom=max_zoom)
        self._hover_points = builder.hover_points(spec.kind)
        self._radius = activation_radius(self.geometry)

        # set by domain_changed handlers, cleared by _flush()
        self._dirty = False
        for controller in controllers:
            controller.on_domain_changed(self._on_domain_changed)

        self._reset_timer: Optional[ui.timer] = None
        self._reset_started: float = 0.0

        container = parent if parent is not None else ui.element("div")
        with container:
            self._build(insight)

        logger.debug(
            f"ChartCard initialized: kind={spec.kind.value}, x={base_x}, y={base_y}, zoom_y={spec.zoom_y}"
        )

    # ------------- properties -------------

    @property
    def x_domain(self) -> Optional[Domain]:
        return self.x_controller.current_domain

    @property
    def y_domain(self) -> Optional[Domain]:
        if self.y_controller is None:
            return self._fixed_y_scale.domain
        return self.y_controller.current_domain

    # ------------- public API -------------

    def set_theme(self, theme: ThemeMode | str) -> None:
        """Re-render the chart in ``theme``."""
        self.builder.theme = resolve_theme(theme)
        self._dirty = True
        self._flush()

    def reset_zoom(self) -> None:
        """Animate back to the full data extent."""
        self._cancel_reset_timer()
        if not self.gestures.begin_reset():
            self._flush()
            return
        self._reset_started = time.monotonic()
        self._reset_timer = ui.timer(RESET_FRAME_S, self._on_reset_frame)

    def figure(self) -> dict:
        """Figure dict for the currently visible domains."""
        fig = self.builder.make_figure(self.spec, self.x_domain, self.y_domain)
        fig["config"] = dict(PLOT_CONFIG)
        return fig

    # ------------- UI -------------

    def _build(self, insight: Optional[str]) -> None:
        g = self.geometry
        m = g.margin
        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-start justify-between no-wrap"):
                with ui.column().classes("gap-1"):
                    ui.label(self.spec.title).classes("text-lg font-semibold")
                    ui.label(self.spec.description).classes("text-sm opacity-80")
                ui.button("Reset zoom", icon="zoom_out_map", on_click=self.reset_zoom).props("flat")

            with ui.row().classes("items-center gap-4"):
                for label, color in self.spec.legend:
                    with ui.row().classes("items-center gap-1"):
                        ui.element("span").style(
                            f"display:inline-block; width:12px; height:12px; border-radius:3px; background:{color};"
                        )
                        ui.label(label).classes("text-xs")

            with ui.element("div").style(f"position: relative; width: {g.width}px; height: {g.height}px;"):
                self.plot = ui.plotly(self.figure()).style(f"width: {g.width}px; height: {g.height}px;")
                x0, y0, x1, y1 = m.left, m.top, g.width - m.right, g.height - m.bottom
                self.overlay = ui.element("div").style(
                    f"position: absolute; left: {x0}px; top: {y0}px; width: {x1 - x0}px; "
                    f"height: {y1 - y0}px; cursor: grab; background: transparent;"
                )

            self.hover_label = ui.label("").classes("text-xs opacity-80").style("min-height: 1.25rem;")
            if insight:
                ui.label(insight).classes("text-sm italic")

        pointer_args = ["offsetX", "offsetY", "buttons"]
        self.overlay.on(
            "wheel.prevent", self._on_wheel, pointer_args + ["deltaY", "deltaMode", "ctrlKey"]
        )
        self.overlay.on("mousedown", self._on_mousedown, pointer_args)
        self.overlay.on("mousemove", self._on_mousemove, pointer_args, throttle=0.02)
        self.overlay.on("mouseup", self._on_mouseup, pointer_args)
        self.overlay.on("mouseleave", self._on_mouseleave, pointer_args)
        self.overlay.on("dblclick", self._on_dblclick, pointer_args)

    # ------------- events -------------

    def _pointer(self, args: dict) -> tuple[float, float]:
        """Overlay offset -> chart pixel coordinates."""
        m = self.geometry.margin
        return (m.left + _number(args, "offsetX"), m.top + _number(args, "offsetY"))

    def _on_wheel(self, e: events.GenericEventArguments) -> None:
        args = e.args or {}
        changed = self.gestures.wheel(
            self._pointer(args),
            _number(args, "deltaY"),
            delta_mode=int(_number(args, "deltaMode")),
            ctrl=bool(args.get("ctrlKey", False)),
        )
        self._sync_reset_timer()
        if changed:
            self._flush()

    def _on_mousedown(self, e: events.GenericEventArguments) -> None:
        started = self.gestures.drag_start(self._pointer(e.args or {}))
        self._sync_reset_timer()
        if started:
            self.hover_label.set_text("")

    def _on_mousemove(self, e: events.GenericEventArguments) -> None:
        args = e.args or {}
        pointer = self._pointer(args)
        if self.gestures.dragging:
            if not int(_number(args, "buttons")):
                # button released outside the overlay
                self.gestures.drag_end()
            elif self.gestures.drag_move(pointer):
                self._flush()
            return
        self._update_hover(pointer)

    def _on_mouseup(self, e: events.GenericEventArguments) -> None:
        self.gestures.drag_end()

    def _on_mouseleave(self, e: events.GenericEventArguments) -> None:
        self.gestures.drag_end()
        self.hover_label.set_text("")

    def _on_dblclick(self, e: events.GenericEventArguments) -> None:
        self.gestures.double_click(self._pointer(e.args or {}))

    def _on_domain_changed(self, domain: Any) -> None:
        self._dirty = True

    def _on_reset_frame(self) -> None:
        fraction = (time.monotonic() - self._reset_started) / RESET_DURATION_S
        done = self.gestures.advance_reset(fraction)
        self._flush()
        if done:
            self._cancel_reset_timer()

    # ------------- internals -------------

    def _update_hover(self, pointer: tuple[float, float]) -> None:
        y_to_pixel = self.y_controller.to_pixel if self.y_controller is not None else self._fixed_y_scale
        point = nearest_point(self._hover_points, pointer, self.x_controller.to_pixel, y_to_pixel, self._radius)
        self.hover_label.set_text(point.label if point is not None else "")

    def _cancel_reset_timer(self) -> None:
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None

    def _sync_reset_timer(self) -> None:
        """Stop the reset timer once a gesture has taken over from the animation."""
        if not self.gestures.resetting:
            self._cancel_reset_timer()

    def _flush(self) -> None:
        if not self._dirty:
            return
        self._dirty = False
        self.plot.update_figure(self.figure())
