from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable

from quickplot.config import PlotConfig
from quickplot.errors import PlotDataError, SeriesInputError
from quickplot.interaction import LEFT_BUTTON, InteractionController
from quickplot.ranges import DataRect, RangeTracker, auto_fit
from quickplot.renderer import FrameRenderer, RenderedTicks
from quickplot.series import SeriesBuilder, SeriesStore
from quickplot.surface import DrawSurface
from quickplot.transform import ViewportTransform


LOGGER = logging.getLogger(__name__)

BuildFn = Callable[["PlotSession"], None]


@dataclass(frozen=True)
class FrameReport:
    frame_index: int
    rect: DataRect | None
    used_fallback: bool
    view_changed: bool
    ticks: RenderedTicks | None
    errors: tuple[SeriesInputError, ...]
    close_requested: bool


class PlotSession:
    """State that outlives frames: view range, drag state, fullscreen flag.

    `run_frame` is the only entry point that mutates it from input; the build
    callback talks to it through `new`, `defer`, `reset_ranges` and
    `set_fullscreen`.
    """

    def __init__(self, config: PlotConfig | None = None) -> None:
        self.config = config or PlotConfig()
        self.ranges = RangeTracker()
        self.interaction = InteractionController(self.ranges, zoom_base=self.config.zoom_base)
        self.store = SeriesStore()
        self.fullscreen = False
        self.close_requested = False
        self.frames_rendered = 0
        self._deferred: Callable[[], None] | None = None
        self._renderer = FrameRenderer(
            axis_color=self.config.axis_color,
            text_color=self.config.text_color,
            max_tick_precision=self.config.max_tick_precision,
        )
        xmin, xmax, ymin, ymax = self.config.fallback_rect
        self._fallback_rect = DataRect(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)

    def new(self) -> SeriesBuilder:
        return self.store.new()

    def defer(self, fn: Callable[[], None]) -> None:
        """Run `fn` once after this frame has been drawn."""
        self._deferred = fn

    def reset_ranges(self) -> None:
        self.ranges.reset()
        self.interaction.cancel_drag()

    def set_ranges(self, xmin: float, xmax: float, ymin: float, ymax: float) -> None:
        values = (xmin, xmax, ymin, ymax)
        if not all(math.isfinite(v) for v in values) or not (xmin < xmax and ymin < ymax):
            raise PlotDataError(f"ranges must be finite with positive spans, got {values}")
        self.ranges.set(DataRect(xmin=float(xmin), xmax=float(xmax), ymin=float(ymin), ymax=float(ymax)))
        self.interaction.cancel_drag()

    def set_fullscreen(self, fullscreen: bool) -> None:
        self.fullscreen = bool(fullscreen)
        # The anchor belongs to the old surface size.
        self.interaction.cancel_drag()

    def run_frame(self, surface: DrawSurface, build: BuildFn) -> FrameReport:
        frame_index = self.frames_rendered
        if surface.was_key_pressed(self.config.close_key):
            self.close_requested = True
            return FrameReport(frame_index, None, False, False, None, (), True)
        if surface.was_key_pressed(self.config.fullscreen_key):
            self.set_fullscreen(not self.fullscreen)
        if surface.was_key_pressed(self.config.reset_key):
            LOGGER.info("view range reset to auto-fit")
            self.reset_ranges()

        self.store.clear()
        self._deferred = None
        self._run_build(build)
        surface.set_fullscreen(self.fullscreen)

        series, finalize_errors = self.store.finalize()
        errors = tuple(finalize_errors)
        for err in errors:
            self._handle_series_error(err)

        mouse_x, mouse_y = surface.mouse_position()
        self.interaction.update_drag(mouse_x, mouse_y, surface.is_mouse_down(LEFT_BUTTON))

        if self.ranges.is_unset:
            fitted = auto_fit(
                series,
                margin_ratio=self.config.margin_ratio,
                zero_span_margin=self.config.zero_span_margin,
            )
            if not fitted.is_unset:
                self.ranges.set(fitted)
                LOGGER.debug("auto-fit ranges to %s", fitted)

        width, height = surface.size()
        if width < 2 or height < 2:
            LOGGER.debug("surface %dx%d too small to draw, skipping frame", width, height)
            self.frames_rendered += 1
            return FrameReport(frame_index, None, False, False, None, errors, False)

        used_fallback = self.ranges.is_unset
        rect = self._fallback_rect if used_fallback else self.ranges.rect
        transform = ViewportTransform.build(rect, width, height)
        transform, view_changed = self.interaction.apply(
            transform,
            mouse_x=mouse_x,
            mouse_y=mouse_y,
            wheel_delta=surface.wheel_delta(),
            surface_size=(width, height),
        )
        if view_changed:
            rect = self.ranges.rect

        ticks = self._renderer.draw(surface, transform, rect, series)
        self.frames_rendered += 1

        if self._deferred is not None:
            deferred, self._deferred = self._deferred, None
            deferred()

        return FrameReport(
            frame_index=frame_index,
            rect=rect,
            used_fallback=used_fallback,
            view_changed=view_changed,
            ticks=ticks,
            errors=errors,
            close_requested=False,
        )

    def _run_build(self, build: BuildFn) -> None:
        try:
            build(self)
        except SeriesInputError as exc:
            # The builder already marked the series; finalize reports it.
            if self.config.on_series_error == "raise":
                raise
            LOGGER.debug("build stopped early at series %s", exc.series_index)

    def _handle_series_error(self, exc: SeriesInputError) -> None:
        if self.config.on_series_error == "raise":
            raise exc
        LOGGER.warning("skipping malformed series: %s", exc)
