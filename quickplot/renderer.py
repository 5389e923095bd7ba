from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from quickplot.colors import RGBA, WHITE
from quickplot.ranges import DataRect
from quickplot.series import Series
from quickplot.surface import DrawSurface
from quickplot.ticks import MAX_TICK_PRECISION, TickPlan, format_value, plan_ticks, tick_positions
from quickplot.transform import ViewportTransform


TICK_BEFORE_PX = 3
TICK_AFTER_PX = 4
LABEL_GAP_PX = 5


@dataclass(frozen=True)
class RenderedTicks:
    x_plan: TickPlan | None
    y_plan: TickPlan | None
    x_values: tuple[float, ...]
    y_values: tuple[float, ...]


class FrameRenderer:
    """Draws axes, ticks, series and the cursor readout onto a DrawSurface."""

    def __init__(
        self,
        *,
        axis_color: RGBA = WHITE,
        text_color: RGBA = WHITE,
        max_tick_precision: int = MAX_TICK_PRECISION,
    ) -> None:
        self.axis_color = axis_color
        self.text_color = text_color
        self.max_tick_precision = max_tick_precision

    def draw(
        self,
        surface: DrawSurface,
        transform: ViewportTransform,
        rect: DataRect,
        series: Sequence[Series],
    ) -> RenderedTicks:
        width, height = surface.size()
        x0, y0 = transform.to_screen(0.0, 0.0)
        surface.draw_line(0, y0, width, y0, self.axis_color)
        surface.draw_line(x0, 0, x0, height, self.axis_color)

        x_plan = plan_ticks(transform.xspan, max_precision=self.max_tick_precision)
        y_plan = plan_ticks(transform.yspan, max_precision=self.max_tick_precision)
        x_values = self._draw_x_ticks(surface, transform, rect, x_plan)
        y_values = self._draw_y_ticks(surface, transform, rect, y_plan)

        for s in series:
            self._draw_series(surface, transform, s)

        self._draw_cursor_readout(surface, transform, x_plan.precision, y_plan.precision)
        return RenderedTicks(x_plan=x_plan, y_plan=y_plan, x_values=tuple(x_values), y_values=tuple(y_values))

    def _draw_x_ticks(
        self,
        surface: DrawSurface,
        transform: ViewportTransform,
        rect: DataRect,
        plan: TickPlan,
    ) -> list[float]:
        values = tick_positions(rect.xmin, rect.xmax, plan.step)
        for value in values:
            tick_x, tick_y = transform.to_screen(value, 0.0)
            surface.draw_line(tick_x, tick_y - TICK_BEFORE_PX, tick_x, tick_y + TICK_AFTER_PX, self.axis_color)
            label = format_value(value, plan.precision)
            label_w, _ = surface.text_size(label)
            surface.draw_text(label, tick_x - label_w // 2, tick_y + LABEL_GAP_PX, self.text_color)
        return values

    def _draw_y_ticks(
        self,
        surface: DrawSurface,
        transform: ViewportTransform,
        rect: DataRect,
        plan: TickPlan,
    ) -> list[float]:
        values = tick_positions(rect.ymin, rect.ymax, plan.step)
        for value in values:
            tick_x, tick_y = transform.to_screen(0.0, value)
            surface.draw_line(tick_x - TICK_BEFORE_PX, tick_y, tick_x + TICK_AFTER_PX, tick_y, self.axis_color)
            label = format_value(value, plan.precision)
            label_w, label_h = surface.text_size(label)
            surface.draw_text(label, tick_x - LABEL_GAP_PX - label_w, tick_y - label_h // 2, self.text_color)
        return values

    def _draw_series(self, surface: DrawSurface, transform: ViewportTransform, series: Series) -> None:
        if series.x is None or series.y is None or series.x.size == 0:
            return
        finite = np.isfinite(series.x) & np.isfinite(series.y)
        px, py = transform.to_screen_arrays(np.where(finite, series.x, 0.0), np.where(finite, series.y, 0.0))
        last: tuple[int, int] | None = None
        for i in range(px.size):
            if not finite[i]:
                # Non-finite samples break the polyline; close the open run.
                if last is not None:
                    surface.draw_point(last[0], last[1], series.color)
                last = None
                continue
            point = (int(px[i]), int(py[i]))
            if last is not None:
                surface.draw_line(last[0], last[1], point[0], point[1], series.color)
            last = point
        # draw_line leaves out the end pixel, so the final vertex is drawn explicitly.
        if last is not None:
            surface.draw_point(last[0], last[1], series.color)

    def _draw_cursor_readout(
        self,
        surface: DrawSurface,
        transform: ViewportTransform,
        x_precision: int,
        y_precision: int,
    ) -> None:
        width, height = surface.size()
        mouse_x, mouse_y = surface.mouse_position()
        mx, my = transform.from_screen(mouse_x, mouse_y)
        text = f"{format_value(mx, x_precision + 1)} {format_value(my, y_precision + 1)}"
        text_w, text_h = surface.text_size(text)
        surface.draw_text(text, width - text_w, height - text_h, self.text_color)
