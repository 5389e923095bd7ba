from __future__ import annotations

from dataclasses import dataclass
import logging
import math

from quickplot.ranges import RangeTracker
from quickplot.transform import ViewportTransform


LOGGER = logging.getLogger(__name__)
# Smallest zoomed-in span, in units of float spacing at the viewport edge.
MIN_SPAN_ULPS = 1000

LEFT_BUTTON = "left"
DEFAULT_ZOOM_BASE = 1.1


@dataclass
class InteractionState:
    dragging: bool = False
    anchor_x: int = 0
    anchor_y: int = 0


class InteractionController:
    """Drag-to-pan and cursor-anchored wheel zoom over a RangeTracker.

    `update_drag` runs before auto-fit each frame (it only tracks the button);
    `apply` runs after the transform has been built and mutates the ranges.
    """

    def __init__(self, ranges: RangeTracker, *, zoom_base: float = DEFAULT_ZOOM_BASE) -> None:
        if zoom_base <= 1.0:
            raise ValueError("zoom_base must be > 1")
        self.ranges = ranges
        self.zoom_base = zoom_base
        self.state = InteractionState()

    @property
    def dragging(self) -> bool:
        return self.state.dragging

    def cancel_drag(self) -> None:
        self.state.dragging = False

    def update_drag(self, mouse_x: int, mouse_y: int, left_down: bool) -> None:
        if left_down:
            if not self.state.dragging:
                self.state = InteractionState(dragging=True, anchor_x=mouse_x, anchor_y=mouse_y)
        else:
            self.state.dragging = False

    def apply(
        self,
        transform: ViewportTransform,
        *,
        mouse_x: int,
        mouse_y: int,
        wheel_delta: float,
        surface_size: tuple[int, int],
    ) -> tuple[ViewportTransform, bool]:
        """Apply pan then zoom; returns the transform to draw with and whether the view moved."""
        changed = False
        if not self.ranges.valid_x:
            # No data and no pinned range: nothing to drag or zoom.
            self.state.dragging = False
            return transform, changed

        width, height = surface_size
        if self.state.dragging:
            transform, moved = self._pan(transform, mouse_x, mouse_y, width, height)
            changed = changed or moved
        if wheel_delta != 0:
            transform, zoomed = self._zoom(transform, mouse_x, mouse_y, wheel_delta, width, height)
            changed = changed or zoomed
        return transform, changed

    def _pan(
        self,
        transform: ViewportTransform,
        mouse_x: int,
        mouse_y: int,
        width: int,
        height: int,
    ) -> tuple[ViewportTransform, bool]:
        screen_dx = self.state.anchor_x - mouse_x
        screen_dy = mouse_y - self.state.anchor_y
        if screen_dx == 0 and screen_dy == 0:
            return transform, False
        dx, dy = transform.pixel_delta_to_data(screen_dx, screen_dy)
        self.ranges.shift(dx, dy)
        self.state.anchor_x = mouse_x
        self.state.anchor_y = mouse_y
        LOGGER.debug("pan by (%g, %g) -> %s", dx, dy, self.ranges.rect)
        return ViewportTransform.build(self.ranges.rect, width, height), True

    def _zoom(
        self,
        transform: ViewportTransform,
        mouse_x: int,
        mouse_y: int,
        wheel_delta: float,
        width: int,
        height: int,
    ) -> tuple[ViewportTransform, bool]:
        # Rescale around the old min first, then shift so the data point under
        # the cursor is the same before and after.
        before_x, before_y = transform.from_screen(mouse_x, mouse_y)
        try:
            scale = self.zoom_base ** (-wheel_delta)
        except OverflowError:
            LOGGER.debug("zoom by wheel delta %g ignored, factor overflows", wheel_delta)
            return transform, False
        xspan = transform.xspan * scale
        yspan = transform.yspan * scale
        zoom_in = scale < 1.0
        if not (
            _usable_span(transform.xmin, xspan, zoom_in=zoom_in)
            and _usable_span(transform.ymin, yspan, zoom_in=zoom_in)
        ):
            LOGGER.debug("zoom by %g ignored, span would collapse or overflow", scale)
            return transform, False
        self.ranges.set_spans(xspan, yspan)

        rescaled = ViewportTransform.build(self.ranges.rect, width, height)
        after_x, after_y = rescaled.from_screen(mouse_x, mouse_y)
        self.ranges.shift(before_x - after_x, before_y - after_y)
        LOGGER.debug("zoom by %g at (%d, %d) -> %s", scale, mouse_x, mouse_y, self.ranges.rect)
        return ViewportTransform.build(self.ranges.rect, width, height), True


def _usable_span(vmin: float, span: float, *, zoom_in: bool = True) -> bool:
    if not (math.isfinite(span) and span > 0 and math.isfinite(vmin + span)):
        return False
    if not zoom_in:
        return True
    # Below this many float steps the axis cannot hold distinct ticks or pixels.
    return span >= MIN_SPAN_ULPS * math.ulp(max(abs(vmin), abs(vmin + span)))
