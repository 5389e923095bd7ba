from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from quickplot.errors import ViewportError
from quickplot.ranges import DataRect


# Far off-screen points are pinned here so int64 pixel math cannot overflow.
SCREEN_LIMIT_PX = float(1 << 30)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (not banker's rounding)."""
    if value < 0:
        return int(math.ceil(value - 0.5))
    return int(math.floor(value + 0.5))


def round_half_away_array(values: np.ndarray) -> np.ndarray:
    return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)


@dataclass(frozen=True)
class ViewportTransform:
    """Affine mapping between a data rectangle and a pixel surface.

    Pixel rows grow downward while data y grows upward, so the y axis is
    flipped around the last pixel row.
    """

    xmin: float
    ymin: float
    xspan: float
    yspan: float
    x_to_screen: float
    y_to_screen: float
    x_from_screen: float
    y_from_screen: float
    width: int
    height: int

    @classmethod
    def build(cls, rect: DataRect, width: int, height: int) -> "ViewportTransform":
        if width < 2 or height < 2:
            raise ViewportError(f"surface must be at least 2x2 pixels, got {width}x{height}")
        xspan = rect.xmax - rect.xmin
        yspan = rect.ymax - rect.ymin
        if not (math.isfinite(xspan) and math.isfinite(yspan)) or xspan <= 0 or yspan <= 0:
            raise ViewportError(f"data rectangle must have finite positive spans, got {rect}")
        x_to_screen = float(width - 1) / xspan
        y_to_screen = float(height - 1) / yspan
        return cls(
            xmin=rect.xmin,
            ymin=rect.ymin,
            xspan=xspan,
            yspan=yspan,
            x_to_screen=x_to_screen,
            y_to_screen=y_to_screen,
            x_from_screen=1.0 / x_to_screen,
            y_from_screen=1.0 / y_to_screen,
            width=width,
            height=height,
        )

    def to_screen(self, x: float, y: float) -> tuple[int, int]:
        sx = round_half_away((x - self.xmin) * self.x_to_screen)
        sy = self.height - 1 - round_half_away((y - self.ymin) * self.y_to_screen)
        return sx, sy

    def from_screen(self, sx: float, sy: float) -> tuple[float, float]:
        x = self.xmin + float(sx) * self.x_from_screen
        y = self.ymin + float(self.height - 1 - sy) * self.y_from_screen
        return x, y

    def to_screen_arrays(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        fx = np.clip((x - self.xmin) * self.x_to_screen, -SCREEN_LIMIT_PX, SCREEN_LIMIT_PX)
        fy = np.clip((y - self.ymin) * self.y_to_screen, -SCREEN_LIMIT_PX, SCREEN_LIMIT_PX)
        px = round_half_away_array(fx)
        py = (self.height - 1) - round_half_away_array(fy)
        return px, py

    def pixel_delta_to_data(self, dx_px: float, dy_px: float) -> tuple[float, float]:
        """Data-space offset for a pixel offset, with dy measured upward."""
        return dx_px * self.x_from_screen, dy_px * self.y_from_screen
