from __future__ import annotations

import numpy as np

from quickplot.colors import RGBA
from quickplot.raster.canvas import draw_hline, draw_pixel, draw_vline


def draw_line(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, *, include_end: bool = False) -> None:
    """Bresenham segment from (x0, y0) towards (x1, y1).

    The end pixel is left out unless `include_end` is set, so consecutive
    polyline segments never paint their shared vertex twice.
    """
    if not include_end:
        if x0 == x1 and y0 == y1:
            return
        x1, y1 = _step_back(x0, y0, x1, y1)

    clipped = _clip_segment(x0, y0, x1, y1, dst.shape[1], dst.shape[0])
    if clipped is None:
        return
    x0, y0, x1, y1 = clipped

    if y0 == y1:
        draw_hline(dst, x0, x1, y0, color)
        return
    if x0 == x1:
        draw_vline(dst, x0, y0, y1, color)
        return

    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        draw_pixel(dst, x0, y0, color)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _step_back(x0: int, y0: int, x1: int, y1: int) -> tuple[int, int]:
    # Last pixel Bresenham visits before reaching (x1, y1).
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    if dx >= dy:
        nx = x1 - sx
        ny = y0 + int(round((nx - x0) * (y1 - y0) / dx))
        return nx, ny
    ny = y1 - sy
    nx = x0 + int(round((ny - y0) * (x1 - x0) / dy))
    return nx, ny


def _clip_segment(x0: int, y0: int, x1: int, y1: int, width: int, height: int) -> tuple[int, int, int, int] | None:
    """Liang-Barsky clip against the canvas, keeping integer endpoints on the input segment."""
    xmin, ymin, xmax, ymax = 0, 0, width - 1, height - 1
    if xmin <= x0 <= xmax and xmin <= x1 <= xmax and ymin <= y0 <= ymax and ymin <= y1 <= ymax:
        return x0, y0, x1, y1

    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    cx0 = int(round(x0 + t0 * dx))
    cy0 = int(round(y0 + t0 * dy))
    cx1 = int(round(x0 + t1 * dx))
    cy1 = int(round(y0 + t1 * dy))
    return cx0, cy0, cx1, cy1
