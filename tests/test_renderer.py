from __future__ import annotations

import math
import unittest

import numpy as np

from quickplot.colors import RED
from quickplot.ranges import DataRect
from quickplot.renderer import FrameRenderer
from quickplot.series import Series
from quickplot.transform import ViewportTransform


class _RecordingSurface:
    def __init__(self, width: int = 201, height: int = 201, mouse: tuple[int, int] = (100, 100)) -> None:
        self.width = width
        self.height = height
        self.mouse = mouse
        self.lines: list[tuple] = []
        self.points: list[tuple] = []
        self.texts: list[tuple] = []

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def mouse_position(self) -> tuple[int, int]:
        return self.mouse

    def is_mouse_down(self, button: str) -> bool:
        return False

    def wheel_delta(self) -> float:
        return 0.0

    def was_key_pressed(self, key: str) -> bool:
        return False

    def set_fullscreen(self, fullscreen: bool) -> None:
        pass

    def draw_line(self, x0, y0, x1, y1, color) -> None:
        self.lines.append((x0, y0, x1, y1, color))

    def draw_point(self, x, y, color) -> None:
        self.points.append((x, y, color))

    def draw_text(self, text, x, y, color) -> None:
        self.texts.append((text, x, y))

    def text_size(self, text: str) -> tuple[int, int]:
        return (6 * len(text), 10)


RECT = DataRect(xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0)


def _draw(series: list[Series], surface: _RecordingSurface | None = None):
    surface = surface or _RecordingSurface()
    transform = ViewportTransform.build(RECT, surface.width, surface.height)
    ticks = FrameRenderer().draw(surface, transform, RECT, series)
    return surface, ticks


def _series(x, y) -> Series:
    return Series(index=0, x=np.asarray(x, dtype=np.float64), y=np.asarray(y, dtype=np.float64), color=RED)


class FrameRendererTests(unittest.TestCase):
    def test_axes_cross_at_origin(self) -> None:
        surface, _ = _draw([])
        self.assertEqual(surface.lines[0][:4], (0, 100, 201, 100))
        self.assertEqual(surface.lines[1][:4], (100, 0, 100, 201))

    def test_tick_labels_use_planned_precision(self) -> None:
        surface, ticks = _draw([])
        self.assertAlmostEqual(ticks.x_plan.step, 0.2)
        self.assertEqual(ticks.x_plan.precision, 1)
        labels = {t[0] for t in surface.texts}
        self.assertIn("0.2", labels)
        self.assertIn("-0.6", labels)
        self.assertNotIn("0.0", labels)

    def test_x_tick_label_sits_below_axis(self) -> None:
        surface, _ = _draw([])
        label = next(t for t in surface.texts if t[0] == "0.2")
        sx = 120
        self.assertEqual(label[1], sx - (6 * 3) // 2)
        self.assertEqual(label[2], 100 + 5)

    def test_polyline_ends_with_point(self) -> None:
        surface, _ = _draw([_series([-0.5, 0.0, 0.5], [0.0, 0.5, 0.0])])
        red_lines = [line[:4] for line in surface.lines if line[4] == RED]
        self.assertEqual(red_lines, [(50, 100, 100, 50), (100, 50, 150, 100)])
        self.assertEqual(surface.points, [(150, 100, RED)])

    def test_non_finite_samples_break_the_polyline(self) -> None:
        surface, _ = _draw([_series([-0.5, 0.0, 0.25, 0.5], [0.0, math.nan, 0.0, 0.5])])
        red_lines = [line[:4] for line in surface.lines if line[4] == RED]
        self.assertEqual(red_lines, [(125, 100, 150, 50)])
        self.assertEqual(surface.points, [(50, 100, RED), (150, 50, RED)])

    def test_cursor_readout_has_extra_decimal_in_corner(self) -> None:
        surface, _ = _draw([])
        text, x, y = surface.texts[-1]
        self.assertEqual(text, "0.00 0.00")
        self.assertEqual((x, y), (201 - 6 * len(text), 201 - 10))


if __name__ == "__main__":
    unittest.main()
