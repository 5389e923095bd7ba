from __future__ import annotations

import math
import unittest

from quickplot.interaction import InteractionController
from quickplot.ranges import DataRect, RangeTracker
from quickplot.transform import ViewportTransform


SIZE = (201, 151)


def _controller(rect: DataRect | None = None) -> InteractionController:
    ranges = RangeTracker()
    if rect is not None:
        ranges.set(rect)
    return InteractionController(ranges)


def _transform(controller: InteractionController) -> ViewportTransform:
    return ViewportTransform.build(controller.ranges.rect, *SIZE)


class PanTests(unittest.TestCase):
    def test_drag_keeps_grabbed_point_under_cursor(self) -> None:
        ctrl = _controller(DataRect(xmin=0.0, xmax=10.0, ymin=-5.0, ymax=5.0))
        ctrl.update_drag(100, 100, True)
        t0, changed = ctrl.apply(_transform(ctrl), mouse_x=100, mouse_y=100, wheel_delta=0.0, surface_size=SIZE)
        self.assertFalse(changed)
        grabbed = t0.from_screen(100, 100)

        ctrl.update_drag(130, 80, True)
        t1, changed = ctrl.apply(t0, mouse_x=130, mouse_y=80, wheel_delta=0.0, surface_size=SIZE)
        self.assertTrue(changed)
        x, y = t1.from_screen(130, 80)
        self.assertAlmostEqual(x, grabbed[0])
        self.assertAlmostEqual(y, grabbed[1])
        self.assertAlmostEqual(ctrl.ranges.rect.xspan, 10.0)

    def test_release_ends_drag(self) -> None:
        ctrl = _controller(DataRect(xmin=0.0, xmax=10.0, ymin=0.0, ymax=10.0))
        ctrl.update_drag(10, 10, True)
        self.assertTrue(ctrl.dragging)
        ctrl.update_drag(50, 10, False)
        self.assertFalse(ctrl.dragging)
        _, changed = ctrl.apply(_transform(ctrl), mouse_x=50, mouse_y=10, wheel_delta=0.0, surface_size=SIZE)
        self.assertFalse(changed)
        self.assertEqual(ctrl.ranges.rect.xmin, 0.0)

    def test_drag_is_suppressed_while_range_unset(self) -> None:
        ctrl = _controller()
        ctrl.update_drag(10, 10, True)
        fallback = ViewportTransform.build(DataRect(xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0), *SIZE)
        t, changed = ctrl.apply(fallback, mouse_x=60, mouse_y=10, wheel_delta=3.0, surface_size=SIZE)
        self.assertFalse(changed)
        self.assertIs(t, fallback)
        self.assertFalse(ctrl.dragging)
        self.assertTrue(ctrl.ranges.is_unset)

    def test_cancel_drag(self) -> None:
        ctrl = _controller(DataRect(xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0))
        ctrl.update_drag(5, 5, True)
        ctrl.cancel_drag()
        self.assertFalse(ctrl.dragging)


class ZoomTests(unittest.TestCase):
    def test_zoom_keeps_point_under_cursor(self) -> None:
        ctrl = _controller(DataRect(xmin=-3.0, xmax=7.0, ymin=0.0, ymax=100.0))
        t0 = _transform(ctrl)
        before = t0.from_screen(40, 120)
        t1, changed = ctrl.apply(t0, mouse_x=40, mouse_y=120, wheel_delta=1.0, surface_size=SIZE)
        self.assertTrue(changed)
        after = t1.from_screen(40, 120)
        self.assertTrue(math.isclose(after[0], before[0], rel_tol=1e-9, abs_tol=1e-9))
        self.assertTrue(math.isclose(after[1], before[1], rel_tol=1e-9, abs_tol=1e-9))

    def test_wheel_up_zooms_in_by_base(self) -> None:
        ctrl = _controller(DataRect(xmin=0.0, xmax=11.0, ymin=0.0, ymax=22.0))
        ctrl.apply(_transform(ctrl), mouse_x=0, mouse_y=0, wheel_delta=1.0, surface_size=SIZE)
        self.assertAlmostEqual(ctrl.ranges.rect.xspan, 10.0)
        self.assertAlmostEqual(ctrl.ranges.rect.yspan, 20.0)

    def test_wheel_down_zooms_out(self) -> None:
        ctrl = _controller(DataRect(xmin=0.0, xmax=10.0, ymin=0.0, ymax=10.0))
        ctrl.apply(_transform(ctrl), mouse_x=100, mouse_y=75, wheel_delta=-2.0, surface_size=SIZE)
        self.assertAlmostEqual(ctrl.ranges.rect.xspan, 10.0 * 1.1**2)

    def test_overflowing_zoom_is_ignored(self) -> None:
        rect = DataRect(xmin=0.0, xmax=10.0, ymin=0.0, ymax=10.0)
        ctrl = _controller(rect)
        _, changed = ctrl.apply(_transform(ctrl), mouse_x=0, mouse_y=0, wheel_delta=-1e6, surface_size=SIZE)
        self.assertFalse(changed)
        self.assertEqual(ctrl.ranges.rect, rect)

    def test_collapsing_zoom_is_ignored(self) -> None:
        rect = DataRect(xmin=0.0, xmax=10.0, ymin=0.0, ymax=10.0)
        ctrl = _controller(rect)
        _, changed = ctrl.apply(_transform(ctrl), mouse_x=0, mouse_y=0, wheel_delta=1e4, surface_size=SIZE)
        self.assertFalse(changed)
        self.assertEqual(ctrl.ranges.rect, rect)

    def test_zoom_in_below_float_resolution_is_ignored(self) -> None:
        rect = DataRect(xmin=1.7e9, xmax=1.7e9 + 1e-4, ymin=0.0, ymax=1.0)
        ctrl = _controller(rect)
        _, changed = ctrl.apply(_transform(ctrl), mouse_x=100, mouse_y=75, wheel_delta=1.0, surface_size=SIZE)
        self.assertFalse(changed)
        self.assertEqual(ctrl.ranges.rect, rect)

    def test_zoom_out_from_fine_span_is_allowed(self) -> None:
        rect = DataRect(xmin=1.7e9, xmax=1.7e9 + 1e-4, ymin=0.0, ymax=1.0)
        ctrl = _controller(rect)
        _, changed = ctrl.apply(_transform(ctrl), mouse_x=100, mouse_y=75, wheel_delta=-1.0, surface_size=SIZE)
        self.assertTrue(changed)
        self.assertGreater(ctrl.ranges.rect.xspan, rect.xspan)

    def test_rejects_zoom_base_at_or_below_one(self) -> None:
        with self.assertRaises(ValueError):
            InteractionController(RangeTracker(), zoom_base=1.0)


if __name__ == "__main__":
    unittest.main()
