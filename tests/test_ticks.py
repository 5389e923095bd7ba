from __future__ import annotations

import math
import unittest

from quickplot.ticks import MAX_TICK_PRECISION, TICK_LIMIT, format_value, plan_ticks, tick_positions


class TickPlannerTests(unittest.TestCase):
    def test_span_fifty_steps_by_five(self) -> None:
        plan = plan_ticks(50.0)
        self.assertAlmostEqual(plan.step, 5.0)
        self.assertEqual(plan.precision, 0)

    def test_span_seven_keeps_tick_count_in_bounds(self) -> None:
        plan = plan_ticks(7.0)
        count = 7.0 / plan.step
        self.assertGreaterEqual(count, 5)
        self.assertLessEqual(count, 15)
        self.assertEqual(plan.precision, 1)

    def test_power_of_ten_spans(self) -> None:
        cases = {1.0: (0.1, 1), 100.0: (10.0, 0), 100000.0: (10000.0, 0)}
        for span, (step, precision) in cases.items():
            with self.subTest(span=span):
                plan = plan_ticks(span)
                self.assertTrue(math.isclose(plan.step, step, rel_tol=1e-9))
                self.assertEqual(plan.precision, precision)

    def test_small_span_grows_precision(self) -> None:
        plan = plan_ticks(0.001)
        self.assertTrue(math.isclose(plan.step, 1e-4, rel_tol=1e-9))
        self.assertEqual(plan.precision, 4)

    def test_tick_count_stays_bounded_across_magnitudes(self) -> None:
        span = 0.0037
        while span < 1e7:
            plan = plan_ticks(span)
            count = span / plan.step
            self.assertGreaterEqual(count, 5 - 1e-9, msg=f"span={span}")
            self.assertLessEqual(count, 15 + 1e-9, msg=f"span={span}")
            span *= 3.3

    def test_large_spans_use_zero_decimals(self) -> None:
        for span in (10.0, 12.5, 999.0, 1e9):
            self.assertEqual(plan_ticks(span).precision, 0)

    def test_precision_is_capped(self) -> None:
        self.assertEqual(plan_ticks(1e-30).precision, MAX_TICK_PRECISION)
        self.assertEqual(plan_ticks(1e-30, max_precision=3).precision, 3)

    def test_rejects_degenerate_span(self) -> None:
        for span in (0.0, -1.0, math.inf, math.nan):
            with self.assertRaises(ValueError):
                plan_ticks(span)

    def test_positions_cover_range_and_skip_origin(self) -> None:
        values = tick_positions(-2.2, 3.1, 1.0)
        self.assertEqual(values, [-3.0, -2.0, -1.0, 1.0, 2.0, 3.0])
        self.assertNotIn(0.0, values)

    def test_positions_skip_near_zero_accumulated_value(self) -> None:
        values = tick_positions(-0.3, 0.3, 0.1)
        self.assertFalse(any(abs(v) < 0.01 for v in values))
        self.assertTrue(any(math.isclose(v, -0.2) for v in values))
        self.assertTrue(any(math.isclose(v, 0.2) for v in values))

    def test_positions_terminate_when_step_is_below_float_spacing(self) -> None:
        vmin = 1.7e9
        values = tick_positions(vmin, vmin + 1e-6, 1e-7)
        self.assertTrue(values)
        self.assertLessEqual(len(values), TICK_LIMIT)
        self.assertTrue(all(a < b for a, b in zip(values, values[1:])))
        self.assertTrue(all(v <= vmin + 1e-6 for v in values))

    def test_positions_are_capped(self) -> None:
        values = tick_positions(100.0, 1e6, 1.0)
        self.assertEqual(len(values), TICK_LIMIT)
        self.assertEqual(values[0], 99.0)

    def test_positions_include_tick_at_vmax(self) -> None:
        self.assertEqual(tick_positions(0.5, 3.0, 1.0), [1.0, 2.0, 3.0])

    def test_positions_reject_bad_step(self) -> None:
        with self.assertRaises(ValueError):
            tick_positions(0.0, 1.0, 0.0)

    def test_format_value_uses_fixed_decimals(self) -> None:
        self.assertEqual(format_value(2.0, 0), "2")
        self.assertEqual(format_value(0.25, 3), "0.250")
        self.assertEqual(format_value(-1.5, 1), "-1.5")


if __name__ == "__main__":
    unittest.main()
