from __future__ import annotations

import unittest

import numpy as np

from plotstat.ticks import format_tick, format_ticks_for_axis, optimize_ticks


class TickOptimizerTests(unittest.TestCase):
    def test_ticks_cover_range_and_increase(self) -> None:
        for vmin, vmax in [(0.3, 9.7), (-12.5, 3.0), (0.25, 0.75), (100.0, 100000.0)]:
            ticks = optimize_ticks(vmin, vmax)
            self.assertLessEqual(ticks[0], vmin)
            self.assertGreaterEqual(ticks[-1], vmax)
            self.assertTrue(np.all(np.diff(ticks) > 0))

    def test_nice_steps(self) -> None:
        np.testing.assert_allclose(optimize_ticks(0.0, 20.0), [0.0, 5.0, 10.0, 15.0, 20.0])

    def test_degenerate_range_is_single_tick(self) -> None:
        np.testing.assert_array_equal(optimize_ticks(3.0, 3.0), [3.0])

    def test_drift_near_zero_is_snapped(self) -> None:
        ticks = optimize_ticks(-0.3, 0.3)
        self.assertIn(0.0, ticks.tolist())

    def test_invalid_target_raises(self) -> None:
        with self.assertRaises(ValueError):
            optimize_ticks(0.0, 1.0, target=0)


class TickFormattingTests(unittest.TestCase):
    def test_consistent_decimals_from_step(self) -> None:
        labels = format_ticks_for_axis(np.asarray([1.5, 2.0, 2.5, 3.0]))
        self.assertEqual(labels, ["1.5", "2", "2.5", "3"])

    def test_preserves_integer_trailing_zeros(self) -> None:
        self.assertEqual(format_ticks_for_axis(np.asarray([20.0, 30.0, 40.0])), ["20", "30", "40"])

    def test_snaps_negative_zero(self) -> None:
        labels = format_ticks_for_axis(np.asarray([-1.0, -4.4409e-16, 1.0]))
        self.assertEqual(labels[1], "0")

    def test_large_values_use_scientific_notation(self) -> None:
        self.assertEqual(format_tick(2.5e7), "2.5000e+07")

    def test_quarter_step_keeps_two_decimals(self) -> None:
        labels = format_ticks_for_axis(np.asarray([0.0, 0.25, 0.5, 0.75]))
        self.assertEqual(labels, ["0", "0.25", "0.5", "0.75"])

    def test_unstepped_value_trims_trailing_zeros(self) -> None:
        self.assertEqual(format_tick(3.0), "3")
        self.assertEqual(format_tick(-0.0), "0")

    def test_empty_ticks(self) -> None:
        self.assertEqual(format_ticks_for_axis(np.asarray([])), [])


if __name__ == "__main__":
    unittest.main()
