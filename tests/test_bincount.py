from __future__ import annotations

import unittest

import numpy as np

from plotstat import PlotDataError
from plotstat.bincount import bin_indices, choose_bin_count_1d, choose_bin_count_2d, grid_counts, penalized_likelihood


class BinCountTests(unittest.TestCase):
    def test_1d_counts_sum_to_finite_values(self) -> None:
        rng = np.random.default_rng(7)
        values = rng.normal(size=400)
        values[::50] = np.nan
        d, counts = choose_bin_count_1d(values)
        self.assertEqual(counts.size, d)
        self.assertEqual(int(np.sum(counts)), 392)
        self.assertTrue(np.all(counts >= 0))

    def test_1d_separated_clusters_need_more_than_one_bin(self) -> None:
        values = np.concatenate([np.zeros(100), np.full(100, 10.0)])
        d, counts = choose_bin_count_1d(values)
        self.assertGreater(d, 1)
        self.assertEqual(int(counts[0]), 100)
        self.assertEqual(int(counts[-1]), 100)

    def test_1d_zero_span_is_single_bin(self) -> None:
        d, counts = choose_bin_count_1d([4.0, 4.0, 4.0])
        self.assertEqual(d, 1)
        np.testing.assert_array_equal(counts, [3])

    def test_1d_respects_upper_bound(self) -> None:
        values = np.linspace(0.0, 1.0, 1000) ** 3
        d, _ = choose_bin_count_1d(values, d_max=4)
        self.assertLessEqual(d, 4)

    def test_empty_input_raises(self) -> None:
        with self.assertRaises(PlotDataError):
            choose_bin_count_1d([])
        with self.assertRaises(PlotDataError):
            choose_bin_count_2d([np.nan], [1.0])

    def test_maximum_lands_in_last_bin(self) -> None:
        idx = bin_indices(np.asarray([0.0, 0.5, 1.0]), 0.0, 1.0, 4)
        np.testing.assert_array_equal(idx, [0, 2, 3])

    def test_penalty_grows_with_bin_count(self) -> None:
        counts = np.asarray([5, 5])
        self.assertLess(penalized_likelihood(counts, 2, 10), penalized_likelihood(np.asarray([10]), 1, 10))

    def test_grid_counts_are_row_major_over_y(self) -> None:
        x = np.asarray([0.0, 10.0, 0.0, 0.0, 5.0, 5.0, 5.0])
        y = np.asarray([0.0, 0.0, 10.0, 10.0, 10.0, 10.0, 10.0])
        x_idx = bin_indices(x, 0.0, 10.0, 3)
        y_idx = bin_indices(y, 0.0, 10.0, 2)
        counts = grid_counts(x_idx, y_idx, 3, 2)
        self.assertEqual(counts.size, 6)
        np.testing.assert_array_equal(counts.reshape(2, 3), [[1, 0, 1], [2, 3, 0]])

    def test_2d_selector_counts_every_finite_pair(self) -> None:
        x = np.concatenate([np.zeros(50), np.full(50, 10.0), np.zeros(50), [np.nan]])
        y = np.concatenate([np.zeros(50), np.zeros(50), np.full(50, 10.0), [1.0]])
        dx, dy, counts = choose_bin_count_2d(x, y)
        self.assertEqual(counts.size, dx * dy)
        self.assertEqual(int(np.sum(counts)), 150)
        self.assertTrue(np.all(counts >= 0))

    def test_2d_length_mismatch_raises(self) -> None:
        with self.assertRaises(PlotDataError):
            choose_bin_count_2d([1.0, 2.0], [1.0])


if __name__ == "__main__":
    unittest.main()
