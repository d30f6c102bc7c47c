from __future__ import annotations

import unittest

import numpy as np

from plotstat import Aesthetics, ContinuousColorScale, ContinuousScale, DiscreteColorScale, PlotDataError, apply_scale


class ScaleTests(unittest.TestCase):
    def test_gradient_maps_extremes_to_endpoints(self) -> None:
        scale = ContinuousColorScale(low=(0, 0, 0, 255), high=(200, 100, 50, 255))
        aes = Aesthetics()
        apply_scale(scale, [aes], Aesthetics(color=[1, 3, 5]))
        self.assertEqual(aes.color, [(0, 0, 0, 255), (100, 50, 25, 255), (200, 100, 50, 255)])

    def test_gradient_constant_data_maps_to_low(self) -> None:
        scale = ContinuousColorScale(low=(1, 2, 3, 4), high=(9, 9, 9, 9))
        self.assertEqual(scale.map_values([7, 7]), [(1, 2, 3, 4), (1, 2, 3, 4)])

    def test_scale_writes_every_target(self) -> None:
        first, second = Aesthetics(), Aesthetics()
        apply_scale(ContinuousColorScale(), [first, second], Aesthetics(color=[1.0, 2.0]))
        self.assertEqual(first.color, second.color)
        self.assertIsNot(first.color, second.color)

    def test_discrete_palette_cycles_over_levels(self) -> None:
        palette = ((1, 1, 1, 255), (2, 2, 2, 255))
        aes = Aesthetics()
        apply_scale(DiscreteColorScale(palette=palette), [aes], Aesthetics(color=["b", "a", "b", "c"]))
        self.assertEqual(aes.color, [palette[0], palette[1], palette[0], palette[0]])

    def test_continuous_position_transform(self) -> None:
        aes = Aesthetics()
        apply_scale(ContinuousScale(channel="x", transform="log10"), [aes], Aesthetics(x=[1.0, 10.0, 100.0]))
        np.testing.assert_allclose(aes.x, [0.0, 1.0, 2.0])

    def test_log_scale_rejects_non_positive(self) -> None:
        with self.assertRaises(PlotDataError):
            apply_scale(ContinuousScale(channel="y", transform="log10"), [Aesthetics()], Aesthetics(y=[0.0, 1.0]))

    def test_missing_input_channel_raises(self) -> None:
        with self.assertRaises(PlotDataError):
            apply_scale(ContinuousColorScale(), [Aesthetics()], Aesthetics())

    def test_unknown_transform_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ContinuousScale(transform="cube")


if __name__ == "__main__":
    unittest.main()
