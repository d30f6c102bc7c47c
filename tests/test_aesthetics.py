from __future__ import annotations

import unittest

from plotstat import Aesthetics, MissingAestheticError, PlotStatError, X_AXIS, Y_AXIS
from plotstat.aesthetics import CHANNELS, assert_aesthetics_defined, get_channel, set_channel


class AestheticsTests(unittest.TestCase):
    def test_channels_are_independently_optional(self) -> None:
        aes = Aesthetics()
        for channel in CHANNELS:
            self.assertIsNone(get_channel(aes, channel))

    def test_unknown_channel_rejected(self) -> None:
        aes = Aesthetics()
        with self.assertRaises(PlotStatError):
            get_channel(aes, "z")
        with self.assertRaises(PlotStatError):
            set_channel(aes, "ztick", [1.0])

    def test_axis_fields_are_store_channels(self) -> None:
        for axis in (X_AXIS, Y_AXIS):
            for name in (axis.tick_field, axis.grid_field, axis.label_field):
                self.assertIn(name, CHANNELS)

    def test_required_channel_assertion(self) -> None:
        aes = Aesthetics(x=[1.0])
        assert_aesthetics_defined("Probe", aes, ["x"])
        with self.assertRaises(MissingAestheticError) as ctx:
            assert_aesthetics_defined("Probe", aes, ["x", "y"])
        self.assertEqual(str(ctx.exception), "Probe requires the `y` aesthetic")


if __name__ == "__main__":
    unittest.main()
