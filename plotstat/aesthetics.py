from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Sequence

import numpy as np

from plotstat.errors import MissingAestheticError, PlotStatError


TickLabeler = Callable[[np.ndarray], list[str]]


@dataclass
class Aesthetics:
    """Named plot channels shared between statistics.

    ``None`` marks an absent channel. Statistics read and rewrite fields in place.
    """

    x: Any = None
    y: Any = None
    color: Any = None
    x_min: np.ndarray | None = None
    x_max: np.ndarray | None = None
    y_min: np.ndarray | None = None
    y_max: np.ndarray | None = None
    middle: np.ndarray | None = None
    lower_hinge: np.ndarray | None = None
    upper_hinge: np.ndarray | None = None
    lower_fence: np.ndarray | None = None
    upper_fence: np.ndarray | None = None
    outliers: list[np.ndarray] | None = None
    xtick: np.ndarray | None = None
    ytick: np.ndarray | None = None
    xgrid: np.ndarray | None = None
    ygrid: np.ndarray | None = None
    xtick_label: TickLabeler | None = None
    ytick_label: TickLabeler | None = None
    x_label: TickLabeler | None = None
    y_label: TickLabeler | None = None
    color_label: TickLabeler | None = None
    color_key_title: str | None = None


CHANNELS: tuple[str, ...] = tuple(f.name for f in fields(Aesthetics))

# Label function attached to a data channel, where one exists.
LABEL_CHANNELS: dict[str, str] = {
    "x": "x_label",
    "y": "y_label",
    "color": "color_label",
}


@dataclass(frozen=True)
class TickAxis:
    """Output field names written by a tick statistic for one axis."""

    name: str
    tick_field: str
    grid_field: str
    label_field: str


X_AXIS = TickAxis(name="x", tick_field="xtick", grid_field="xgrid", label_field="xtick_label")
Y_AXIS = TickAxis(name="y", tick_field="ytick", grid_field="ygrid", label_field="ytick_label")


def get_channel(aes: Aesthetics, channel: str) -> Any:
    if channel not in CHANNELS:
        raise PlotStatError(f"unknown aesthetic channel: {channel}")
    return getattr(aes, channel)


def set_channel(aes: Aesthetics, channel: str, value: Any) -> None:
    if channel not in CHANNELS:
        raise PlotStatError(f"unknown aesthetic channel: {channel}")
    setattr(aes, channel, value)


def assert_aesthetics_defined(statistic: str, aes: Aesthetics, channels: Sequence[str]) -> None:
    for channel in channels:
        if get_channel(aes, channel) is None:
            raise MissingAestheticError(statistic, channel)
