from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np

from plotstat.aesthetics import Aesthetics, get_channel, set_channel
from plotstat.errors import PlotDataError


RGBA = tuple[int, int, int, int]

DEFAULT_GRADIENT_LOW: RGBA = (12, 44, 90, 255)
DEFAULT_GRADIENT_HIGH: RGBA = (62, 149, 255, 255)
DEFAULT_PALETTE: tuple[RGBA, ...] = (
    (62, 149, 255, 255),
    (255, 127, 80, 255),
    (80, 200, 120, 255),
    (220, 90, 200, 255),
    (240, 200, 60, 255),
    (120, 120, 140, 255),
)


class Scale:
    """Maps raw channel values to visual values."""

    channel: str = ""

    def apply(self, targets: Sequence[Aesthetics], data: Aesthetics) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class ContinuousColorScale(Scale):
    low: RGBA = DEFAULT_GRADIENT_LOW
    high: RGBA = DEFAULT_GRADIENT_HIGH
    channel: str = "color"

    def map_values(self, values: Any) -> list[RGBA]:
        arr = np.asarray(values, dtype=np.float64)
        if arr.size == 0:
            return []
        finite = arr[np.isfinite(arr)]
        if finite.size == 0:
            raise PlotDataError("color scale needs at least one finite value")
        vmin = float(np.min(finite))
        vmax = float(np.max(finite))
        span = vmax - vmin
        t = np.zeros_like(arr) if span == 0 else np.clip((arr - vmin) / span, 0.0, 1.0)
        low = np.asarray(self.low, dtype=np.float64)
        high = np.asarray(self.high, dtype=np.float64)
        rgba = np.rint(low[None, :] + t[:, None] * (high - low)[None, :]).astype(np.int64)
        return [tuple(int(c) for c in row) for row in rgba]  # type: ignore[misc]

    def apply(self, targets: Sequence[Aesthetics], data: Aesthetics) -> None:
        colors = self.map_values(_require(data, self.channel))
        for aes in targets:
            set_channel(aes, self.channel, list(colors))


@dataclass(frozen=True)
class DiscreteColorScale(Scale):
    palette: tuple[RGBA, ...] = DEFAULT_PALETTE
    channel: str = "color"

    def __post_init__(self) -> None:
        if not self.palette:
            raise ValueError("palette must not be empty")

    def levels(self, values: Iterable[Any]) -> list[Any]:
        return list(dict.fromkeys(values))

    def apply(self, targets: Sequence[Aesthetics], data: Aesthetics) -> None:
        values = list(_require(data, self.channel))
        lookup = {level: self.palette[i % len(self.palette)] for i, level in enumerate(self.levels(values))}
        colors = [lookup[v] for v in values]
        for aes in targets:
            set_channel(aes, self.channel, list(colors))


_TRANSFORMS = {
    "identity": lambda v: v,
    "log10": np.log10,
    "sqrt": np.sqrt,
}


@dataclass(frozen=True)
class ContinuousScale(Scale):
    channel: str = "x"
    transform: str = "identity"

    def __post_init__(self) -> None:
        if self.transform not in _TRANSFORMS:
            raise ValueError(f"unknown transform: {self.transform}")

    def apply(self, targets: Sequence[Aesthetics], data: Aesthetics) -> None:
        values = np.asarray(_require(data, self.channel), dtype=np.float64)
        if self.transform == "log10" and np.any(values <= 0):
            raise PlotDataError(f"log10 scale on `{self.channel}` needs positive values")
        if self.transform == "sqrt" and np.any(values < 0):
            raise PlotDataError(f"sqrt scale on `{self.channel}` needs non-negative values")
        out = _TRANSFORMS[self.transform](values)
        for aes in targets:
            set_channel(aes, self.channel, np.array(out, dtype=np.float64))


def color_gradient() -> ContinuousColorScale:
    return ContinuousColorScale()


def discrete_color() -> DiscreteColorScale:
    return DiscreteColorScale()


def apply_scale(scale: Scale, targets: Sequence[Aesthetics], data: Aesthetics) -> None:
    scale.apply(targets, data)


def _require(data: Aesthetics, channel: str) -> Any:
    values = get_channel(data, channel)
    if values is None:
        raise PlotDataError(f"scale input has no `{channel}` values")
    return values
