from __future__ import annotations

from dataclasses import dataclass, field
import enum
from itertools import cycle
import logging
import math
from typing import Any, Mapping, Sequence

import numpy as np

from plotstat.aesthetics import (
    LABEL_CHANNELS,
    X_AXIS,
    Y_AXIS,
    Aesthetics,
    TickAxis,
    TickLabeler,
    assert_aesthetics_defined,
    get_channel,
    set_channel,
)
from plotstat.bincount import choose_bin_count_1d, choose_bin_count_2d, finite_values
from plotstat.config import DEFAULT_CONFIG, StatConfig
from plotstat.errors import MissingAestheticError, MissingScaleError, PlotDataError, ScaleVariantError
from plotstat.scales import ContinuousColorScale, Scale, apply_scale, color_gradient
from plotstat.ticks import default_tick_labeler, optimize_ticks


LOGGER = logging.getLogger(__name__)

X_TICK_CHANNELS = ("x", "x_min", "x_max")
Y_TICK_CHANNELS = (
    "y",
    "y_min",
    "y_max",
    "middle",
    "lower_hinge",
    "upper_hinge",
    "lower_fence",
    "upper_fence",
)


class Absent(enum.Enum):
    """Group value standing in for a channel the plot does not map."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent.ABSENT

GroupKey = tuple[Any, Any]


class Statistic:
    """A transform that derives aesthetic channels from existing ones, in place."""

    def apply(self, scales: Mapping[str, Scale], aes: Aesthetics) -> None:
        raise NotImplementedError

    def element_aesthetics(self) -> list[str]:
        return []

    def default_scales(self) -> list[Scale]:
        return []

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Nil(Statistic):
    def apply(self, scales: Mapping[str, Scale], aes: Aesthetics) -> None:
        return None


@dataclass(frozen=True)
class Identity(Statistic):
    def apply(self, scales: Mapping[str, Scale], aes: Aesthetics) -> None:
        return None


@dataclass(frozen=True)
class HistogramStatistic(Statistic):
    config: StatConfig = DEFAULT_CONFIG

    def element_aesthetics(self) -> list[str]:
        return ["x"]

    def apply(self, scales: Mapping[str, Scale], aes: Aesthetics) -> None:
        assert_aesthetics_defined(self.name, aes, ["x"])
        xs = finite_values(aes.x, label="x")
        if xs.size == 0:
            raise PlotDataError("histogram needs at least one finite x value")

        d, counts = choose_bin_count_1d(xs, d_max=self.config.max_bins_1d)
        vmin = float(np.min(xs))
        vmax = float(np.max(xs))
        binwidth = (vmax - vmin) / d

        edges = np.arange(d + 1, dtype=np.float64)
        aes.x_min = vmin + edges[:-1] * binwidth
        aes.x_max = vmin + edges[1:] * binwidth
        # Rounding in binwidth must not leave the maximum outside the last bin.
        aes.x_max[-1] = max(float(aes.x_max[-1]), vmax)
        aes.y = np.asarray(counts, dtype=np.float64)
        LOGGER.debug("histogram: %d bins of width %g over [%g, %g]", d, binwidth, vmin, vmax)


@dataclass(frozen=True)
class RectangularBinStatistic(Statistic):
    config: StatConfig = DEFAULT_CONFIG

    def element_aesthetics(self) -> list[str]:
        return ["x", "y", "color"]

    def default_scales(self) -> list[Scale]:
        return [color_gradient()]

    def apply(self, scales: Mapping[str, Scale], aes: Aesthetics) -> None:
        assert_aesthetics_defined(self.name, aes, ["x", "y"])
        color_scale = scales.get("color")
        if color_scale is None:
            raise MissingScaleError(self.name, "color")
        if not isinstance(color_scale, ContinuousColorScale):
            raise ScaleVariantError(
                f"{self.name} requires a continuous color scale, got {type(color_scale).__name__}"
            )

        x_arr = np.asarray(aes.x, dtype=np.float64)
        y_arr = np.asarray(aes.y, dtype=np.float64)
        dx, dy, counts = choose_bin_count_2d(x_arr, y_arr, d_max=self.config.max_bins_2d)

        mask = np.isfinite(x_arr) & np.isfinite(y_arr)
        x_lo, x_hi = float(np.min(x_arr[mask])), float(np.max(x_arr[mask]))
        y_lo, y_hi = float(np.min(y_arr[mask])), float(np.max(y_arr[mask]))
        wx = (x_hi - x_lo) / dx
        wy = (y_hi - y_lo) / dy

        # counts is row-major: cell = row * dx + col, rows along y.
        cells = np.flatnonzero(counts > 0)
        rows = (cells // dx).astype(np.float64)
        cols = (cells % dx).astype(np.float64)

        aes.x_min = x_lo + cols * wx
        aes.x_max = x_lo + (cols + 1) * wx
        aes.y_min = y_lo + rows * wy
        aes.y_max = y_lo + (rows + 1) * wy
        # Rounding in wx/wy must not leave the maxima outside the last column and row.
        last_col = cols == dx - 1
        last_row = rows == dy - 1
        aes.x_max[last_col] = np.maximum(aes.x_max[last_col], x_hi)
        aes.y_max[last_row] = np.maximum(aes.y_max[last_row], y_hi)
        aes.color_key_title = "Count"

        apply_scale(color_scale, [aes], Aesthetics(color=counts[cells].astype(np.int64)))
        LOGGER.debug("rectbin: %dx%d grid, %d non-empty cells", dx, dy, cells.size)


@dataclass(frozen=True)
class TickStatistic(Statistic):
    """Tick and gridline positions for one axis, from every channel on that axis."""

    in_vars: tuple[str, ...]
    axis: TickAxis
    config: StatConfig = field(default=DEFAULT_CONFIG)

    def element_aesthetics(self) -> list[str]:
        return list(self.in_vars)

    def apply(self, scales: Mapping[str, Scale], aes: Aesthetics) -> None:
        present = [ch for ch in self.in_vars if get_channel(aes, ch) is not None]
        if not present:
            raise MissingAestheticError(self.name, "|".join(self.in_vars))
        values = np.concatenate(
            [finite_values(np.ravel(np.asarray(get_channel(aes, ch), dtype=np.float64)), label=ch) for ch in present]
        )
        if values.size == 0:
            raise PlotDataError(f"{self.name} found no finite {self.axis.name} values")

        vmin = float(np.min(values))
        vmax = float(np.max(values))
        all_int = bool(np.all(values == np.trunc(values)))

        if all_int:
            ticks, grids = self._integer_ticks(values, vmin, vmax)
        else:
            ticks = optimize_ticks(vmin, vmax, self.config.tick_target)
            grids = ticks.copy()
            LOGGER.debug("%s ticks: continuous over [%g, %g]", self.axis.name, vmin, vmax)

        set_channel(aes, self.axis.tick_field, ticks)
        set_channel(aes, self.axis.grid_field, grids)
        set_channel(aes, self.axis.label_field, self._labeler(aes, present))

    def _integer_ticks(self, values: np.ndarray, vmin: float, vmax: float) -> tuple[np.ndarray, np.ndarray]:
        distinct = np.unique(values)
        max_gap = float(np.max(np.diff(distinct))) if distinct.size > 1 else 0.0

        if distinct.size > self.config.integer_tick_limit or max_gap > 1:
            ticks = optimize_ticks(vmin, vmax, self.config.tick_target)
            if ticks[0] == 0:
                # Count-like axes start at 1 rather than the origin.
                rest = ticks[1:]
                ticks = np.concatenate([[1.0], rest[rest > 1.0]])
            LOGGER.debug("%s ticks: sparse integers, optimized over [%g, %g]", self.axis.name, vmin, vmax)
            return ticks, ticks.copy()

        LOGGER.debug("%s ticks: %d dense integers", self.axis.name, distinct.size)
        return distinct, (distinct - 0.5)[1:]

    def _labeler(self, aes: Aesthetics, present: Sequence[str]) -> TickLabeler:
        # First channel carrying a label function wins.
        for ch in present:
            label_channel = LABEL_CHANNELS.get(ch)
            if label_channel is None:
                continue
            labeler = get_channel(aes, label_channel)
            if labeler is not None:
                return labeler
        return default_tick_labeler


@dataclass(frozen=True)
class BoxplotStatistic(Statistic):
    config: StatConfig = DEFAULT_CONFIG

    def element_aesthetics(self) -> list[str]:
        return ["x", "y"]

    def apply(self, scales: Mapping[str, Scale], aes: Aesthetics) -> None:
        assert_aesthetics_defined(self.name, aes, ["y"])

        groups = group_by_key(aes.x, aes.y, aes.color)
        m = len(groups)
        lower_hinge = np.empty(m, dtype=np.float64)
        middle = np.empty(m, dtype=np.float64)
        upper_hinge = np.empty(m, dtype=np.float64)
        lower_fence = np.empty(m, dtype=np.float64)
        upper_fence = np.empty(m, dtype=np.float64)
        outliers: list[np.ndarray] = []

        factor = self.config.fence_factor
        for i, ys in enumerate(groups.values()):
            arr = np.asarray(ys, dtype=np.float64)
            lower_hinge[i], middle[i], upper_hinge[i] = np.percentile(arr, [25.0, 50.0, 75.0])
            iqr = upper_hinge[i] - lower_hinge[i]
            lower_fence[i] = lower_hinge[i] - factor * iqr
            upper_fence[i] = upper_hinge[i] + factor * iqr
            outliers.append(arr[(arr < lower_fence[i]) | (arr > upper_fence[i])])

        aes.lower_hinge = lower_hinge
        aes.middle = middle
        aes.upper_hinge = upper_hinge
        aes.lower_fence = lower_fence
        aes.upper_fence = upper_fence
        aes.outliers = outliers

        keys = list(groups)
        if aes.x is not None:
            aes.x = np.asarray([x for x, _ in keys])
        if aes.color is not None:
            aes.color = [c for _, c in keys]
        LOGGER.debug("boxplot: %d groups", m)


def group_by_key(x: Any, y: Any, color: Any) -> dict[GroupKey, list[float]]:
    """Group y values by ``(x, color)``, in first-seen order.

    x and color cycle against y; an unmapped channel contributes ``ABSENT``.
    Observations with a non-finite y or a NaN x/color key are skipped.
    """
    xs = [ABSENT] if x is None else _as_list(x)
    cs = [ABSENT] if color is None else _as_list(color)
    if not xs or not cs:
        return {}
    groups: dict[GroupKey, list[float]] = {}
    skipped = 0
    for xv, yv, cv in zip(cycle(xs), _as_list(y), cycle(cs)):
        value = float(yv) if yv is not None else math.nan
        if not math.isfinite(value) or _is_nan(xv) or _is_nan(cv):
            skipped += 1
            continue
        groups.setdefault((xv, cv), []).append(value)
    if skipped:
        LOGGER.debug("boxplot: skipped %d observations with missing values", skipped)
    return groups


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _as_list(values: Any) -> list[Any]:
    if isinstance(values, np.ndarray):
        return values.tolist()
    return [tuple(v) if isinstance(v, list) else v for v in values]


def apply_statistics(stats: Sequence[Statistic], scales: Mapping[str, Scale], aes: Aesthetics) -> None:
    """Apply ``stats`` in order to ``aes``. The first failure aborts the run."""
    for stat in stats:
        LOGGER.debug("applying %s", stat.name)
        stat.apply(scales, aes)


def with_default_scales(stats: Sequence[Statistic], scales: Mapping[str, Scale]) -> dict[str, Scale]:
    """Copy of ``scales`` completed with each statistic's default scales for unmapped channels."""
    out = dict(scales)
    for stat in stats:
        for scale in stat.default_scales():
            out.setdefault(scale.channel, scale)
    return out


def nil() -> Nil:
    return Nil()


def identity() -> Identity:
    return Identity()


def histogram(config: StatConfig = DEFAULT_CONFIG) -> HistogramStatistic:
    return HistogramStatistic(config=config)


def rectbin(config: StatConfig = DEFAULT_CONFIG) -> RectangularBinStatistic:
    return RectangularBinStatistic(config=config)


def x_ticks(config: StatConfig = DEFAULT_CONFIG) -> TickStatistic:
    return TickStatistic(in_vars=X_TICK_CHANNELS, axis=X_AXIS, config=config)


def y_ticks(config: StatConfig = DEFAULT_CONFIG) -> TickStatistic:
    return TickStatistic(in_vars=Y_TICK_CHANNELS, axis=Y_AXIS, config=config)


def boxplot(config: StatConfig = DEFAULT_CONFIG) -> BoxplotStatistic:
    return BoxplotStatistic(config=config)
