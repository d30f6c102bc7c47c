from plotstat.adapters import aesthetics_from_data
from plotstat.aesthetics import X_AXIS, Y_AXIS, Aesthetics, TickAxis
from plotstat.config import DEFAULT_CONFIG, StatConfig, load_stat_config, validate_stat_config
from plotstat.errors import (
    MissingAestheticError,
    MissingScaleError,
    PlotDataError,
    PlotStatError,
    ScaleVariantError,
    StatConfigError,
)
from plotstat.scales import ContinuousColorScale, ContinuousScale, DiscreteColorScale, Scale, apply_scale
from plotstat.statistics import (
    ABSENT,
    BoxplotStatistic,
    HistogramStatistic,
    Identity,
    Nil,
    RectangularBinStatistic,
    Statistic,
    TickStatistic,
    apply_statistics,
    boxplot,
    histogram,
    identity,
    nil,
    rectbin,
    with_default_scales,
    x_ticks,
    y_ticks,
)

__all__ = [
    "ABSENT",
    "Aesthetics",
    "BoxplotStatistic",
    "ContinuousColorScale",
    "ContinuousScale",
    "DEFAULT_CONFIG",
    "DiscreteColorScale",
    "HistogramStatistic",
    "Identity",
    "MissingAestheticError",
    "MissingScaleError",
    "Nil",
    "PlotDataError",
    "PlotStatError",
    "RectangularBinStatistic",
    "Scale",
    "ScaleVariantError",
    "StatConfig",
    "StatConfigError",
    "Statistic",
    "TickAxis",
    "TickStatistic",
    "X_AXIS",
    "Y_AXIS",
    "aesthetics_from_data",
    "apply_scale",
    "apply_statistics",
    "boxplot",
    "histogram",
    "identity",
    "load_stat_config",
    "nil",
    "rectbin",
    "validate_stat_config",
    "with_default_scales",
    "x_ticks",
    "y_ticks",
]
