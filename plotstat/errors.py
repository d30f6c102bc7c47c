from __future__ import annotations


class PlotStatError(Exception):
    """Base class for statistic-stage failures."""


class PlotDataError(PlotStatError, ValueError):
    pass


class StatConfigError(PlotStatError, ValueError):
    pass


class MissingAestheticError(PlotStatError):
    def __init__(self, statistic: str, channel: str) -> None:
        super().__init__(f"{statistic} requires the `{channel}` aesthetic")
        self.statistic = statistic
        self.channel = channel


class MissingScaleError(PlotStatError):
    def __init__(self, statistic: str, channel: str) -> None:
        super().__init__(f"{statistic} requires a {channel} scale")
        self.statistic = statistic
        self.channel = channel


class ScaleVariantError(PlotStatError, TypeError):
    pass
