from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
import tomllib
from typing import Any, Mapping

from plotstat.errors import StatConfigError


@dataclass(frozen=True)
class StatConfig:
    """Tuning knobs shared by the statistics."""

    max_bins_1d: int = 150
    max_bins_2d: int = 50
    tick_target: int = 5
    integer_tick_limit: int = 20
    fence_factor: float = 1.5


DEFAULT_CONFIG = StatConfig()

_POSITIVE_INT_KEYS = ("max_bins_1d", "max_bins_2d", "tick_target", "integer_tick_limit")


def validate_stat_config(overrides: Mapping[str, Any] | None = None) -> StatConfig:
    raw: dict[str, Any] = asdict(DEFAULT_CONFIG)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise StatConfigError(f"Unknown statistic option: {key}")
            raw[key] = value

    for key in _POSITIVE_INT_KEYS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise StatConfigError(f"Option `{key}` must be a positive integer")

    factor = raw["fence_factor"]
    if isinstance(factor, bool) or not isinstance(factor, (int, float)) or float(factor) < 0:
        raise StatConfigError("Option `fence_factor` must be a non-negative number")

    return StatConfig(
        max_bins_1d=int(raw["max_bins_1d"]),
        max_bins_2d=int(raw["max_bins_2d"]),
        tick_target=int(raw["tick_target"]),
        integer_tick_limit=int(raw["integer_tick_limit"]),
        fence_factor=float(factor),
    )


def load_stat_config(path: str | Path) -> StatConfig:
    """Read the ``[plotstat]`` table of a TOML file. A missing table yields defaults."""
    path = Path(path)
    try:
        with path.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise StatConfigError(f"invalid TOML in {path}: {exc}") from exc
    table = raw.get("plotstat", {})
    if not isinstance(table, dict):
        raise StatConfigError(f"`plotstat` in {path} must be a table")
    return validate_stat_config(table)
