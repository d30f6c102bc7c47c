from __future__ import annotations

import numpy as np


def optimize_ticks(vmin: float, vmax: float, target: int = 5) -> np.ndarray:
    """Evenly spaced "nice" ticks (1, 2 or 5 times a power of ten) covering ``[vmin, vmax]``."""
    if target <= 0:
        raise ValueError("target must be > 0")
    if not (np.isfinite(vmin) and np.isfinite(vmax)):
        raise ValueError("tick range must be finite")
    if vmin > vmax:
        vmin, vmax = vmax, vmin
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    lo = np.floor(vmin / step) * step
    hi = np.ceil(vmax / step) * step

    ticks = np.arange(lo, hi + 0.5 * step, step, dtype=np.float64)
    # Snap accumulated drift back onto the step grid (-4.4e-16 -> 0).
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    """Render one tick, with as many decimals as the tick step needs."""
    if not np.isfinite(value):
        return str(value)
    if step is not None and 0 < step and abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    tiny_step = step is not None and 0 < abs(step) < 1e-4
    if magnitude != 0 and (magnitude >= 1e6 or magnitude < 1e-6 or tiny_step):
        return f"{value:.4e}"

    decimals = 6 if step is None else _decimals_from_step(step)
    text = np.format_float_positional(value, precision=decimals, unique=False, fractional=True, trim="-")
    return "0" if text == "-0" else text


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    ticks = np.asarray(ticks, dtype=np.float64)
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(np.min(np.abs(np.diff(ticks))))
    return [format_tick(float(v), step=step) for v in ticks]


def default_tick_labeler(ticks: np.ndarray) -> list[str]:
    return format_ticks_for_axis(ticks)


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        bounds = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
        nice = next((n for limit, n in bounds if frac < limit), 10.0)
    else:
        bounds = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
        nice = next((n for limit, n in bounds if frac <= limit), 10.0)
    return float(nice * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    text = np.format_float_positional(step, trim="-")
    _, _, fraction = text.partition(".")
    return min(12, len(fraction))
