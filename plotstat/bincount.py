"""Bin-count selection for regular histograms.

The number of bins maximizes the penalized log-likelihood of the regular
histogram (Birgé & Rozenholc, 2006)::

    L(d) = sum_k N_k * log(d * N_k / n) - (d - 1 + log(d) ** 2.5)

The 2-D selector applies the same criterion to a ``dx`` by ``dy`` grid with
``d = dx * dy`` cells.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from plotstat.errors import PlotDataError


LOGGER = logging.getLogger(__name__)


def finite_values(values: Any, *, label: str = "values") -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    mask = np.isfinite(arr)
    if not np.all(mask):
        LOGGER.debug("dropping %d non-finite %s", int(arr.size - np.count_nonzero(mask)), label)
        arr = arr[mask]
    return arr


def bin_indices(values: np.ndarray, vmin: float, vmax: float, d: int) -> np.ndarray:
    """Index of the regular bin holding each value; ``vmax`` lands in the last bin."""
    span = vmax - vmin
    if span <= 0 or d == 1:
        return np.zeros(values.size, dtype=np.int64)
    idx = np.floor((values - vmin) * d / span).astype(np.int64)
    np.clip(idx, 0, d - 1, out=idx)
    return idx


def grid_counts(x_idx: np.ndarray, y_idx: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Cell counts of a dx by dy grid, row-major: cell = y_bin * dx + x_bin."""
    return np.bincount(y_idx * dx + x_idx, minlength=dx * dy)


def penalized_likelihood(counts: np.ndarray, d: int, n: int) -> float:
    nz = counts[counts > 0].astype(np.float64)
    loglik = float(np.sum(nz * np.log(d * nz / n)))
    return loglik - (d - 1 + math.log(d) ** 2.5)


def choose_bin_count_1d(values: Any, d_min: int = 1, d_max: int = 150) -> tuple[int, np.ndarray]:
    xs = finite_values(values, label="x")
    n = xs.size
    if n == 0:
        raise PlotDataError("cannot bin an empty series")
    if d_min < 1 or d_max < d_min:
        raise ValueError("bin count bounds must satisfy 1 <= d_min <= d_max")

    vmin = float(np.min(xs))
    vmax = float(np.max(xs))
    if vmin == vmax:
        LOGGER.debug("zero-span series of %d values, using a single bin", n)
        return 1, np.asarray([n], dtype=np.int64)

    upper = max(d_min, min(d_max, n))
    best_d = d_min
    best_counts: np.ndarray | None = None
    best_score = -math.inf
    for d in range(d_min, upper + 1):
        counts = np.bincount(bin_indices(xs, vmin, vmax, d), minlength=d)
        score = penalized_likelihood(counts, d, n)
        if score > best_score:
            best_d, best_counts, best_score = d, counts, score

    assert best_counts is not None
    LOGGER.debug("selected %d bins for %d values", best_d, n)
    return best_d, best_counts


def choose_bin_count_2d(xs: Any, ys: Any, d_max: int = 50) -> tuple[int, int, np.ndarray]:
    """Select a ``dx`` by ``dy`` grid.

    Returns ``(dx, dy, counts)`` where ``counts`` has ``dx * dy`` entries in
    row-major order: the outer index runs over y bins, the inner over x bins.
    Pairs with a non-finite coordinate are excluded.
    """
    x_arr = np.asarray(xs, dtype=np.float64)
    y_arr = np.asarray(ys, dtype=np.float64)
    if x_arr.ndim != 1 or y_arr.ndim != 1:
        raise PlotDataError("x and y must be 1-D")
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    x_arr = x_arr[mask]
    y_arr = y_arr[mask]
    n = x_arr.size
    if n == 0:
        raise PlotDataError("cannot bin an empty series")
    if d_max < 1:
        raise ValueError("d_max must be >= 1")

    x_lo, x_hi = float(np.min(x_arr)), float(np.max(x_arr))
    y_lo, y_hi = float(np.min(y_arr)), float(np.max(y_arr))
    upper_x = 1 if x_lo == x_hi else min(d_max, n)
    upper_y = 1 if y_lo == y_hi else min(d_max, n)

    x_idx = [bin_indices(x_arr, x_lo, x_hi, d) for d in range(1, upper_x + 1)]
    y_idx = [bin_indices(y_arr, y_lo, y_hi, d) for d in range(1, upper_y + 1)]

    best = (1, 1)
    best_counts = np.asarray([n], dtype=np.int64)
    best_score = -math.inf
    for dy in range(1, upper_y + 1):
        for dx in range(1, upper_x + 1):
            d = dx * dy
            counts = grid_counts(x_idx[dx - 1], y_idx[dy - 1], dx, dy)
            score = penalized_likelihood(counts, d, n)
            if score > best_score:
                best, best_counts, best_score = (dx, dy), counts, score

    LOGGER.debug("selected %dx%d grid for %d points", best[0], best[1], n)
    return best[0], best[1], best_counts
