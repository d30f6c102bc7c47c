from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from plotstat.aesthetics import Aesthetics
from plotstat.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def aesthetics_from_data(
    *,
    x: Any = None,
    y: Any = None,
    color: Any = None,
    data: Any = None,
) -> Aesthetics:
    """Build an Aesthetics store from raw channel inputs.

    ``x`` and ``y`` become float64 arrays; ``color`` keeps its raw values so a
    discrete scale can treat them as levels. With ``data=`` a pandas DataFrame,
    string arguments name its columns.
    """
    x_values = _resolve_input(x, data=data)
    y_values = _resolve_input(y, data=data)
    color_values = _resolve_input(color, data=data)

    x_arr = None if x_values is None else _coerce_1d_numeric(x_values, label="x")
    y_arr = None if y_values is None else _coerce_1d_numeric(y_values, label="y")
    if x_arr is not None and y_arr is not None and x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")

    colors = None if color_values is None else _coerce_1d_levels(color_values)
    return Aesthetics(x=x_arr, y=y_arr, color=colors)


def _resolve_input(value: Any, *, data: Any) -> Any:
    if data is None or value is None:
        return value
    if pd is None:
        raise PlotDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    if isinstance(value, str):
        if value not in data.columns:
            raise PlotDataError(f"column not found: {value}")
        return data[value]
    return value


def _coerce_1d_levels(value: Any) -> list[Any]:
    if pd is not None and isinstance(value, pd.Series):
        return value.tolist()
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError("color must be 1-D")
        return value.tolist()
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)
    raise PlotDataError(f"unsupported color input type: {type(value)!r}")


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in "iufb":
        return arr.astype(np.float64, copy=False)

    # Object arrays: None marks a missing value, anything else must convert via float().
    out = np.full(arr.shape[0], np.nan, dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} value at index {i} is not numeric: {raw!r}") from exc
    return out
