from __future__ import annotations

from array import array
from collections.abc import Sequence
from decimal import Decimal
from numbers import Real
from typing import Any

import numpy as np

from quickplot.errors import SeriesInputError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def coerce_values(value: Any, *, label: str) -> np.ndarray:
    """Copy a 1-D array of integers or floats into a fresh float64 array."""
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise SeriesInputError(f"{label} must be 1-D", kind="not_one_dimensional")
        if tensor.is_complex() or tensor.dtype == torch.bool:
            raise SeriesInputError(f"unsupported {label} tensor dtype: {tensor.dtype}", kind="unsupported_type")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().copy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise SeriesInputError(f"{label} must be 1-D", kind="not_one_dimensional")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, array):
        if value.typecode in {"u", "w"}:
            raise SeriesInputError(f"unsupported {label} array typecode: {value.typecode!r}", kind="unsupported_type")
        return np.asarray(value.tolist(), dtype=np.float64)

    if isinstance(value, (Sequence, range)) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_sequence(value, label=label)

    raise SeriesInputError(f"unsupported {label} input type: {type(value)!r}", kind="unsupported_type")


def split_interleaved(values: Any, *, label: str = "xy") -> tuple[np.ndarray, np.ndarray]:
    flat = coerce_values(values, label=label)
    if flat.size % 2 != 0:
        raise SeriesInputError(
            f"invalid {label} values, length {flat.size} is not divisible by 2",
            kind="odd_length",
        )
    return flat[0::2].copy(), flat[1::2].copy()


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=True)
    if arr.dtype.kind == "O":
        return _coerce_sequence(arr.tolist(), label=label)
    raise SeriesInputError(f"unsupported {label} dtype: {arr.dtype}", kind="unsupported_type")


def _coerce_sequence(values: Sequence[Any] | range, *, label: str) -> np.ndarray:
    out = np.empty(len(values), dtype=np.float64)
    for i, raw in enumerate(values):
        # bool is a Real subclass but not a numeric sample.
        if isinstance(raw, bool) or not isinstance(raw, (Real, Decimal, np.integer, np.floating)):
            raise SeriesInputError(f"{label} contains non-numeric value at index {i}: {raw!r}", kind="non_numeric")
        out[i] = float(raw)
    return out
