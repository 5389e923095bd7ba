from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from quickplot.adapters import coerce_values, split_interleaved
from quickplot.colors import RGBA, WHITE, coerce_rgba, normalized, rgb
from quickplot.errors import SeriesInputError


@dataclass
class Series:
    index: int
    x: np.ndarray | None = None
    y: np.ndarray | None = None
    color: RGBA = WHITE
    error: SeriesInputError | None = None

    @property
    def intensities(self) -> tuple[float, float, float, float]:
        return normalized(self.color)

    def __len__(self) -> int:
        return 0 if self.y is None else int(self.y.size)


class SeriesBuilder:
    """Chained setters for one series; every setter returns the builder itself."""

    def __init__(self, series: Series) -> None:
        self._series = series

    @property
    def series(self) -> Series:
        return self._series

    def x(self, values: Any) -> "SeriesBuilder":
        self._series.x = self._guard(lambda: coerce_values(values, label="x"))
        return self

    def y(self, values: Any) -> "SeriesBuilder":
        self._series.y = self._guard(lambda: coerce_values(values, label="y"))
        return self

    def xy(self, values: Any) -> "SeriesBuilder":
        x, y = self._guard(lambda: split_interleaved(values))
        self._series.x = x
        self._series.y = y
        return self

    def rgb(self, red: int, green: int, blue: int) -> "SeriesBuilder":
        self._series.color = rgb(red, green, blue)
        return self

    def color(self, color: tuple[int, int, int] | tuple[int, int, int, int]) -> "SeriesBuilder":
        self._series.color = coerce_rgba(color)
        return self

    def _guard(self, convert):
        try:
            return convert()
        except SeriesInputError as exc:
            exc.with_series_index(self._series.index)
            self._series.error = exc
            raise


@dataclass
class SeriesStore:
    """Series of the current frame; cleared before every redraw."""

    _series: list[Series] = field(default_factory=list)

    def new(self) -> SeriesBuilder:
        series = Series(index=len(self._series))
        self._series.append(series)
        return SeriesBuilder(series)

    def clear(self) -> None:
        self._series.clear()

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self):
        return iter(self._series)

    def finalize(self) -> tuple[list[Series], list[SeriesInputError]]:
        """Synthesize missing x, check lengths and split valid series from errors."""
        valid: list[Series] = []
        errors: list[SeriesInputError] = []
        for series in self._series:
            if series.error is not None:
                errors.append(series.error)
                continue
            if series.y is None:
                series.y = np.empty(0, dtype=np.float64)
            if series.x is None or (series.x.size == 0 and series.y.size > 0):
                series.x = np.arange(series.y.size, dtype=np.float64)
            if series.x.size != series.y.size:
                series.error = SeriesInputError(
                    f"x and y length mismatch: {series.x.size} != {series.y.size}",
                    kind="length_mismatch",
                    series_index=series.index,
                )
                errors.append(series.error)
                continue
            valid.append(series)
        return valid, errors
