from __future__ import annotations

from typing import Literal


SeriesErrorKind = Literal[
    "odd_length",
    "unsupported_type",
    "length_mismatch",
    "not_one_dimensional",
    "non_numeric",
]


class PlotDataError(ValueError):
    """Base error for invalid plot input or degenerate plot state."""


class SeriesInputError(PlotDataError):
    def __init__(self, message: str, *, kind: SeriesErrorKind, series_index: int | None = None) -> None:
        super().__init__(message)
        self.kind: SeriesErrorKind = kind
        self.series_index = series_index

    def with_series_index(self, series_index: int) -> "SeriesInputError":
        self.series_index = series_index
        return self

    def __str__(self) -> str:
        base = super().__str__()
        if self.series_index is None:
            return base
        return f"series {self.series_index}: {base}"


class ViewportError(PlotDataError):
    """Raised when a data rectangle cannot be mapped onto a pixel surface."""


class ConfigError(ValueError):
    pass
