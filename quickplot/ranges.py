from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable

import numpy as np

from quickplot.series import Series


@dataclass(frozen=True)
class DataRect:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @classmethod
    def unset(cls) -> "DataRect":
        return cls(xmin=math.inf, xmax=-math.inf, ymin=math.inf, ymax=-math.inf)

    @property
    def xspan(self) -> float:
        return self.xmax - self.xmin

    @property
    def yspan(self) -> float:
        return self.ymax - self.ymin

    @property
    def valid_x(self) -> bool:
        return not (math.isinf(self.xmin) or math.isinf(self.xmax))

    @property
    def valid_y(self) -> bool:
        return not (math.isinf(self.ymin) or math.isinf(self.ymax))

    @property
    def is_unset(self) -> bool:
        return math.isinf(self.xmin)

    def shifted(self, dx: float, dy: float) -> "DataRect":
        return DataRect(xmin=self.xmin + dx, xmax=self.xmax + dx, ymin=self.ymin + dy, ymax=self.ymax + dy)


class RangeTracker:
    """Persisted visible data rectangle, unset until auto-fit or explicit bounds."""

    def __init__(self) -> None:
        self._rect = DataRect.unset()

    @property
    def rect(self) -> DataRect:
        return self._rect

    @property
    def is_unset(self) -> bool:
        return self._rect.is_unset

    @property
    def valid_x(self) -> bool:
        return self._rect.valid_x

    @property
    def valid_y(self) -> bool:
        return self._rect.valid_y

    def reset(self) -> None:
        self._rect = DataRect.unset()

    def set(self, rect: DataRect) -> None:
        self._rect = rect

    def shift(self, dx: float, dy: float) -> None:
        self._rect = self._rect.shifted(dx, dy)

    def set_spans(self, xspan: float, yspan: float) -> None:
        # Max follows the new span, min stays put.
        r = self._rect
        self._rect = DataRect(xmin=r.xmin, xmax=r.xmin + xspan, ymin=r.ymin, ymax=r.ymin + yspan)


def auto_fit(
    series: Iterable[Series],
    *,
    margin_ratio: float = 0.1,
    zero_span_margin: float = 1.0,
) -> DataRect:
    """Bounding rectangle of all series points, expanded by a margin on each side.

    Empty series contribute nothing. If there is no data at all the sentinel
    extremes are returned unchanged and the caller has to pick a fallback.
    """
    xmin = ymin = math.inf
    xmax = ymax = -math.inf
    for s in series:
        if s.x is None or s.y is None:
            continue
        # Non-finite samples are gaps and never widen the bounds.
        mask = np.isfinite(s.x) & np.isfinite(s.y)
        if not np.any(mask):
            continue
        vx = s.x[mask]
        vy = s.y[mask]
        xmin = min(xmin, float(np.min(vx)))
        xmax = max(xmax, float(np.max(vx)))
        ymin = min(ymin, float(np.min(vy)))
        ymax = max(ymax, float(np.max(vy)))

    if math.isinf(xmin):
        return DataRect.unset()

    xmin, xmax = _expand(xmin, xmax, margin_ratio, zero_span_margin)
    ymin, ymax = _expand(ymin, ymax, margin_ratio, zero_span_margin)
    return DataRect(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def _expand(vmin: float, vmax: float, margin_ratio: float, zero_span_margin: float) -> tuple[float, float]:
    margin = zero_span_margin
    if vmin < vmax:
        margin = (vmax - vmin) * margin_ratio
    return vmin - margin, vmax + margin
