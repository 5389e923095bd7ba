from __future__ import annotations

from dataclasses import dataclass
import math

from quickplot.transform import round_half_away


# Label precision is capped so that tiny spans cannot grow labels without bound.
MAX_TICK_PRECISION = 12
MIN_TICKS = 5
MAX_TICKS = 15
TARGET_TICKS = 10
# Upper bound on ticks per axis; a plan never asks for more than MAX_TICKS + 2.
TICK_LIMIT = 64
# Slack for the power-of-ten loops so float drift cannot add a digit.
_DECADE_TOLERANCE = 1e-9
NICE_MULTIPLIERS = (0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0)


@dataclass(frozen=True)
class TickPlan:
    step: float
    precision: int


def plan_ticks(span: float, *, max_precision: int = MAX_TICK_PRECISION) -> TickPlan:
    """Pick a power-of-ten step near span/10, then refine it to a nice step giving 5..15 ticks.

    Precision only grows for spans below 10, so large spans always label with
    zero decimals.
    """
    if not math.isfinite(span) or span <= 0:
        raise ValueError(f"tick span must be finite and > 0, got {span}")

    steps = span / 10.0
    scale = 1.0
    precision = 0
    if steps < 1:
        while steps < 1 - _DECADE_TOLERANCE:
            steps *= 10
            scale /= 10
            precision += 1
    else:
        while steps > 1 + _DECADE_TOLERANCE:
            steps /= 10
            scale *= 10

    return TickPlan(step=_refine_step(span, scale), precision=min(precision, max_precision))


def _refine_step(span: float, scale: float) -> float:
    # Halve/double toward the nice step (1, 2 or 5 times a power of ten) whose
    # tick count lies in [MIN_TICKS, MAX_TICKS] and is closest to TARGET_TICKS.
    candidates = [scale * m for m in NICE_MULTIPLIERS]
    in_range = [c for c in candidates if MIN_TICKS <= span / c <= MAX_TICKS]
    if not in_range:
        return scale
    return min(in_range, key=lambda c: abs(span / c - TARGET_TICKS))


def tick_positions(vmin: float, vmax: float, step: float) -> list[float]:
    """Tick values from just below vmin up to vmax, skipping the one on the axis line."""
    if step <= 0 or not math.isfinite(step):
        raise ValueError(f"tick step must be finite and > 0, got {step}")
    first = round_half_away(vmin / step) - 1
    count = min(TICK_LIMIT, max(0, math.floor((vmax - first * step) / step) + 2))
    out: list[float] = []
    for i in range(count):
        # Indexed, never accumulated.
        value = (first + i) * step
        if value > vmax:
            break
        if abs(value) <= step / 10 or (out and value == out[-1]):
            continue
        out.append(value)
    return out


def format_value(value: float, precision: int) -> str:
    return f"{value:.{max(0, precision)}f}"
