from __future__ import annotations

from dataclasses import dataclass, fields, replace
import logging
import math
import os
from pathlib import Path
import tomllib
from typing import Any, Literal, Mapping

from quickplot.colors import BLACK, RGBA, WHITE, coerce_rgba
from quickplot.errors import ConfigError
from quickplot.input import KEY_ESCAPE, KEY_F11, KEY_R
from quickplot.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX
from quickplot.ticks import MAX_TICK_PRECISION


LOGGER = logging.getLogger(__name__)
ENV_PREFIX = "QUICKPLOT_"

SeriesErrorPolicy = Literal["skip", "raise"]


@dataclass(frozen=True)
class PlotConfig:
    title: str = "Plot"
    width: int = 800
    height: int = 600
    fps: int = 60
    zoom_base: float = 1.1
    margin_ratio: float = 0.1
    zero_span_margin: float = 1.0
    fallback_rect: tuple[float, float, float, float] = (-1.0, 1.0, -1.0, 1.0)
    close_key: str = KEY_ESCAPE
    fullscreen_key: str = KEY_F11
    reset_key: str = KEY_R
    background: RGBA = BLACK
    axis_color: RGBA = WHITE
    text_color: RGBA = WHITE
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    max_tick_precision: int = MAX_TICK_PRECISION
    on_series_error: SeriesErrorPolicy = "skip"

    def __post_init__(self) -> None:
        if self.width <= 1 or self.height <= 1:
            raise ConfigError("width/height must be > 1")
        if self.fps <= 0:
            raise ConfigError("fps must be > 0")
        if self.zoom_base <= 1.0:
            raise ConfigError("zoom_base must be > 1")
        if self.margin_ratio < 0:
            raise ConfigError("margin_ratio must be >= 0")
        if self.zero_span_margin <= 0:
            raise ConfigError("zero_span_margin must be > 0")
        if len(self.fallback_rect) != 4:
            raise ConfigError("fallback_rect must be (xmin, xmax, ymin, ymax)")
        if not all(math.isfinite(v) for v in self.fallback_rect):
            raise ConfigError("fallback_rect values must be finite")
        xmin, xmax, ymin, ymax = self.fallback_rect
        if not (xmin < xmax and ymin < ymax):
            raise ConfigError("fallback_rect must have positive spans")
        if self.font_size_px <= 0:
            raise ConfigError("font_size_px must be > 0")
        if self.max_tick_precision < 0:
            raise ConfigError("max_tick_precision must be >= 0")
        if self.on_series_error not in {"skip", "raise"}:
            raise ConfigError(f"on_series_error must be 'skip' or 'raise', got {self.on_series_error!r}")
        for key_field in ("close_key", "fullscreen_key", "reset_key"):
            value = getattr(self, key_field)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{key_field} must be a non-empty string")
            object.__setattr__(self, key_field, value.strip().lower())

    def with_overrides(self, **overrides: Any) -> "PlotConfig":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: Path, *, base: PlotConfig | None = None) -> PlotConfig:
    """Read the `[plot]` table of a TOML file on top of `base`."""
    try:
        raw = tomllib.loads(Path(path).read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc
    table = raw.get("plot", {})
    if not isinstance(table, dict):
        raise ConfigError("[plot] must be a table")
    config = (base or PlotConfig()).with_overrides(**_coerce_table(table))
    LOGGER.info("loaded plot config from %s", path)
    return config


def config_from_env(base: PlotConfig | None = None, environ: Mapping[str, str] | None = None) -> PlotConfig:
    """Apply QUICKPLOT_* environment overrides, e.g. QUICKPLOT_WIDTH=1024."""
    env = os.environ if environ is None else environ
    config = base or PlotConfig()
    overrides: dict[str, Any] = {}
    for f in fields(PlotConfig):
        raw = env.get(ENV_PREFIX + f.name.upper())
        if raw is None or raw.strip() == "":
            continue
        overrides[f.name] = _parse_env_value(f.name, raw.strip(), getattr(config, f.name))
    if not overrides:
        return config
    return config.with_overrides(**overrides)


def _coerce_table(table: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in table.items():
        if key in {"background", "axis_color", "text_color"}:
            try:
                out[key] = coerce_rgba(tuple(value))
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"invalid color for {key}: {value!r}") from exc
        elif key == "fallback_rect":
            try:
                out[key] = tuple(float(v) for v in value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"invalid fallback_rect: {value!r}") from exc
        else:
            out[key] = value
    return out


def _parse_env_value(name: str, raw: str, current: Any) -> Any:
    try:
        if isinstance(current, bool):
            return raw.lower() in {"1", "true", "yes", "on"}
        if isinstance(current, int):
            return int(raw)
        if isinstance(current, float):
            return float(raw)
        if isinstance(current, tuple):
            parts = [p.strip() for p in raw.split(",")]
            if name == "fallback_rect":
                return tuple(float(p) for p in parts)
            return coerce_rgba(tuple(int(p) for p in parts))
    except ValueError as exc:
        raise ConfigError(f"invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from exc
    return raw
