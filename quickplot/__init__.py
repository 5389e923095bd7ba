from quickplot.api import plot
from quickplot.config import PlotConfig, config_from_env, load_config
from quickplot.errors import ConfigError, PlotDataError, SeriesInputError, ViewportError
from quickplot.ranges import DataRect, auto_fit
from quickplot.runtime import PlotRunResult, run_session
from quickplot.series import Series, SeriesBuilder
from quickplot.session import FrameReport, PlotSession
from quickplot.surface import DrawSurface, RasterSurface
from quickplot.ticks import TickPlan, plan_ticks
from quickplot.transform import ViewportTransform

__all__ = [
    "ConfigError",
    "DataRect",
    "DrawSurface",
    "FrameReport",
    "PlotConfig",
    "PlotDataError",
    "PlotRunResult",
    "PlotSession",
    "RasterSurface",
    "Series",
    "SeriesBuilder",
    "SeriesInputError",
    "TickPlan",
    "ViewportError",
    "ViewportTransform",
    "auto_fit",
    "config_from_env",
    "load_config",
    "plan_ticks",
    "plot",
    "run_session",
]
