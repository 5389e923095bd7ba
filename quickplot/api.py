from __future__ import annotations

from quickplot.config import PlotConfig, config_from_env
from quickplot.runtime import PlotRunResult, run_session
from quickplot.session import BuildFn, PlotSession
from quickplot.targets.base import RenderTarget


def plot(
    build: BuildFn,
    *,
    config: PlotConfig | None = None,
    target: RenderTarget | None = None,
    max_frames: int | None = None,
) -> PlotRunResult:
    """Open a plot window and call `build` once per frame until it is closed.

    `build` receives the `PlotSession` and declares series through
    `session.new()`. Without an explicit target a Tk window sized from the
    config is used; config defaults come from QUICKPLOT_* environment variables.
    """
    if config is None:
        config = config_from_env()
    if target is None:
        from quickplot.targets.tk_window import TkWindowTarget

        target = TkWindowTarget(title=config.title, width=config.width, height=config.height)
    session = PlotSession(config)
    return run_session(session, build, target, max_frames=max_frames)
