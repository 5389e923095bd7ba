from __future__ import annotations

from dataclasses import dataclass
import logging
import time

from quickplot.frame_rate import FrameRateController
from quickplot.session import BuildFn, PlotSession
from quickplot.surface import RasterSurface
from quickplot.targets.base import RenderTarget


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlotRunResult:
    frames_rendered: int
    frames_presented: int
    stopped_by_close_key: bool
    stopped_by_target_close: bool


def run_session(
    session: PlotSession,
    build: BuildFn,
    target: RenderTarget,
    *,
    max_frames: int | None = None,
) -> PlotRunResult:
    """Drive `session` against `target` until closed or `max_frames` is reached."""
    if max_frames is not None and max_frames <= 0:
        raise ValueError("max_frames must be > 0")
    config = session.config
    rate = FrameRateController(target_fps=config.fps)
    width, height = config.width, config.height
    surface = RasterSurface(
        width,
        height,
        background=config.background,
        font_family=config.font_family,
        font_size_px=config.font_size_px,
    )

    frames_presented = 0
    stopped_by_close_key = False
    stopped_by_target_close = False
    frame_idx = 0
    target.start()
    LOGGER.info("plot session started (%s, %dx%d @ %d fps)", type(target).__name__, width, height, config.fps)
    try:
        while max_frames is None or frame_idx < max_frames:
            target.pump_events()
            if target.should_close():
                stopped_by_target_close = True
                break
            started_at = time.perf_counter()
            snapshot = target.poll_input()
            surface.begin_frame(snapshot, size=target.surface_size())
            report = session.run_frame(surface, build)
            frame_idx += 1
            if report.close_requested:
                stopped_by_close_key = True
                break
            target.present_frame(surface)
            frames_presented += 1
            if target.paced:
                sleep_for = rate.compute_sleep(started_at, time.perf_counter())
                if sleep_for > 0:
                    time.sleep(sleep_for)
    finally:
        target.stop()
        LOGGER.info(
            "plot session stopped after %d frames (close_key=%s, target_close=%s)",
            session.frames_rendered,
            stopped_by_close_key,
            stopped_by_target_close,
        )
    return PlotRunResult(
        frames_rendered=session.frames_rendered,
        frames_presented=frames_presented,
        stopped_by_close_key=stopped_by_close_key,
        stopped_by_target_close=stopped_by_target_close,
    )
