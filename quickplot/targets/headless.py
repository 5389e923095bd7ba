from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from quickplot.input import InputAccumulator, InputEvent, InputSnapshot
from quickplot.surface import RasterSurface
from quickplot.targets.base import RenderTarget


@dataclass
class HeadlessTarget(RenderTarget):
    """Offscreen target replaying scripted input, one event list per frame."""

    width: int = 640
    height: int = 360
    script: Sequence[Sequence[InputEvent]] = ()
    frames_presented: int = 0
    started: bool = False
    last_frame: np.ndarray | None = None
    fullscreen: bool = False
    _input: InputAccumulator = field(default_factory=InputAccumulator)
    _frames_polled: int = 0

    def start(self) -> None:
        self.started = True

    def surface_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def poll_input(self) -> InputSnapshot:
        if self._frames_polled < len(self.script):
            self._input.extend(list(self.script[self._frames_polled]))
        self._frames_polled += 1
        return self._input.take_snapshot()

    def present_frame(self, surface: RasterSurface) -> None:
        if not self.started:
            raise RuntimeError("headless target not started")
        self.frames_presented += 1
        self.fullscreen = surface.fullscreen
        self.last_frame = surface.rgba.copy()

    def stop(self) -> None:
        self.started = False

    @property
    def paced(self) -> bool:
        return False

    def save_snapshot(self, path: str | Path) -> None:
        if self.last_frame is None:
            raise RuntimeError("no frame has been presented yet")
        Image.fromarray(self.last_frame).save(path)
