from __future__ import annotations

from typing import Protocol

import numpy as np
from PIL import Image

from quickplot.colors import BLACK, RGBA
from quickplot.input import InputSnapshot
from quickplot.raster import clear, draw_line, draw_pixel, draw_text, new_canvas, text_size
from quickplot.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX


class DrawSurface(Protocol):
    """Capabilities the plot engine needs from a window for one frame."""

    def size(self) -> tuple[int, int]:
        ...

    def mouse_position(self) -> tuple[int, int]:
        ...

    def is_mouse_down(self, button: str) -> bool:
        ...

    def wheel_delta(self) -> float:
        ...

    def was_key_pressed(self, key: str) -> bool:
        ...

    def set_fullscreen(self, fullscreen: bool) -> None:
        ...

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
        """Draw from (x0, y0) up to but excluding (x1, y1)."""
        ...

    def draw_point(self, x: int, y: int, color: RGBA) -> None:
        ...

    def draw_text(self, text: str, x: int, y: int, color: RGBA) -> None:
        ...

    def text_size(self, text: str) -> tuple[int, int]:
        ...


class RasterSurface:
    """DrawSurface over a numpy RGBA canvas fed by an input snapshot."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: RGBA = BLACK,
        font_family: str = DEFAULT_FONT_FAMILY,
        font_size_px: float = DEFAULT_FONT_SIZE_PX,
    ) -> None:
        self._background = background
        self._font_family = font_family
        self._font_size_px = font_size_px
        self._canvas = new_canvas(width, height, color=background)
        self._input = InputSnapshot()
        self.fullscreen = False

    @property
    def rgba(self) -> np.ndarray:
        return self._canvas

    def begin_frame(self, snapshot: InputSnapshot, size: tuple[int, int] | None = None) -> None:
        self._input = snapshot
        if size is not None and size != self.size():
            width, height = size
            self._canvas = new_canvas(width, height, color=self._background)
            return
        clear(self._canvas, self._background)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas)

    def size(self) -> tuple[int, int]:
        return (int(self._canvas.shape[1]), int(self._canvas.shape[0]))

    def mouse_position(self) -> tuple[int, int]:
        return (self._input.mouse_x, self._input.mouse_y)

    def is_mouse_down(self, button: str) -> bool:
        return self._input.is_mouse_down(button)

    def wheel_delta(self) -> float:
        return self._input.wheel_delta

    def was_key_pressed(self, key: str) -> bool:
        return self._input.was_key_pressed(key)

    def set_fullscreen(self, fullscreen: bool) -> None:
        self.fullscreen = bool(fullscreen)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
        draw_line(self._canvas, int(x0), int(y0), int(x1), int(y1), color)

    def draw_point(self, x: int, y: int, color: RGBA) -> None:
        draw_pixel(self._canvas, int(x), int(y), color)

    def draw_text(self, text: str, x: int, y: int, color: RGBA) -> None:
        draw_text(
            self._canvas,
            int(x),
            int(y),
            text,
            color,
            font_family=self._font_family,
            font_size_px=self._font_size_px,
        )

    def text_size(self, text: str) -> tuple[int, int]:
        return text_size(text, font_family=self._font_family, font_size_px=self._font_size_px)
