from __future__ import annotations

import logging
import time
from typing import Any

from quickplot.input import InputAccumulator, InputEvent, InputSnapshot
from quickplot.surface import RasterSurface
from quickplot.targets.base import RenderTarget


LOGGER = logging.getLogger(__name__)

_BUTTONS = {1: "left", 2: "middle", 3: "right"}
_WHEEL_UNIT = 120


class TkWindowTarget(RenderTarget):
    """Tk window showing frames through a PhotoImage on a resizable canvas."""

    def __init__(self, title: str = "Plot", width: int = 800, height: int = 600) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.title = title
        self.width = int(width)
        self.height = int(height)
        self._input = InputAccumulator()
        self._root: Any = None
        self._canvas: Any = None
        self._photo: Any = None
        self._image_item: Any = None
        self._image_tk: Any = None
        self._tcl_error: type[Exception] = RuntimeError
        self._fullscreen = False
        self._closed = False

    def start(self) -> None:
        import tkinter as tk
        from PIL import ImageTk

        self._image_tk = ImageTk
        self._tcl_error = tk.TclError
        root = tk.Tk()
        root.title(self.title)
        root.geometry(f"{self.width}x{self.height}")
        root.protocol("WM_DELETE_WINDOW", self._on_close)
        canvas = tk.Canvas(root, width=self.width, height=self.height, highlightthickness=0, background="black")
        canvas.pack(fill="both", expand=True)
        canvas.configure(takefocus=1)
        canvas.focus_set()

        canvas.bind("<Configure>", self._on_configure)
        canvas.bind("<Motion>", self._on_motion)
        for num in _BUTTONS:
            canvas.bind(f"<ButtonPress-{num}>", self._on_button_down)
            canvas.bind(f"<ButtonRelease-{num}>", self._on_button_up)
        canvas.bind("<MouseWheel>", self._on_wheel)
        # X11 reports wheel motion as buttons 4 and 5.
        canvas.bind("<Button-4>", lambda e: self._push_wheel(e, 1.0))
        canvas.bind("<Button-5>", lambda e: self._push_wheel(e, -1.0))
        root.bind("<KeyPress>", self._on_key_down)
        root.bind("<KeyRelease>", self._on_key_up)
        root.bind("<FocusOut>", lambda _e: self._input.release_all())

        self._root = root
        self._canvas = canvas
        self._closed = False
        LOGGER.info("tk window started (%dx%d)", self.width, self.height)

    def surface_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def poll_input(self) -> InputSnapshot:
        return self._input.take_snapshot()

    def present_frame(self, surface: RasterSurface) -> None:
        if self._root is None or self._closed:
            return
        if surface.fullscreen != self._fullscreen:
            self._fullscreen = surface.fullscreen
            self._root.attributes("-fullscreen", self._fullscreen)
        self._photo = self._image_tk.PhotoImage(surface.to_image())
        if self._image_item is None:
            self._image_item = self._canvas.create_image(0, 0, anchor="nw", image=self._photo)
        else:
            self._canvas.itemconfigure(self._image_item, image=self._photo)

    def pump_events(self) -> None:
        if self._root is None or self._closed:
            return
        try:
            self._root.update()
        except self._tcl_error:
            # The window was destroyed between frames.
            self._closed = True

    def should_close(self) -> bool:
        return self._closed

    def stop(self) -> None:
        if self._root is None:
            return
        root, self._root = self._root, None
        try:
            root.destroy()
        except self._tcl_error:
            LOGGER.debug("tk window already destroyed")
        self._canvas = None
        self._photo = None
        self._image_item = None
        LOGGER.info("tk window stopped")

    def _on_close(self) -> None:
        self._closed = True

    def _on_configure(self, event: Any) -> None:
        self.width = max(1, int(event.width))
        self.height = max(1, int(event.height))

    def _on_motion(self, event: Any) -> None:
        self._input.push(InputEvent("pointer_move", time.perf_counter(), x=event.x, y=event.y))

    def _on_button_down(self, event: Any) -> None:
        button = _BUTTONS.get(int(event.num))
        if button is not None:
            self._input.push(InputEvent("pointer_down", time.perf_counter(), x=event.x, y=event.y, button=button))

    def _on_button_up(self, event: Any) -> None:
        button = _BUTTONS.get(int(event.num))
        if button is not None:
            self._input.push(InputEvent("pointer_up", time.perf_counter(), x=event.x, y=event.y, button=button))

    def _on_wheel(self, event: Any) -> None:
        delta = float(event.delta)
        if delta == 0:
            return
        # Windows reports multiples of 120; macOS reports small raw deltas.
        notches = delta / _WHEEL_UNIT if abs(delta) >= _WHEEL_UNIT else (1.0 if delta > 0 else -1.0)
        self._push_wheel(event, notches)

    def _push_wheel(self, event: Any, notches: float) -> None:
        self._input.push(InputEvent("wheel", time.perf_counter(), x=event.x, y=event.y, delta_y=notches))

    def _on_key_down(self, event: Any) -> None:
        self._input.push(InputEvent("key_down", time.perf_counter(), key=str(event.keysym).lower()))

    def _on_key_up(self, event: Any) -> None:
        self._input.push(InputEvent("key_up", time.perf_counter(), key=str(event.keysym).lower()))
