from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional


EventType = Literal[
    "pointer_move",
    "pointer_down",
    "pointer_up",
    "wheel",
    "key_down",
    "key_up",
]

MouseButton = Literal["left", "middle", "right"]

KEY_ESCAPE = "escape"
KEY_F11 = "f11"
KEY_R = "r"


@dataclass(frozen=True)
class InputEvent:
    event_type: EventType
    timestamp: float = 0.0
    x: Optional[float] = None
    y: Optional[float] = None
    button: Optional[MouseButton] = None
    delta_y: Optional[float] = None
    key: Optional[str] = None


@dataclass(frozen=True)
class InputSnapshot:
    """Input state for one frame; key presses are edge-triggered."""

    mouse_x: int = 0
    mouse_y: int = 0
    buttons_down: frozenset[str] = frozenset()
    wheel_delta: float = 0.0
    keys_pressed: frozenset[str] = frozenset()

    def is_mouse_down(self, button: str) -> bool:
        return button in self.buttons_down

    def was_key_pressed(self, key: str) -> bool:
        return key.lower() in self.keys_pressed


@dataclass
class InputAccumulator:
    """Folds raw input events into one snapshot per frame.

    Pointer position and held buttons persist between frames; wheel motion and
    key presses are consumed by `take_snapshot`.
    """

    mouse_x: int = 0
    mouse_y: int = 0
    _buttons_down: set[str] = field(default_factory=set)
    _keys_held: set[str] = field(default_factory=set)
    _keys_pressed: set[str] = field(default_factory=set)
    _wheel_delta: float = 0.0

    def push(self, event: InputEvent) -> None:
        if event.x is not None and event.y is not None:
            self.mouse_x = int(round(event.x))
            self.mouse_y = int(round(event.y))
        if event.event_type == "pointer_down" and event.button is not None:
            self._buttons_down.add(event.button)
        elif event.event_type == "pointer_up" and event.button is not None:
            self._buttons_down.discard(event.button)
        elif event.event_type == "wheel" and event.delta_y is not None:
            self._wheel_delta += float(event.delta_y)
        elif event.event_type == "key_down" and event.key:
            key = event.key.lower()
            # Auto-repeat key_down events do not count as new presses.
            if key not in self._keys_held:
                self._keys_pressed.add(key)
            self._keys_held.add(key)
        elif event.event_type == "key_up" and event.key:
            self._keys_held.discard(event.key.lower())

    def extend(self, events: list[InputEvent]) -> None:
        for event in events:
            self.push(event)

    def release_all(self) -> None:
        """Drop held buttons and keys, e.g. when the window loses focus."""
        self._buttons_down.clear()
        self._keys_held.clear()

    def take_snapshot(self) -> InputSnapshot:
        snap = InputSnapshot(
            mouse_x=self.mouse_x,
            mouse_y=self.mouse_y,
            buttons_down=frozenset(self._buttons_down),
            wheel_delta=self._wheel_delta,
            keys_pressed=frozenset(self._keys_pressed),
        )
        self._wheel_delta = 0.0
        self._keys_pressed.clear()
        return snap
