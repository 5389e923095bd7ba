from __future__ import annotations


RGBA = tuple[int, int, int, int]


def rgb(red: int, green: int, blue: int) -> RGBA:
    for name, channel in (("red", red), ("green", green), ("blue", blue)):
        if not 0 <= int(channel) <= 255:
            raise ValueError(f"{name} channel must be in [0, 255], got {channel}")
    return (int(red), int(green), int(blue), 255)


def coerce_rgba(color: tuple[int, int, int] | tuple[int, int, int, int]) -> RGBA:
    if len(color) == 3:
        return rgb(*color)
    if len(color) == 4:
        r, g, b, a = color
        if not 0 <= int(a) <= 255:
            raise ValueError(f"alpha channel must be in [0, 255], got {a}")
        return (*rgb(r, g, b)[:3], int(a))
    raise ValueError(f"color must have 3 or 4 channels, got {len(color)}")


def normalized(color: RGBA) -> tuple[float, float, float, float]:
    return tuple(channel / 255.0 for channel in color)  # type: ignore[return-value]


BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
GRAY: RGBA = (128, 128, 128, 255)
LIGHT_GRAY: RGBA = (191, 191, 191, 255)
DARK_GRAY: RGBA = (64, 64, 64, 255)
RED: RGBA = (255, 0, 0, 255)
LIGHT_RED: RGBA = (255, 128, 128, 255)
DARK_RED: RGBA = (128, 0, 0, 255)
GREEN: RGBA = (0, 255, 0, 255)
LIGHT_GREEN: RGBA = (128, 255, 128, 255)
DARK_GREEN: RGBA = (0, 128, 0, 255)
BLUE: RGBA = (0, 0, 255, 255)
LIGHT_BLUE: RGBA = (128, 128, 255, 255)
DARK_BLUE: RGBA = (0, 0, 128, 255)
PURPLE: RGBA = (255, 0, 255, 255)
LIGHT_PURPLE: RGBA = (255, 128, 255, 255)
DARK_PURPLE: RGBA = (128, 0, 128, 255)
YELLOW: RGBA = (255, 255, 0, 255)
LIGHT_YELLOW: RGBA = (255, 255, 128, 255)
DARK_YELLOW: RGBA = (128, 128, 0, 255)
CYAN: RGBA = (0, 255, 255, 255)
LIGHT_CYAN: RGBA = (128, 255, 255, 255)
DARK_CYAN: RGBA = (0, 128, 128, 255)
BROWN: RGBA = (128, 77, 0, 255)
LIGHT_BROWN: RGBA = (204, 128, 51, 255)
