from __future__ import annotations

from functools import lru_cache
import logging

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from quickplot.colors import RGBA


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans Mono"
DEFAULT_FONT_SIZE_PX = 12.0
# Pillow searches the platform font directories for bare file names.
MONO_FONT_FILES = (
    "DejaVuSansMono.ttf",
    "LiberationMono-Regular.ttf",
    "Menlo.ttc",
    "Monaco.ttf",
    "consola.ttf",
    "cour.ttf",
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    """Blend `text` onto `dst` with its top-left corner at (x, y)."""
    if not text:
        return
    mask = _glyph_mask(text, _load_font(font_family, _pixel_size(font_size_px)))
    _composite(dst, x, y, mask, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    """Advance width of `text` and the font's line height, in pixels."""
    font = _load_font(font_family, _pixel_size(font_size_px))
    return (_ink_width(font, text), _line_height(font))


def _pixel_size(font_size_px: float) -> int:
    return max(1, int(round(font_size_px)))


def _ink_width(font: Font, text: str) -> int:
    if not text:
        return 0
    left, _, right, _ = font.getbbox(text)
    return max(0, int(right - left))


def _line_height(font: Font) -> int:
    # Metrics rather than ink so that labels with and without descenders share a baseline.
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, descent = font.getmetrics()
        return max(1, int(ascent + descent))
    _, top, _, bottom = font.getbbox("Ag")
    return max(1, int(bottom - top))


def _composite(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    height, width = dst.shape[:2]
    mh, mw = mask.shape
    left, top = max(0, x), max(0, y)
    right, bottom = min(width, x + mw), min(height, y + mh)
    if right <= left or bottom <= top:
        return

    coverage = mask[top - y : bottom - y, left - x : right - x].astype(np.float32)
    alpha = coverage * (color[3] / (255.0 * 255.0))
    if not np.any(alpha > 0):
        return
    region = dst[top:bottom, left:right]
    ink = np.asarray(color[:3], dtype=np.float32)
    blended = region[:, :, :3].astype(np.float32) * (1.0 - alpha[:, :, None]) + ink * alpha[:, :, None]
    region[:, :, :3] = np.clip(blended, 0, 255).astype(np.uint8)
    region[:, :, 3] = 255


@lru_cache(maxsize=256)
def _glyph_mask(text: str, font: Font) -> np.ndarray:
    left = font.getbbox(text)[0]
    image = Image.new("L", (max(1, _ink_width(font, text)), _line_height(font)), 0)
    ImageDraw.Draw(image).text((-left, 0), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=16)
def _load_font(font_family: str, size: int) -> Font:
    family = font_family.strip()
    names = [family, family.replace(" ", "") + ".ttf"] if family else []
    for name in (*names, *MONO_FONT_FILES):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    LOGGER.debug("no TrueType font found for %r, using Pillow's default font", font_family)
    return ImageFont.load_default(size=size)
