from .canvas import clear, draw_hline, draw_pixel, draw_vline, new_canvas
from .draw_lines import draw_line
from .draw_text import draw_text, text_size

__all__ = [
    "clear",
    "draw_hline",
    "draw_line",
    "draw_pixel",
    "draw_text",
    "draw_vline",
    "new_canvas",
    "text_size",
]
