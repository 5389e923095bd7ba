from .base import RenderTarget
from .headless import HeadlessTarget
from .tk_window import TkWindowTarget

__all__ = ["HeadlessTarget", "RenderTarget", "TkWindowTarget"]
