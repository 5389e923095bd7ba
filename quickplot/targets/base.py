from __future__ import annotations

from abc import ABC, abstractmethod

from quickplot.input import InputSnapshot
from quickplot.surface import RasterSurface


class RenderTarget(ABC):
    """Window-side collaborator: supplies input and shows finished frames."""

    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def surface_size(self) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def poll_input(self) -> InputSnapshot:
        raise NotImplementedError

    @abstractmethod
    def present_frame(self, surface: RasterSurface) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    @property
    def paced(self) -> bool:
        """Whether the loop should sleep to hold the configured frame rate."""
        return True

    def pump_events(self) -> None:
        """Optional hook for targets that need explicit event pumping (for example Tk)."""
        return

    def should_close(self) -> bool:
        """Optional hook for targets that expose window-close state."""
        return False
