"""
Abstract base classes for the raster sink and pointer source.

These interfaces define the contract that both the numpy-backed surface
used by the engines and the simulator's pygame host must follow. The
engines only ever write to a RasterSurface; they never read pixels back.
"""

from abc import ABC, abstractmethod
from typing import Callable, Sequence


class RasterSurface(ABC):
    """Abstract drawing target.

    Coordinates are logical (CSS-like) pixels; implementations multiply by
    ``device_pixel_ratio`` when touching their backing store.
    """

    @property
    @abstractmethod
    def width(self) -> float:
        """Logical width in pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> float:
        """Logical height in pixels."""
        ...

    @property
    @abstractmethod
    def device_pixel_ratio(self) -> float:
        """Backing-store pixels per logical pixel."""
        ...

    @property
    def is_available(self) -> bool:
        """False when the drawing context is unavailable or lost."""
        return True

    @abstractmethod
    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        """Reallocate the backing store for a new logical size."""
        ...

    @abstractmethod
    def clear_region(self, x: float, y: float, width: float, height: float) -> None:
        """Clear a rectangle back to fully transparent."""
        ...

    @abstractmethod
    def fill_circle(
        self,
        x: float,
        y: float,
        radius: float,
        color: tuple[int, int, int, float],
    ) -> None:
        """Draw a filled circle with an RGBA color (alpha in 0..1)."""
        ...

    def clear(self) -> None:
        """Clear the whole surface."""
        self.clear_region(0, 0, self.width, self.height)

    def fill_circles(
        self,
        xs: Sequence[float],
        ys: Sequence[float],
        radius: float,
        rgb: tuple[int, int, int],
        alphas: Sequence[float],
    ) -> None:
        """Draw many same-sized circles sharing one RGB color."""
        r, g, b = rgb
        for x, y, a in zip(xs, ys, alphas):
            self.fill_circle(x, y, radius, (r, g, b, float(a)))


class PointerSource(ABC):
    """Abstract pointer / touch input source.

    Delivers (kind, x, y) samples in surface-local pixel space where kind is
    one of "down", "move", "up", "enter", "leave".
    """

    @abstractmethod
    def on_pointer(self, callback: Callable[[str, float, float], None]) -> Callable[[], None]:
        """
        Register a pointer callback.

        Returns:
            Function to unregister callback
        """
        ...

    @abstractmethod
    def is_inside(self) -> bool:
        """Check if the pointer is currently inside the interactive region."""
        ...
