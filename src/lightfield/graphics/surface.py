"""
Numpy-backed raster surface.

BufferSurface is the drawing target both pipelines paint into. It keeps a
float RGBA backing store sized by the device pixel ratio and is flattened to
RGB only when the host presents a frame.
"""

import logging
import math
import numpy as np
from numpy.typing import NDArray

from lightfield.hardware.base import RasterSurface
from lightfield.graphics.primitives import (
    Buffer,
    Color,
    RGBA,
    new_buffer,
    clear_rect,
    fill_circle,
    fill_circles,
    composite_rgb,
)

logger = logging.getLogger(__name__)


class BufferSurface(RasterSurface):
    """
    Device-pixel-ratio aware RGBA raster.

    Logical coordinates passed to the drawing calls are multiplied by the
    device pixel ratio before they reach the backing buffer, the same way a
    scaled 2D canvas context behaves.
    """

    def __init__(self, width: float = 0, height: float = 0, device_pixel_ratio: float = 1.0) -> None:
        self._width = 0.0
        self._height = 0.0
        self._dpr = 1.0
        self._available = True
        self._buffer: Buffer = new_buffer(0, 0)
        self.resize(width, height, device_pixel_ratio)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def device_pixel_ratio(self) -> float:
        return self._dpr

    @property
    def pixel_size(self) -> tuple[int, int]:
        """Backing store (width, height) in device pixels."""
        h, w = self._buffer.shape[:2]
        return (w, h)

    @property
    def is_available(self) -> bool:
        return self._available

    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        dpr = device_pixel_ratio if device_pixel_ratio and device_pixel_ratio > 0 else 1.0
        self._width = max(0.0, float(width))
        self._height = max(0.0, float(height))
        self._dpr = float(dpr)
        self._buffer = new_buffer(
            int(math.floor(self._width * self._dpr)),
            int(math.floor(self._height * self._dpr)),
        )
        logger.debug(
            f"Surface resized to {self._width:g}x{self._height:g} @ {self._dpr:g}x "
            f"({self.pixel_size[0]}x{self.pixel_size[1]} px)"
        )

    def lose_context(self) -> None:
        """Simulate a lost drawing context; drawing becomes a no-op."""
        self._available = False

    def restore_context(self) -> None:
        self._available = True

    def clear_region(self, x: float, y: float, width: float, height: float) -> None:
        if not self._available:
            return
        s = self._dpr
        x1 = int(math.floor(x * s))
        y1 = int(math.floor(y * s))
        x2 = int(math.ceil((x + width) * s))
        y2 = int(math.ceil((y + height) * s))
        clear_rect(self._buffer, x1, y1, x2 - x1, y2 - y1)

    def fill_circle(self, x: float, y: float, radius: float, color: RGBA) -> None:
        if not self._available:
            return
        s = self._dpr
        fill_circle(self._buffer, x * s, y * s, radius * s, color)

    def fill_circles(self, xs, ys, radius: float, rgb: Color, alphas) -> None:
        if not self._available:
            return
        s = self._dpr
        fill_circles(
            self._buffer,
            np.asarray(xs, dtype=np.float32) * s,
            np.asarray(ys, dtype=np.float32) * s,
            radius * s,
            rgb,
            np.asarray(alphas, dtype=np.float32),
        )

    def get_buffer(self) -> Buffer:
        """Get copy of current RGBA backing buffer."""
        return self._buffer.copy()

    def alpha_at(self, x: float, y: float) -> float:
        """Alpha of the device pixel under a logical coordinate (0 if outside)."""
        s = self._dpr
        px, py = int(math.floor(x * s)), int(math.floor(y * s))
        h, w = self._buffer.shape[:2]
        if 0 <= px < w and 0 <= py < h:
            return float(self._buffer[py, px, 3])
        return 0.0

    def to_rgb(self, background: Color = (0, 0, 0)) -> NDArray[np.uint8]:
        """Flatten onto an opaque background for presentation."""
        return composite_rgb(self._buffer, background)
