"""
Simulated raster panels for the simulator.

A panel is a BufferSurface that can present itself as a pygame surface
with per-pixel alpha, so effects can be layered in the window.
"""

import pygame
import numpy as np

from ...graphics.surface import BufferSurface


class SimulatedPanel(BufferSurface):
    """
    BufferSurface with a pygame presentation step.

    The backing store is in device pixels; ``render`` scales it back to the
    panel's logical size when the device pixel ratio is not 1.
    """

    def render(self) -> pygame.Surface | None:
        """
        Convert the RGBA buffer to a pygame surface.

        Returns:
            pygame.Surface with straight alpha, or None for an empty panel
        """
        w, h = self.pixel_size
        if w == 0 or h == 0:
            return None

        rgba = np.clip(self.get_buffer() * 255.0 + 0.5, 0, 255).astype(np.uint8)
        surface = pygame.image.frombytes(rgba.tobytes(), (w, h), "RGBA")

        logical = (max(1, int(self.width)), max(1, int(self.height)))
        if logical != (w, h):
            surface = pygame.transform.smoothscale(surface, logical)
        return surface
