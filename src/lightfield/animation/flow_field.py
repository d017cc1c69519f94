"""Noise-driven dot field.

A regular grid of dots drifts around its rest positions. Each frame the
global time advances by a fixed step, every dot samples the noise field for
a displacement and an opacity bonus, and both are smoothed exponentially
toward those targets before the dots are drawn.

Point state is kept as parallel numpy arrays so a frame is a handful of
vectorized operations regardless of grid size.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple
import logging
import math
import random

import numpy as np
from numpy.typing import NDArray

from lightfield.graphics.noise import NoiseField
from lightfield.hardware.base import RasterSurface

logger = logging.getLogger(__name__)


@dataclass
class FlowFieldParams:
    """Flow field constants."""

    spacing: float = 14.0
    time_step: float = 0.003
    phase_step: float = 0.1
    base_opacity: float = 0.06
    opacity_range: float = 0.08
    opacity_time_scale: float = 0.5
    smoothing: float = 0.06
    flow_strength: float = 6.0
    dot_radius: float = 1.0
    color: Tuple[int, int, int] = (255, 255, 255)

    @classmethod
    def from_settings(cls, settings: Any) -> "FlowFieldParams":
        """Build from a ``FieldSettings`` group."""
        return cls(
            spacing=settings.spacing,
            time_step=settings.time_step,
            base_opacity=settings.base_opacity,
            opacity_range=settings.opacity_range,
            smoothing=settings.smoothing,
            flow_strength=settings.flow_strength,
            dot_radius=settings.dot_radius,
            color=tuple(settings.color[:3]),
        )


@dataclass
class GridPoint:
    """Snapshot of one dot."""

    origin_x: float
    origin_y: float
    x: float
    y: float
    target_x: float
    target_y: float
    opacity: float
    target_opacity: float
    phase_x: float
    phase_y: float


class FlowFieldAnimator:
    """Owns the dot grid and advances it one frame at a time.

    Args:
        surface: Raster sink; None makes every frame a no-op
        params: Field constants
        rng: Random source for the noise permutation (seed it for tests)
    """

    def __init__(
        self,
        surface: Optional[RasterSurface] = None,
        params: Optional[FlowFieldParams] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.surface = surface
        self.params = params or FlowFieldParams()
        self.noise = NoiseField(rng)
        self.time = 0.0
        self.frames = 0

        self._size: Tuple[float, float] = (0.0, 0.0)
        self._cols = 0
        self._rows = 0
        self._alloc(0)

        if surface is not None:
            self.resize(surface.width, surface.height)

    def _alloc(self, count: int) -> None:
        self._origin_x = np.zeros(count, dtype=np.float64)
        self._origin_y = np.zeros(count, dtype=np.float64)
        self._x = np.zeros(count, dtype=np.float64)
        self._y = np.zeros(count, dtype=np.float64)
        self._target_x = np.zeros(count, dtype=np.float64)
        self._target_y = np.zeros(count, dtype=np.float64)
        self._opacity = np.zeros(count, dtype=np.float64)
        self._target_opacity = np.zeros(count, dtype=np.float64)
        self._phase_x = np.zeros(count, dtype=np.float64)
        self._phase_y = np.zeros(count, dtype=np.float64)

    @property
    def size(self) -> Tuple[float, float]:
        """Logical (width, height) the grid was built for."""
        return self._size

    @property
    def grid_shape(self) -> Tuple[int, int]:
        """(columns, rows) of the dot grid."""
        return (self._cols, self._rows)

    @property
    def point_count(self) -> int:
        return self._origin_x.size

    @property
    def positions(self) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        return self._x.copy(), self._y.copy()

    @property
    def opacities(self) -> NDArray[np.float64]:
        return self._opacity.copy()

    def resize(self, width: float, height: float) -> None:
        """Rebuild the grid for a new logical size.

        Pitch is fixed, so the point count scales with area. Dots restart at
        rest with base opacity; time keeps running.
        """
        p = self.params
        width = max(0.0, float(width))
        height = max(0.0, float(height))
        self._size = (width, height)

        if width <= 0 or height <= 0 or p.spacing <= 0:
            self._cols = self._rows = 0
            self._alloc(0)
            logger.debug(f"Flow field emptied for {width:g}x{height:g}")
            return

        self._cols = math.ceil(width / p.spacing) + 1
        self._rows = math.ceil(height / p.spacing) + 1

        ii, jj = np.meshgrid(np.arange(self._cols), np.arange(self._rows), indexing="ij")
        ii = ii.ravel().astype(np.float64)
        jj = jj.ravel().astype(np.float64)

        self._alloc(ii.size)
        self._origin_x = ii * p.spacing
        self._origin_y = jj * p.spacing
        self._x = self._origin_x.copy()
        self._y = self._origin_y.copy()
        self._target_x = self._origin_x.copy()
        self._target_y = self._origin_y.copy()
        self._opacity.fill(p.base_opacity)
        self._target_opacity.fill(p.base_opacity)
        self._phase_x = ii * p.phase_step
        self._phase_y = jj * p.phase_step

        logger.debug(
            f"Flow field rebuilt: {self._cols}x{self._rows} dots for {width:g}x{height:g}"
        )

    def step(self) -> None:
        """Advance time and move every dot toward its noise target - VECTORIZED."""
        p = self.params
        self.time += p.time_step
        self.frames += 1
        if self.point_count == 0:
            return

        t = self.time
        flow_x = self.noise.sample_array(self._phase_x + t, self._phase_y)
        flow_y = self.noise.sample_array(self._phase_x, self._phase_y + t)
        ts = t * p.opacity_time_scale
        flow_opacity = self.noise.sample_array(self._phase_x + ts, self._phase_y + ts)

        self._target_x = self._origin_x + flow_x * p.flow_strength
        self._target_y = self._origin_y + flow_y * p.flow_strength
        self._target_opacity = p.base_opacity + (flow_opacity + 1.0) * 0.5 * p.opacity_range

        self._x += (self._target_x - self._x) * p.smoothing
        self._y += (self._target_y - self._y) * p.smoothing
        self._opacity += (self._target_opacity - self._opacity) * p.smoothing

    def render(self) -> None:
        """Clear the surface and draw every dot at its current position."""
        surface = self.surface
        if surface is None or not surface.is_available:
            return
        surface.clear()
        if self.point_count == 0:
            return
        surface.fill_circles(self._x, self._y, self.params.dot_radius, self.params.color, self._opacity)

    def geometry_matches(self) -> bool:
        """True when the grid was built for the surface's current size."""
        if self.surface is None:
            return False
        return (float(self.surface.width), float(self.surface.height)) == self._size

    def frame(self, now_ms: float = 0.0) -> bool:
        """Frame callback: step and render.

        Returns:
            True if the frame was rendered; False when there is no usable
            surface or the surface was resized after the grid was built
        """
        surface = self.surface
        if surface is None or not surface.is_available:
            return False
        if not self.geometry_matches():
            logger.debug(
                f"Skipping flow frame: grid {self._size} vs surface "
                f"({surface.width}, {surface.height})"
            )
            return False
        self.step()
        self.render()
        return True

    def point(self, index: int) -> GridPoint:
        """Snapshot of the dot at ``index`` (column-major, like the grid build)."""
        return GridPoint(
            origin_x=float(self._origin_x[index]),
            origin_y=float(self._origin_y[index]),
            x=float(self._x[index]),
            y=float(self._y[index]),
            target_x=float(self._target_x[index]),
            target_y=float(self._target_y[index]),
            opacity=float(self._opacity[index]),
            target_opacity=float(self._target_opacity[index]),
            phase_x=float(self._phase_x[index]),
            phase_y=float(self._phase_y[index]),
        )

    def points(self) -> Iterator[GridPoint]:
        for index in range(self.point_count):
            yield self.point(index)
