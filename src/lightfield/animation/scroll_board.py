"""Scrolling dot-matrix board.

Renders the window ``[offset, offset + columns)`` of a pattern buffer as a
grid of round lights and advances the offset by one column per tick. The
buffer is at least twice the visible width, so the window is read with a
single modulo per column and never needs splicing.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple
import logging
import math

import numpy as np

from lightfield.graphics.palette import BoardColors, DEFAULT_COLORS
from lightfield.graphics.pattern import Cell, PatternBuffer
from lightfield.hardware.base import RasterSurface

logger = logging.getLogger(__name__)


# =============================================================================
# TIMING STRATEGIES
# =============================================================================

class AdvanceTiming(ABC):
    """Decides whether a tick advances the scroll offset."""

    @abstractmethod
    def should_advance(self, now_ms: float) -> bool:
        ...


class FrameSyncedTiming(AdvanceTiming):
    """Advance once per display refresh."""

    def should_advance(self, now_ms: float) -> bool:
        return True

    def __repr__(self) -> str:
        return "FrameSyncedTiming()"


class IntervalTiming(AdvanceTiming):
    """Advance when at least ``interval_ms`` passed since the last advance.

    The first tick always advances.
    """

    def __init__(self, interval_ms: float) -> None:
        if interval_ms < 0:
            raise ValueError(f"interval_ms must be >= 0, got {interval_ms}")
        self.interval_ms = float(interval_ms)
        self._last_ms: Optional[float] = None

    def should_advance(self, now_ms: float) -> bool:
        if self._last_ms is not None and now_ms - self._last_ms < self.interval_ms:
            return False
        self._last_ms = now_ms
        return True

    def __repr__(self) -> str:
        return f"IntervalTiming({self.interval_ms:g})"


def make_timing(update_interval: Optional[float]) -> AdvanceTiming:
    """Timing for an ``update_interval`` setting: milliseconds, or None for frame-synced."""
    if update_interval is None:
        return FrameSyncedTiming()
    return IntervalTiming(update_interval)


# =============================================================================
# RENDERER
# =============================================================================

class ScrollBoardRenderer:
    """Owns a pattern buffer and its scroll offset.

    Args:
        pattern: Compiled pattern (the renderer owns it from now on)
        light_size: Light diameter in logical pixels
        gap: Space between lights in logical pixels
        colors: Four-state palette
        timing: Advance strategy (defaults to frame-synced)
    """

    def __init__(
        self,
        pattern: PatternBuffer,
        light_size: float = 4,
        gap: float = 1,
        colors: Optional[BoardColors] = None,
        timing: Optional[AdvanceTiming] = None,
    ) -> None:
        if light_size <= 0:
            raise ValueError(f"light_size must be > 0, got {light_size}")
        if gap < 0:
            raise ValueError(f"gap must be >= 0, got {gap}")

        self._pattern = pattern
        self.light_size = float(light_size)
        self.gap = float(gap)
        self.colors = colors or DEFAULT_COLORS
        self.timing = timing or FrameSyncedTiming()

        self._offset = 0
        self._columns = 0
        self.steps = 0

    # --- geometry ------------------------------------------------------------

    @property
    def pattern(self) -> PatternBuffer:
        return self._pattern

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def columns(self) -> int:
        """Visible column count."""
        return self._columns

    @property
    def rows(self) -> int:
        return self._pattern.rows

    @property
    def pitch(self) -> float:
        """Distance between neighboring light centers."""
        return self.light_size + self.gap

    @property
    def pixel_size(self) -> Tuple[float, float]:
        """Logical (width, height) of the visible board."""
        return (self._columns * self.pitch, self.rows * self.pitch)

    def resize(self, container_width: float) -> int:
        """Recompute the visible column count for a container width.

        Returns:
            New column count (0 for a zero-width container)
        """
        columns = max(0, int(math.floor(container_width / self.pitch)))
        if columns != self._columns:
            logger.debug(f"Board columns {self._columns} -> {columns} (width {container_width:g})")
        self._columns = columns
        return columns

    def set_pattern(self, pattern: PatternBuffer) -> None:
        """Replace the buffer; the offset is folded into the new width."""
        self._pattern = pattern
        self._offset %= pattern.width

    def cell_center(self, row: int, col: int) -> Tuple[float, float]:
        """Logical center of the light at visible (row, col)."""
        half = self.light_size / 2
        return (col * self.pitch + half, row * self.pitch + half)

    def cell_at(self, x: float, y: float) -> Tuple[int, int]:
        """Visible (row, col) under a logical pixel (may be out of range)."""
        return (int(math.floor(y / self.pitch)), int(math.floor(x / self.pitch)))

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self._columns

    def buffer_column(self, col: int) -> int:
        """Pattern column currently shown at visible column ``col``."""
        return (col + self._offset) % self._pattern.width

    # --- scrolling -----------------------------------------------------------

    def advance(self) -> int:
        """Move the window one column to the right."""
        self._offset = (self._offset + 1) % self._pattern.width
        self.steps += 1
        return self._offset

    def tick(self, now_ms: float, suspended: bool = False) -> bool:
        """Advance if the timing strategy allows and scrolling is not suspended.

        Returns:
            True if the offset moved
        """
        if suspended:
            return False
        if not self.timing.should_advance(now_ms):
            return False
        self.advance()
        return True

    # --- drawing -------------------------------------------------------------

    def render(self, surface: Optional[RasterSurface]) -> bool:
        """Repaint the whole visible window.

        Returns:
            False when nothing could be drawn (no surface, lost context or
            empty geometry)
        """
        if surface is None or not surface.is_available:
            return False
        if self._columns <= 0 or self.rows <= 0:
            return False

        surface.clear()
        window = self._pattern.window(self._offset, self._columns)
        rows_idx, cols_idx = np.indices(window.shape)
        half = self.light_size / 2
        xs = cols_idx * self.pitch + half
        ys = rows_idx * self.pitch + half

        known = np.isin(window, (Cell.DIM, Cell.ACCENT, Cell.BRIGHT))
        groups = (
            (~known, self.colors.background),
            (window == Cell.DIM, self.colors.dim),
            (window == Cell.ACCENT, self.colors.accent),
            (window == Cell.BRIGHT, self.colors.bright),
        )
        for mask, (r, g, b, a) in groups:
            if not mask.any():
                continue
            count = int(np.count_nonzero(mask))
            surface.fill_circles(xs[mask], ys[mask], half, (r, g, b), np.full(count, a))
        return True

    def paint_cell(self, surface: Optional[RasterSurface], row: int, col: int, value: int) -> None:
        """Redraw one visible light in place without a full repaint."""
        if surface is None or not surface.is_available:
            return
        r, g, b, a = self.colors.color_for(value)
        x, y = self.cell_center(row, col)
        surface.clear_region(col * self.pitch, row * self.pitch, self.pitch, self.pitch)
        surface.fill_circles([x], [y], self.light_size / 2, (r, g, b), [a])

    def frame(self, surface: Optional[RasterSurface], now_ms: float, suspended: bool = False) -> bool:
        """Frame callback body: tick, then repaint."""
        self.tick(now_ms, suspended)
        return self.render(surface)
