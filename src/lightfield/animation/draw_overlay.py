"""Freehand drawing on top of a scrolling board.

Pointer samples arrive in surface-local logical pixels. While a gesture is
active every move rasterizes a Bresenham segment from the previous sample
to the new one in pixel space; each pixel on the segment is mapped to a
visible light, translated by the current scroll offset into pattern space,
written and redrawn on the spot if its value changes.

Paint value and hover flag are dual-owned (see ``ControlledValue``).
"""

from typing import Optional, Tuple
import logging
import math

from lightfield.animation.scroll_board import ScrollBoardRenderer
from lightfield.core.controlled import ControlledValue
from lightfield.core.state import InteractionState, InteractionStateMachine
from lightfield.graphics.pattern import Cell
from lightfield.graphics.primitives import line_points
from lightfield.hardware.base import RasterSurface

logger = logging.getLogger(__name__)

DEFAULT_PAINT_VALUE = Cell.ACCENT


def _to_pixel(x: float, y: float) -> Tuple[int, int]:
    return (int(math.floor(x)), int(math.floor(y)))


class InteractiveDrawOverlay:
    """Pointer-driven editor for a board's pattern buffer.

    Args:
        board: Renderer whose buffer and offset the overlay edits
        surface: Where edited lights are redrawn
        draw_state: Paint value (uncontrolled ACCENT if omitted)
        hover: Hover flag (uncontrolled False if omitted)
        disable_drawing: Start with every pointer handler inert
        pause_on_hover: Whether hover suspends scrolling
    """

    def __init__(
        self,
        board: ScrollBoardRenderer,
        surface: Optional[RasterSurface] = None,
        draw_state: Optional[ControlledValue[Cell]] = None,
        hover: Optional[ControlledValue[bool]] = None,
        disable_drawing: bool = False,
        pause_on_hover: bool = True,
    ) -> None:
        self.board = board
        self.surface = surface
        self.draw_state = draw_state or ControlledValue(DEFAULT_PAINT_VALUE, name="draw_state")
        self.hover = hover or ControlledValue(False, name="hover")
        self.pause_on_hover = pause_on_hover

        initial = InteractionState.DISABLED if disable_drawing else InteractionState.IDLE
        self.machine = InteractionStateMachine(initial)
        self.cells_painted = 0

    # --- state ---------------------------------------------------------------

    @property
    def state(self) -> InteractionState:
        return self.machine.state

    @property
    def is_drawing(self) -> bool:
        return self.machine.is_drawing

    @property
    def drawing_enabled(self) -> bool:
        return not self.machine.is_disabled

    @property
    def paint_value(self) -> Cell:
        return Cell(self.draw_state.value)

    @property
    def is_hovered(self) -> bool:
        return bool(self.hover.value)

    @property
    def suspends_scroll(self) -> bool:
        """True while hover should freeze the scroll offset."""
        return self.pause_on_hover and self.is_hovered

    def set_paint_value(self, value: int) -> bool:
        """Request a new paint value (stored only when uncontrolled)."""
        return self.draw_state.request(Cell(value))

    def set_drawing_enabled(self, enabled: bool) -> None:
        if enabled and self.machine.is_disabled:
            self.machine.transition(InteractionState.IDLE)
        elif not enabled and not self.machine.is_disabled:
            self.machine.transition(InteractionState.DISABLED)

    # --- pointer handlers ----------------------------------------------------

    def pointer_down(self, x: float, y: float) -> bool:
        """Start a gesture and paint the light under the pointer.

        Returns:
            False if drawing is disabled
        """
        if self.machine.is_disabled:
            return False
        if not self.machine.is_drawing:
            self.machine.transition(InteractionState.DRAWING)

        point = _to_pixel(x, y)
        self.draw_line(point[0], point[1], point[0], point[1])
        self.machine.context.last_point = point
        return True

    def pointer_move(self, x: float, y: float) -> int:
        """Extend the gesture to (x, y).

        Returns:
            Number of cells changed
        """
        if not self.machine.is_drawing:
            return 0

        point = _to_pixel(x, y)
        start = self.machine.context.last_point or point
        changed = self.draw_line(start[0], start[1], point[0], point[1])
        self.machine.context.last_point = point
        return changed

    def pointer_up(self) -> None:
        if self.machine.is_drawing:
            self.machine.transition(InteractionState.IDLE)

    def pointer_enter(self) -> None:
        self.hover.request(True)

    def pointer_leave(self) -> None:
        self.hover.request(False)
        self.pointer_up()

    # --- rasterization -------------------------------------------------------

    def draw_line(self, x1: int, y1: int, x2: int, y2: int) -> int:
        """Paint every light crossed by a pixel-space segment.

        Pixels outside the visible board are skipped individually. A light
        is written and redrawn only when its value differs from the paint
        value.

        Returns:
            Number of cells changed
        """
        board = self.board
        pattern = board.pattern
        value = self.paint_value
        changed = 0

        for px, py in line_points(x1, y1, x2, y2):
            row, col = board.cell_at(px, py)
            if not board.in_bounds(row, col):
                continue
            if pattern.set_cell(row, board.buffer_column(col), value):
                board.paint_cell(self.surface, row, col, value)
                changed += 1

        if changed:
            self.cells_painted += changed
            logger.debug(f"Painted {changed} cells with {value.name} ({x1},{y1})->({x2},{y2})")
        return changed
