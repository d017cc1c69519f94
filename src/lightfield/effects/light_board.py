"""Scrolling light board effect.

Wires the pattern compiler, scroll renderer and draw overlay to one surface
and the host's frame scheduler / event bus.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging

from lightfield.animation.draw_overlay import InteractiveDrawOverlay
from lightfield.animation.scroll_board import ScrollBoardRenderer, make_timing
from lightfield.core.controlled import ControlledValue
from lightfield.core.events import Event, EventType
from lightfield.effects.base import BaseEffect, EffectContext
from lightfield.graphics.fonts import DEFAULT_FONT, GlyphFont, load_font
from lightfield.graphics.palette import merge_colors
from lightfield.graphics.pattern import MIN_SPACING, Cell, PatternBuffer, compile_pattern
from lightfield.hardware.base import RasterSurface

logger = logging.getLogger(__name__)


@dataclass
class LightBoardConfig:
    """Light board configuration.

    ``controlled_*`` fields hand ownership of the paint value or hover flag
    to the caller: when set, the board renders that value and reports its
    own requests through the matching ``on_*_change`` callback only.
    """

    text: str = ""
    rows: int = 5
    light_size: float = 4.0
    gap: float = 1.0
    update_interval: Optional[float] = 10.0
    font: str = DEFAULT_FONT
    colors: Dict[str, Any] = field(default_factory=dict)
    disable_drawing: bool = True
    pause_on_hover: bool = True
    min_spacing: int = MIN_SPACING

    controlled_draw_state: Optional[Cell] = None
    on_draw_state_change: Optional[Callable[[Cell], None]] = None
    controlled_hover_state: Optional[bool] = None
    on_hover_state_change: Optional[Callable[[bool], None]] = None

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> "LightBoardConfig":
        """Build from a ``BoardSettings`` group; keyword overrides win."""
        values = dict(
            text=settings.text,
            rows=settings.rows,
            light_size=settings.light_size,
            gap=settings.gap,
            update_interval=settings.update_interval,
            font=settings.font,
            colors=dict(settings.colors),
            disable_drawing=settings.disable_drawing,
            pause_on_hover=settings.pause_on_hover,
            min_spacing=settings.min_spacing,
        )
        values.update(overrides)
        return cls(**values)


class LightBoardEffect(BaseEffect):
    """Scrolling, drawable dot-matrix text."""

    name = "light_board"

    def __init__(
        self,
        context: EffectContext,
        surface: RasterSurface,
        config: Optional[LightBoardConfig] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(context, surface, name=name)
        self.config = config or LightBoardConfig()

        self.font: GlyphFont = load_font(self.config.font)
        self.board = ScrollBoardRenderer(
            self._compile(columns=0),
            light_size=self.config.light_size,
            gap=self.config.gap,
            colors=merge_colors(self.config.colors),
            timing=make_timing(self.config.update_interval),
        )

        draw_state = ControlledValue(
            Cell.ACCENT,
            controlled=self.config.controlled_draw_state,
            on_change=self.config.on_draw_state_change,
            name=f"{self.name}.draw_state",
        )
        hover = ControlledValue(
            False,
            controlled=self.config.controlled_hover_state,
            on_change=self.config.on_hover_state_change,
            name=f"{self.name}.hover",
        )
        self.overlay = InteractiveDrawOverlay(
            self.board,
            surface,
            draw_state=draw_state,
            hover=hover,
            disable_drawing=self.config.disable_drawing,
            pause_on_hover=self.config.pause_on_hover,
        )

        self.frames_rendered = 0
        self.frames_skipped = 0
        self.recompiles = 0

    # --- configuration -------------------------------------------------------

    @property
    def pattern(self) -> PatternBuffer:
        return self.board.pattern

    def set_text(self, text: str) -> None:
        if text == self.config.text:
            return
        self.config.text = text
        self._recompile()

    def set_rows(self, rows: int) -> None:
        if rows == self.config.rows:
            return
        self.config.rows = rows
        self._recompile()

    def set_font(self, font: str) -> None:
        """Switch font by name.

        Raises:
            ValueError: If the font name is unknown
        """
        new_font = load_font(font)
        if new_font is self.font:
            return
        self.config.font = font
        self.font = new_font
        self._recompile()

    def control_draw_state(self, value: Cell) -> None:
        self.overlay.draw_state.control(Cell(value))

    def control_hover(self, hovered: bool) -> None:
        self.overlay.hover.control(bool(hovered))

    def release_hover(self, hovered: bool) -> None:
        """Take hover back from the outside owner and sync it to the pointer.

        Enter/leave requests made while controlled were not stored, so the
        internal flag may be stale.
        """
        self.overlay.hover.release()
        self.overlay.hover.request(bool(hovered))

    def _compile(self, columns: int) -> PatternBuffer:
        return compile_pattern(
            self.config.text,
            self.config.rows,
            self.font,
            columns=columns,
            min_spacing=self.config.min_spacing,
        )

    def _recompile(self) -> None:
        self.board.set_pattern(self._compile(self.board.columns))
        self.recompiles += 1
        self._fit_surface()
        logger.debug(
            f"{self.name}: recompiled {self.config.text!r} "
            f"({self.board.rows}x{self.board.pattern.width}, offset {self.board.offset})"
        )

    # --- geometry ------------------------------------------------------------

    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        """Fit the board to a container width; height follows the row count."""
        columns = self.board.resize(width)
        if self.board.pattern.width < columns * 2:
            self._recompile()
        self._fit_surface(device_pixel_ratio)

    def _fit_surface(self, device_pixel_ratio: Optional[float] = None) -> None:
        dpr = device_pixel_ratio or self.surface.device_pixel_ratio
        board_w, board_h = self.board.pixel_size
        self.surface.resize(board_w, board_h, dpr)

    def geometry_matches(self) -> bool:
        board_w, board_h = self.board.pixel_size
        return (float(self.surface.width), float(self.surface.height)) == (board_w, board_h)

    # --- lifecycle -----------------------------------------------------------

    def on_enter(self) -> None:
        self._subscribe(EventType.POINTER_DOWN, self._on_pointer_down)
        self._subscribe(EventType.POINTER_MOVE, self._on_pointer_move)
        self._subscribe(EventType.POINTER_UP, self._on_pointer_up)
        self._subscribe(EventType.POINTER_ENTER, self._on_pointer_enter)
        self._subscribe(EventType.POINTER_LEAVE, self._on_pointer_leave)

    def on_exit(self) -> None:
        self.overlay.pointer_up()
        logger.debug(
            f"{self.name}: {self.frames_rendered} frames rendered, "
            f"{self.frames_skipped} skipped, {self.overlay.cells_painted} cells painted"
        )

    def on_frame(self, now_ms: float) -> None:
        if not self.geometry_matches():
            self.frames_skipped += 1
            return
        if self.board.frame(self.surface, now_ms, suspended=self.overlay.suspends_scroll):
            self.frames_rendered += 1
        else:
            self.frames_skipped += 1

    # --- pointer routing -----------------------------------------------------

    def _on_pointer_down(self, event: Event) -> None:
        self.overlay.pointer_down(event.data.get("x", 0.0), event.data.get("y", 0.0))

    def _on_pointer_move(self, event: Event) -> None:
        self.overlay.pointer_move(event.data.get("x", 0.0), event.data.get("y", 0.0))

    def _on_pointer_up(self, event: Event) -> None:
        self.overlay.pointer_up()

    def _on_pointer_enter(self, event: Event) -> None:
        self.overlay.pointer_enter()

    def _on_pointer_leave(self, event: Event) -> None:
        self.overlay.pointer_leave()
