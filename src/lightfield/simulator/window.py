"""
Main simulator window using pygame.

Hosts the background dot field and the light board in a desktop window:
drives the frame scheduler once per refresh, turns mouse input into pointer
events and window resizes into queued RESIZE events.
"""

import pygame
import asyncio
import logging

from ..animation.engine import FrameScheduler
from ..config.settings import WindowSettings
from ..core.events import EventBus, EventType, pointer_event, resize_event
from ..effects.dot_field import DotFieldEffect
from ..effects.light_board import LightBoardEffect
from ..graphics.pattern import Cell
from .mock_hardware.display import SimulatedPanel
from .mock_hardware.input import SimulatedPointer

logger = logging.getLogger(__name__)

# Share of the window width used by the board container
BOARD_WIDTH_RATIO = 0.8

_POINTER_EVENTS = {
    "down": EventType.POINTER_DOWN,
    "move": EventType.POINTER_MOVE,
    "up": EventType.POINTER_UP,
    "enter": EventType.POINTER_ENTER,
    "leave": EventType.POINTER_LEAVE,
}

_PAINT_KEYS = {
    pygame.K_0: Cell.EMPTY,
    pygame.K_1: Cell.DIM,
    pygame.K_2: Cell.ACCENT,
    pygame.K_3: Cell.BRIGHT,
}


class SimulatorWindow:
    """
    Simulator window managing both effects.

    Keyboard Mapping:
        ESC / Q: Exit simulator
        D: Toggle drawing on the board
        0-3: Select paint value (empty, dim, accent, bright)
        SPACE: Pin / unpin hover (freezes scrolling)
    """

    def __init__(
        self,
        config: WindowSettings,
        event_bus: EventBus,
        scheduler: FrameScheduler,
        field_effect: DotFieldEffect,
        board_effect: LightBoardEffect,
    ) -> None:
        self.config = config
        self.event_bus = event_bus
        self.scheduler = scheduler
        self.field_effect = field_effect
        self.board_effect = board_effect

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._size = (config.width, config.height)
        self._hover_pinned = False

        self.pointer = SimulatedPointer()
        self._unsubscribe_pointer = self.pointer.on_pointer(self._on_pointer)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(self._size, pygame.RESIZABLE)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 18)

        self._queue_resize(*self._size)
        logger.info(f"Pygame initialized: {self._size[0]}x{self._size[1]}")

    # --- layout --------------------------------------------------------------

    def _board_origin(self) -> tuple[float, float]:
        w, h = self._size
        board_w, board_h = self.board_effect.board.pixel_size
        return ((w - board_w) / 2, (h - board_h) / 2)

    def _queue_resize(self, width: int, height: int) -> None:
        """Queue geometry changes; they are applied at the next frame boundary."""
        self._size = (width, height)
        dpr = self.config.device_pixel_ratio
        self.event_bus.queue_event(resize_event(width, height, dpr, target=self.field_effect.name))
        self.event_bus.queue_event(
            resize_event(width * BOARD_WIDTH_RATIO, height, dpr, target=self.board_effect.name)
        )

    def _update_pointer_region(self) -> None:
        x, y = self._board_origin()
        board_w, board_h = self.board_effect.board.pixel_size
        self.pointer.set_region(x, y, board_w, board_h)

    # --- input ---------------------------------------------------------------

    def _on_pointer(self, kind: str, x: float, y: float) -> None:
        self.event_bus.emit(pointer_event(
            _POINTER_EVENTS[kind], x, y, target=self.board_effect.name, source="mouse"
        ))

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._queue_resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.pointer.feed_down(*event.pos)
            elif event.type == pygame.MOUSEMOTION:
                self.pointer.feed_move(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.pointer.feed_up(*event.pos)
            elif event.type == pygame.WINDOWLEAVE:
                self.pointer.feed_move(-1, -1)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key
        overlay = self.board_effect.overlay

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_d:
            overlay.set_drawing_enabled(not overlay.drawing_enabled)
            logger.info(f"Drawing {'enabled' if overlay.drawing_enabled else 'disabled'}")
        elif key in _PAINT_KEYS:
            overlay.set_paint_value(_PAINT_KEYS[key])
        elif key == pygame.K_SPACE:
            self._hover_pinned = not self._hover_pinned
            if self._hover_pinned:
                self.board_effect.control_hover(True)
            else:
                self.board_effect.release_hover(self.pointer.is_inside())
            logger.info(f"Hover pin {'on' if self._hover_pinned else 'off'}")

    # --- rendering -----------------------------------------------------------

    def _render(self) -> None:
        """Compose both panels onto the window."""
        if not self._screen:
            return

        self._screen.fill(self.config.background)

        for effect, origin in (
            (self.field_effect, (0, 0)),
            (self.board_effect, self._board_origin()),
        ):
            if isinstance(effect.surface, SimulatedPanel):
                image = effect.surface.render()
                if image is not None:
                    self._screen.blit(image, (int(origin[0]), int(origin[1])))

        self._render_status_bar()
        pygame.display.flip()

    def _render_status_bar(self) -> None:
        if not self._font:
            return
        overlay = self.board_effect.overlay
        board = self.board_effect.board
        status = (
            f"draw: {'on' if overlay.drawing_enabled else 'off'}  "
            f"paint: {overlay.paint_value.name}  "
            f"hover: {'pinned' if self._hover_pinned else overlay.is_hovered}  "
            f"offset: {board.offset}/{board.pattern.width}  "
            f"fps: {self._clock.get_fps() if self._clock else 0:.0f}"
        )
        text = self._font.render(status, True, (160, 160, 170))
        self._screen.blit(text, (10, self._size[1] - 22))

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            # Handle events
            self._handle_events()

            # Geometry changes land on the frame boundary
            await self.event_bus.process_queue()
            self._update_pointer_region()

            # Run effects
            self.scheduler.tick(pygame.time.get_ticks())

            # Render
            self._render()

            # Frame timing
            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self._unsubscribe_pointer()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
