"""Base class for all mountable effects in LIGHTFIELD."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional
import logging

from lightfield.animation.engine import FrameHandle, FrameScheduler
from lightfield.core.events import Event, EventBus, EventType
from lightfield.hardware.base import RasterSurface

logger = logging.getLogger(__name__)


@dataclass
class EffectContext:
    """Shared host services passed to effects."""

    event_bus: EventBus
    scheduler: FrameScheduler


class BaseEffect(ABC):
    """Abstract base class for effects.

    An effect owns one raster surface and one recurring frame callback.

    Lifecycle:
        1. enter() - subscribe listeners, schedule the frame callback
        2. on_frame(now_ms) - per-frame work while active
        3. exit() - cancel the frame handle and remove every listener

    Both ``enter`` and ``exit`` are idempotent.
    """

    # Effect metadata (override in subclasses)
    name: str = "base"

    def __init__(self, context: EffectContext, surface: RasterSurface, name: Optional[str] = None) -> None:
        self.context = context
        self.surface = surface
        if name is not None:
            self.name = name

        self._active = False
        self._frame_handle: Optional[FrameHandle] = None
        self._unsubscribers: List[Callable[[], None]] = []

        logger.debug(f"Effect created: {self.name}")

    @property
    def is_active(self) -> bool:
        """Check if effect is currently mounted."""
        return self._active

    @property
    def frame_handle(self) -> Optional[FrameHandle]:
        return self._frame_handle

    # Lifecycle methods
    def enter(self) -> None:
        """Mount the effect."""
        if self._active:
            return
        self._active = True

        self._subscribe(EventType.RESIZE, self._on_resize_event)
        self.on_enter()
        self._frame_handle = self.context.scheduler.schedule(self._run_frame, name=f"effect_{self.name}")

        logger.info(f"Entering effect: {self.name}")

    def exit(self) -> None:
        """Unmount the effect and release every host resource it holds."""
        if not self._active:
            return

        logger.info(f"Exiting effect: {self.name}")

        if self._frame_handle is not None:
            self._frame_handle.cancel()
            self._frame_handle = None

        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

        self.on_exit()
        self._active = False

    def _subscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Subscribe for this effect's lifetime; events addressed elsewhere are dropped."""
        def filtered(event: Event) -> None:
            if event.is_for(self.name):
                handler(event)

        self._unsubscribers.append(self.context.event_bus.subscribe(event_type, filtered))

    def _run_frame(self, now_ms: float) -> None:
        if not self._active:
            return
        self.on_frame(now_ms)

    def _on_resize_event(self, event: Event) -> None:
        data = event.data
        self.resize(
            float(data.get("width", 0)),
            float(data.get("height", 0)),
            float(data.get("device_pixel_ratio", 1.0)),
        )

    # Abstract methods (must be implemented by subclasses)
    @abstractmethod
    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        """Recompute geometry for a new container size."""
        pass

    @abstractmethod
    def on_frame(self, now_ms: float) -> None:
        """Per-frame update and render."""
        pass

    # Optional overrides
    def on_enter(self) -> None:
        """Called while mounting, before the frame callback is scheduled."""
        pass

    def on_exit(self) -> None:
        """Called while unmounting, after host resources are released."""
        pass

