"""
Simulated pointer device for the simulator.

Maps window mouse events into the local coordinate space of one
rectangular region and synthesizes enter/leave as the cursor crosses it.
"""

from typing import Callable
import logging

from ...hardware.base import PointerSource

logger = logging.getLogger(__name__)

PointerCallback = Callable[[str, float, float], None]


class SimulatedPointer(PointerSource):
    """
    Mouse-backed pointer source for one region of the window.

    The window feeds raw mouse samples through ``feed_*``; callbacks get
    ("down" | "move" | "up" | "enter" | "leave", x, y) in region-local
    pixels. Down is only reported inside the region; move and up are
    reported while a press that started inside is held.
    """

    def __init__(self, x: float = 0, y: float = 0, width: float = 0, height: float = 0) -> None:
        self._rect = (float(x), float(y), float(width), float(height))
        self._inside = False
        self._pressed = False
        self._callbacks: list[PointerCallback] = []

    def set_region(self, x: float, y: float, width: float, height: float) -> None:
        self._rect = (float(x), float(y), float(width), float(height))

    @property
    def region(self) -> tuple[float, float, float, float]:
        return self._rect

    def on_pointer(self, callback: PointerCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def is_inside(self) -> bool:
        return self._inside

    def _contains(self, wx: float, wy: float) -> bool:
        x, y, w, h = self._rect
        return x <= wx < x + w and y <= wy < y + h

    def _local(self, wx: float, wy: float) -> tuple[float, float]:
        return (wx - self._rect[0], wy - self._rect[1])

    def _dispatch(self, kind: str, wx: float, wy: float) -> None:
        lx, ly = self._local(wx, wy)
        for callback in list(self._callbacks):
            try:
                callback(kind, lx, ly)
            except Exception as e:
                logger.error(f"Error in pointer callback ({kind}): {e}")

    def feed_down(self, wx: float, wy: float) -> None:
        """Called by simulator on mouse button down (window coordinates)."""
        if not self._contains(wx, wy):
            return
        self._pressed = True
        self._dispatch("down", wx, wy)

    def feed_move(self, wx: float, wy: float) -> None:
        """Called by simulator on mouse motion (window coordinates)."""
        inside = self._contains(wx, wy)
        if inside and not self._inside:
            self._inside = True
            self._dispatch("enter", wx, wy)
        elif not inside and self._inside:
            self._inside = False
            self._pressed = False
            self._dispatch("leave", wx, wy)
            return

        if inside:
            self._dispatch("move", wx, wy)

    def feed_up(self, wx: float, wy: float) -> None:
        """Called by simulator on mouse button up (window coordinates)."""
        if self._pressed:
            self._pressed = False
            self._dispatch("up", wx, wy)
