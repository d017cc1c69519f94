"""Frame scheduler for recurring per-refresh callbacks."""

from typing import Optional, Callable, Dict, List
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


@dataclass
class FrameHandle:
    """Handle for one scheduled frame callback.

    Returned by ``FrameScheduler.schedule``; whoever scheduled the callback
    owns the handle and must ``cancel()`` it on teardown.
    """

    name: str
    callback: FrameCallback
    _scheduler: Optional["FrameScheduler"] = field(default=None, repr=False)
    _cancelled: bool = field(default=False, repr=False)
    calls: int = 0
    errors: int = 0

    @property
    def is_active(self) -> bool:
        return not self._cancelled

    def cancel(self) -> bool:
        """Stop the callback. Returns False if it was already cancelled."""
        if self._cancelled:
            return False
        self._cancelled = True
        if self._scheduler is not None:
            self._scheduler._remove(self)
        return True


class FrameScheduler:
    """Host-driven recurring callback registry.

    The host calls ``tick(now_ms)`` once per display refresh. Every live
    callback runs once per tick, in scheduling order, on the caller's
    thread. Callbacks added during a tick first run on the next tick;
    callbacks cancelled during a tick do not run afterwards.
    """

    def __init__(self) -> None:
        self._handles: Dict[str, FrameHandle] = {}
        self._frame = 0
        self._last_tick_ms: Optional[float] = None

        # Scheduling event callbacks
        self._on_schedule: List[Callable[[FrameHandle], None]] = []
        self._on_cancel: List[Callable[[FrameHandle], None]] = []

        logger.debug("FrameScheduler initialized")

    @property
    def active_count(self) -> int:
        return len(self._handles)

    @property
    def frame(self) -> int:
        """Number of ticks processed so far."""
        return self._frame

    @property
    def last_tick_ms(self) -> Optional[float]:
        return self._last_tick_ms

    def schedule(self, callback: FrameCallback, name: Optional[str] = None) -> FrameHandle:
        """Start calling ``callback(now_ms)`` every tick.

        Args:
            callback: Frame callback
            name: Unique name; a numeric suffix is appended on collision

        Returns:
            Handle used to cancel the callback
        """
        base = name or f"frame_{len(self._handles)}"
        handle_name = base
        i = 1
        while handle_name in self._handles:
            handle_name = f"{base}_{i}"
            i += 1

        handle = FrameHandle(name=handle_name, callback=callback, _scheduler=self)
        self._handles[handle_name] = handle

        for listener in self._on_schedule:
            listener(handle)

        logger.debug(f"Frame callback scheduled: {handle_name}")
        return handle

    def _remove(self, handle: FrameHandle) -> None:
        if self._handles.get(handle.name) is not handle:
            return
        del self._handles[handle.name]

        for listener in self._on_cancel:
            listener(handle)

        logger.debug(f"Frame callback cancelled: {handle.name}")

    def cancel(self, name: str) -> bool:
        """Cancel a callback by name."""
        handle = self._handles.get(name)
        if handle is None:
            return False
        return handle.cancel()

    def cancel_all(self) -> int:
        """Cancel every scheduled callback.

        Returns:
            Number of callbacks cancelled
        """
        handles = list(self._handles.values())
        for handle in handles:
            handle.cancel()
        return len(handles)

    def tick(self, now_ms: float) -> int:
        """Run one frame.

        Args:
            now_ms: Host timestamp in milliseconds

        Returns:
            Number of callbacks invoked
        """
        self._frame += 1
        self._last_tick_ms = now_ms

        invoked = 0
        for handle in list(self._handles.values()):
            if not handle.is_active:
                continue
            try:
                handle.callback(now_ms)
            except Exception:
                handle.errors += 1
                logger.exception(f"Error in frame callback {handle.name}")
            handle.calls += 1
            invoked += 1

        return invoked

    def on_schedule(self, callback: Callable[[FrameHandle], None]) -> None:
        """Register callback for when a frame callback is scheduled."""
        self._on_schedule.append(callback)

    def on_cancel(self, callback: Callable[[FrameHandle], None]) -> None:
        """Register callback for when a frame callback is cancelled."""
        self._on_cancel.append(callback)
