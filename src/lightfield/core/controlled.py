"""
Dual-owned values: a value that is either owned by the component that uses
it (uncontrolled) or supplied and driven by an outside owner (controlled).

Either way the component reads ``value`` for the effective current value and
calls ``request()`` when its own interaction wants a change. The change
notifier fires on every transition request that differs from the effective
value; only the uncontrolled variant stores the new value itself.
"""

from typing import Callable, Generic, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

ChangeNotifier = Callable[[T], None]


class ControlledValue(Generic[T]):
    """Value + change-notifier contract with explicit ownership.

    Args:
        default: Internal fallback value used while uncontrolled
        controlled: External value; when not None the value is controlled
        on_change: Called with the requested value on every transition
        name: Label for log messages
    """

    def __init__(
        self,
        default: T,
        controlled: T | None = None,
        on_change: ChangeNotifier | None = None,
        name: str = "value",
    ) -> None:
        self._internal = default
        self._external = controlled
        self._controlled = controlled is not None
        self._on_change = on_change
        self.name = name

    @property
    def value(self) -> T:
        """Effective current value."""
        if self._controlled:
            return self._external
        return self._internal

    @property
    def internal_value(self) -> T:
        """The component's own fallback value (untouched while controlled)."""
        return self._internal

    @property
    def is_controlled(self) -> bool:
        return self._controlled

    def request(self, new_value: T) -> bool:
        """Ask for a transition to ``new_value`` from inside the component.

        Returns:
            True if the request was a transition (notifier fired)
        """
        if new_value == self.value:
            return False

        if not self._controlled:
            self._internal = new_value

        logger.debug(
            f"{self.name} change requested: {new_value!r} "
            f"({'controlled' if self._controlled else 'internal'})"
        )
        self._notify(new_value)
        return True

    def control(self, external_value: T) -> None:
        """Supply (or refresh) the externally owned value.

        The outside owner calls this whenever its state changes, typically
        once per tick. No notification is sent: the owner already knows.
        """
        self._external = external_value
        self._controlled = True

    def release(self) -> None:
        """Hand ownership back to the component's internal value."""
        self._external = None
        self._controlled = False

    def _notify(self, new_value: T) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(new_value)
        except Exception as e:
            logger.error(f"Error in {self.name} change callback: {e}")
