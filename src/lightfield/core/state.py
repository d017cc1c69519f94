"""
Interaction state machine for the light board draw overlay.

States:
    IDLE: Pointer is up; pointer-move events are ignored
    DRAWING: Pointer is down; each move rasterizes a segment
    DISABLED: Drawing is switched off; every pointer handler is inert
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    """Draw overlay interaction states."""
    IDLE = auto()
    DRAWING = auto()
    DISABLED = auto()


@dataclass
class InteractionContext:
    """Per-gesture data carried alongside the state."""
    last_point: tuple[int, int] | None = None
    strokes: int = 0


StateListener = Callable[[InteractionState, InteractionState, InteractionContext], None]


class InteractionStateMachine:
    """
    Manages the pointer interaction lifecycle.

    Only the transitions listed in VALID_TRANSITIONS are accepted; an
    invalid request is logged and refused rather than raised, so a stray
    pointer-up never disturbs the render loop.
    """

    VALID_TRANSITIONS: list[tuple[InteractionState, InteractionState]] = [
        # From IDLE
        (InteractionState.IDLE, InteractionState.DRAWING),
        (InteractionState.IDLE, InteractionState.DISABLED),

        # From DRAWING
        (InteractionState.DRAWING, InteractionState.IDLE),  # Pointer up / leave
        (InteractionState.DRAWING, InteractionState.DISABLED),

        # From DISABLED
        (InteractionState.DISABLED, InteractionState.IDLE),
    ]

    def __init__(self, initial_state: InteractionState = InteractionState.IDLE) -> None:
        self._state = initial_state
        self._context = InteractionContext()
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"InteractionStateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> InteractionState:
        """Get current state."""
        return self._state

    @property
    def context(self) -> InteractionContext:
        """Get current gesture context."""
        return self._context

    @property
    def is_drawing(self) -> bool:
        return self._state == InteractionState.DRAWING

    @property
    def is_disabled(self) -> bool:
        return self._state == InteractionState.DISABLED

    def can_transition(self, to_state: InteractionState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: InteractionState) -> bool:
        """
        Attempt to transition to a new state.

        Leaving DRAWING always drops the last recorded pointer sample so the
        next gesture starts a fresh segment chain.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        if old_state == InteractionState.DRAWING:
            self._context.last_point = None
        if to_state == InteractionState.DRAWING:
            self._context.strokes += 1

        logger.debug(f"Interaction transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in interaction listener: {e}")

        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
