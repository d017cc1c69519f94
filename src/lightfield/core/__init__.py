"""Core framework components for LIGHTFIELD."""

from .state import InteractionState, InteractionStateMachine
from .events import EventBus, Event, EventType
from .controlled import ControlledValue

__all__ = [
    "InteractionState",
    "InteractionStateMachine",
    "EventBus",
    "Event",
    "EventType",
    "ControlledValue",
]
