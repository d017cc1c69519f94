"""Mock hardware implementations for the simulator."""

from .display import SimulatedPanel
from .input import SimulatedPointer

__all__ = [
    "SimulatedPanel",
    "SimulatedPointer",
]
