"""Animation system for LIGHTFIELD."""

from lightfield.animation.engine import FrameScheduler, FrameHandle
from lightfield.animation.flow_field import FlowFieldAnimator, FlowFieldParams, GridPoint
from lightfield.animation.scroll_board import (
    ScrollBoardRenderer,
    AdvanceTiming,
    FrameSyncedTiming,
    IntervalTiming,
    make_timing,
)
from lightfield.animation.draw_overlay import InteractiveDrawOverlay

__all__ = [
    "FrameScheduler",
    "FrameHandle",
    "FlowFieldAnimator",
    "FlowFieldParams",
    "GridPoint",
    "ScrollBoardRenderer",
    "AdvanceTiming",
    "FrameSyncedTiming",
    "IntervalTiming",
    "make_timing",
    "InteractiveDrawOverlay",
]
