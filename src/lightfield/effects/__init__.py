"""Mountable effects for LIGHTFIELD."""

from lightfield.effects.base import BaseEffect, EffectContext
from lightfield.effects.dot_field import DotFieldEffect
from lightfield.effects.light_board import LightBoardEffect, LightBoardConfig

__all__ = [
    "BaseEffect",
    "EffectContext",
    "DotFieldEffect",
    "LightBoardEffect",
    "LightBoardConfig",
]
