"""Host abstraction layer for LIGHTFIELD."""

from .base import RasterSurface, PointerSource

__all__ = [
    "RasterSurface",
    "PointerSource",
]
