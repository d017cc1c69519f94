"""Shared test fixtures."""

import random

import pytest

from lightfield.animation.engine import FrameScheduler
from lightfield.core.events import EventBus
from lightfield.effects.base import EffectContext
from lightfield.hardware.base import RasterSurface


class RecordingSurface(RasterSurface):
    """Raster sink that records draw calls instead of rasterizing."""

    def __init__(self, width=0.0, height=0.0, device_pixel_ratio=1.0):
        self._width = float(width)
        self._height = float(height)
        self._dpr = device_pixel_ratio
        self.available = True
        self.circles = []
        self.clears = []
        self.resizes = []

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def device_pixel_ratio(self):
        return self._dpr

    @property
    def is_available(self):
        return self.available

    def resize(self, width, height, device_pixel_ratio=1.0):
        self._width = float(width)
        self._height = float(height)
        self._dpr = device_pixel_ratio
        self.resizes.append((self._width, self._height, device_pixel_ratio))

    def clear_region(self, x, y, width, height):
        self.clears.append((x, y, width, height))

    def fill_circle(self, x, y, radius, color):
        self.circles.append((float(x), float(y), float(radius), color))

    def reset(self):
        self.circles.clear()
        self.clears.clear()


@pytest.fixture
def make_surface():
    """Factory for recording surfaces."""
    return RecordingSurface


@pytest.fixture
def surface():
    return RecordingSurface(100, 50)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def context(bus, scheduler):
    return EffectContext(event_bus=bus, scheduler=scheduler)
