"""Background dot field effect."""

from typing import Optional
import logging
import random

from lightfield.animation.flow_field import FlowFieldAnimator, FlowFieldParams
from lightfield.effects.base import BaseEffect, EffectContext
from lightfield.hardware.base import RasterSurface

logger = logging.getLogger(__name__)


class DotFieldEffect(BaseEffect):
    """Mounts a FlowFieldAnimator on a surface that fills its container."""

    name = "dot_field"

    def __init__(
        self,
        context: EffectContext,
        surface: RasterSurface,
        params: Optional[FlowFieldParams] = None,
        rng: Optional[random.Random] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(context, surface, name=name)
        self.animator = FlowFieldAnimator(surface, params, rng)
        self.frames_rendered = 0
        self.frames_skipped = 0

    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        self.surface.resize(width, height, device_pixel_ratio)
        self.animator.resize(self.surface.width, self.surface.height)

    def on_frame(self, now_ms: float) -> None:
        if self.animator.frame(now_ms):
            self.frames_rendered += 1
        else:
            self.frames_skipped += 1

    def on_exit(self) -> None:
        logger.debug(
            f"{self.name}: {self.frames_rendered} frames rendered, {self.frames_skipped} skipped"
        )
