"""
Simulator entry point.

Runs the dot field and the light board in a desktop pygame window.
"""

import asyncio
import logging
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

from lightfield.animation.engine import FrameScheduler
from lightfield.animation.flow_field import FlowFieldParams
from lightfield.config.settings import Settings, get_settings
from lightfield.core.events import EventBus
from lightfield.effects.base import EffectContext
from lightfield.effects.dot_field import DotFieldEffect
from lightfield.effects.light_board import LightBoardConfig, LightBoardEffect
from lightfield.simulator.mock_hardware.display import SimulatedPanel
from lightfield.simulator.window import SimulatorWindow

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


def setup_logging(debug: bool = False) -> None:
    """Configure logging for simulator with file output."""
    # Log file in project root
    log_file = PROJECT_ROOT / "simulator.log"

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(formatter)

    # File handler - truncate on each run for fresh logs
    file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    # Root logger setup
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Per-frame engines are chatty at DEBUG
    logging.getLogger("lightfield.animation").setLevel(logging.INFO)
    logging.getLogger("lightfield.graphics").setLevel(logging.INFO)

    logging.info(f"Logging to file: {log_file}")


class LightfieldSimulator:
    """Main simulator application wiring effects to the window."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

        # Core systems
        self.event_bus = EventBus()
        self.scheduler = FrameScheduler()
        context = EffectContext(event_bus=self.event_bus, scheduler=self.scheduler)

        dpr = settings.window.device_pixel_ratio
        self.field_effect = DotFieldEffect(
            context,
            SimulatedPanel(device_pixel_ratio=dpr),
            params=FlowFieldParams.from_settings(settings.dot_field),
            rng=random.Random(),
        )
        self.board_effect = LightBoardEffect(
            context,
            SimulatedPanel(device_pixel_ratio=dpr),
            config=LightBoardConfig.from_settings(
                settings.board,
                on_draw_state_change=lambda cell: logger.info(f"Paint value -> {cell.name}"),
                on_hover_state_change=lambda hovered: logger.debug(f"Hover -> {hovered}"),
            ),
        )

        self.window = SimulatorWindow(
            config=settings.window,
            event_bus=self.event_bus,
            scheduler=self.scheduler,
            field_effect=self.field_effect,
            board_effect=self.board_effect,
        )

        logger.info("LightfieldSimulator initialized")

    async def run(self) -> None:
        self.field_effect.enter()
        self.board_effect.enter()
        try:
            await self.window.run()
        finally:
            self.board_effect.exit()
            self.field_effect.exit()
            logger.info(f"Scheduler stopped with {self.scheduler.active_count} callbacks left")


async def run() -> None:
    """Run the simulator."""
    simulator = LightfieldSimulator(get_settings())
    await simulator.run()


def main() -> None:
    """Main entry point for simulator."""
    # Load environment variables
    load_dotenv(PROJECT_ROOT / ".env")
    setup_logging(get_settings().debug)

    logger.info("=" * 50)
    logger.info("LIGHTFIELD Simulator Starting")
    logger.info("=" * 50)
    logger.info("")
    logger.info("Controls:")
    logger.info("  Mouse   - Draw on the board (when drawing is on)")
    logger.info("  D       - Toggle drawing")
    logger.info("  0-3     - Paint value (empty, dim, accent, bright)")
    logger.info("  SPACE   - Pin hover (freeze scrolling)")
    logger.info("  ESC/Q   - Quit")
    logger.info("")

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Simulator stopped by user")
    except Exception as e:
        logger.exception(f"Simulator error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
