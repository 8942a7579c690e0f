"""
Main entry point for SPARKRUN.

Builds a session for the selected profile and opens the pygame
simulator window.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from sparkrun.core.events import EventBus
from sparkrun.profiles import PROFILES, get_profile
from sparkrun.settings import Settings, get_settings
from sparkrun.sim.session import GameSession
from sparkrun.storage import JsonFileStore


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sparkrun", description="Arcade runner simulator")
    parser.add_argument("--profile", choices=sorted(PROFILES), help="Game to play")
    parser.add_argument("--seed", type=int, help="Seed for a reproducible run")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def build_session(settings: Settings, bus: Optional[EventBus] = None) -> GameSession:
    """Create a session from settings, backed by the JSON store."""
    profile = get_profile(settings.profile)
    store = JsonFileStore(settings.storage.path)
    display = settings.display
    return GameSession(
        profile,
        width=display.width * display.scale,
        height=display.height * display.scale,
        scale=display.scale,
        store=store,
        bus=bus,
        seed=settings.seed,
    )


async def run_simulator(settings: Settings) -> None:
    """Run the desktop simulator."""
    from sparkrun.simulator.window import SimulatorWindow, WindowConfig

    bus = EventBus()
    session = build_session(settings, bus)
    display = settings.display
    config = WindowConfig(
        width=display.width,
        height=display.height,
        fps=display.fps,
        scale=display.scale,
        resizable=display.resizable,
    )
    window = SimulatorWindow(session=session, config=config, event_bus=bus)
    await window.run()


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    settings = get_settings()

    overrides = {}
    if args.profile:
        overrides["profile"] = args.profile
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.debug:
        overrides["debug"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings.debug)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting SPARKRUN with profile '{settings.profile}'")

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
