"""
Main entry point for DRAWROOM.

Runs the desktop preview (DRAWROOM_ENV=simulator) or a single headless
draw that logs the winner and saves the final wheel frame
(DRAWROOM_ENV=headless).
"""

import asyncio
import logging
import sys
from pathlib import Path

from drawroom.config.settings import Settings, get_settings
from drawroom.core.events import EventBus
from drawroom.room.client import RoomServiceClient
from drawroom.room.orchestrator import DrawRoom
from drawroom.wheel.controller import SpinController
from drawroom.wheel.renderer import WheelRenderer


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_room(settings: Settings, event_bus: EventBus) -> tuple[DrawRoom, WheelRenderer]:
    """Wire client, wheel and renderer from settings."""
    client = RoomServiceClient(
        api_base=settings.room.api_base,
        room_id=settings.room.room_id,
        timeout=settings.room.timeout,
    )
    wheel = SpinController(event_bus=event_bus, easing=settings.wheel.easing)
    room = DrawRoom(
        client,
        wheel,
        event_bus=event_bus,
        spin_count=settings.wheel.spin_count,
        duration_ms=settings.wheel.duration_ms,
    )
    renderer = WheelRenderer(
        size=settings.wheel.size,
        label_radius_ratio=settings.wheel.label_radius_ratio,
        spinning_text=settings.wheel.spinning_text,
        winner_text=settings.wheel.winner_text,
        idle_text=settings.wheel.idle_text,
    )
    return room, renderer


async def run_simulator(settings: Settings) -> None:
    """Run the desktop preview."""
    from drawroom.simulator.window import SimulatorWindow, WindowConfig

    event_bus = EventBus()
    room, renderer = build_room(settings, event_bus)

    config = WindowConfig(
        width=settings.simulator.width,
        height=settings.simulator.height,
        title=settings.simulator.title,
        fullscreen=settings.simulator.fullscreen,
        fps=settings.simulator.fps,
        snapshot_dir=settings.simulator.snapshot_dir,
    )
    window = SimulatorWindow(room, renderer, config=config, event_bus=event_bus)

    try:
        await window.run()
    finally:
        await room.close()


async def run_headless(settings: Settings) -> int:
    """Run one draw without a window.

    Returns:
        Process exit code
    """
    from drawroom.graphics.primitives import render_frame
    from drawroom.graphics.snapshot import save_frame

    logger = logging.getLogger(__name__)
    event_bus = EventBus()
    room, renderer = build_room(settings, event_bus)

    try:
        if await room.load_room() is None:
            logger.error(f"Could not load room: {room.error}")
            return 1

        if room.is_draw_done:
            logger.info("Draw already finished, starting next round")
            await room.reset_draw()

        if not await room.draw():
            logger.error(f"Draw did not start: {room.error or 'no participants'}")
            return 1

        timeout = settings.wheel.duration_ms / 1000.0 + 5.0
        winner = await room.wait_for_winner(timeout)
        logger.info(f"Winner: {winner.name if winner else room.wheel.selected_id}")

        wheel = room.wheel
        geometry = renderer.project(wheel.items, wheel.rotation_state, wheel.selection_state)
        save_frame(render_frame(geometry), Path(settings.simulator.snapshot_dir) / "winner.png")
        return 0
    finally:
        await room.close()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("DRAWROOM starting...")

    exit_code = 0
    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        else:
            logger.info("Running headless")
            exit_code = asyncio.run(run_headless(settings))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("DRAWROOM stopped")
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
