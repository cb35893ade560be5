"""
Preview window using pygame.

Shows the wheel for a draw room on the desktop and drives the host
actions from the keyboard.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Coroutine

import pygame

from drawroom.core.events import EventBus, EventType, Event, tick_event
from drawroom.graphics.primitives import BACKGROUND, render_frame
from drawroom.graphics.snapshot import save_frame
from drawroom.room.orchestrator import DrawRoom
from drawroom.wheel.renderer import WheelGeometry, WheelRenderer, polar_to_cartesian

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Preview window configuration."""
    width: int = 900
    height: int = 560
    title: str = "DRAWROOM"
    fullscreen: bool = False
    fps: int = 60
    snapshot_dir: str = "snapshots"

    # Colors
    bg_color: tuple[int, int, int] = BACKGROUND
    panel_color: tuple[int, int, int] = (30, 41, 59)
    text_color: tuple[int, int, int] = (226, 232, 240)
    accent_color: tuple[int, int, int] = (96, 165, 250)
    error_color: tuple[int, int, int] = (248, 113, 113)
    label_color: tuple[int, int, int] = (17, 24, 39)


class SimulatorWindow:
    """
    Desktop preview of a draw room.

    Keyboard Mapping:
        SPACE/RETURN: Spin, or Next round once the draw is done
        R: Reset draw
        TAB: Type a participant name (RETURN adds, ESC cancels)
        UP/DOWN: Select participant
        DELETE: Remove selected participant
        F5: Reload room
        D: Toggle debug panel
        L: Toggle log viewer
        S: Save wheel snapshot
        ESC/Q: Exit
    """

    def __init__(
        self,
        room: DrawRoom,
        renderer: WheelRenderer,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.room = room
        self.renderer = renderer
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._last_geometry: WheelGeometry | None = None

        # Participant list / name entry
        self._cursor = 0
        self._typing = False
        self._name_buffer = ""

        # Fonts
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._label_fonts: dict[tuple[int, bool], pygame.font.Font] = {}

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 20
        self._log_handler: logging.Handler | None = None

        self._tasks: set[asyncio.Task] = set()

        self._setup_log_capture()
        self.event_bus.subscribe(EventType.WINNER_COMMITTED, self._on_winner)

        logger.info("SimulatorWindow created")

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: 'SimulatorWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        handler = SimulatorLogHandler(self)
        handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(handler)
        self._log_handler = handler

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = self._load_font(18)
        self._small_font = self._load_font(13)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        for name in ("DejaVu Sans", "Noto Sans", "Arial", "Helvetica"):
            path = pygame.font.match_font(name, bold=bold)
            if path:
                return pygame.font.Font(path, size)
        return pygame.font.SysFont(None, size, bold=bold)

    def _label_font(self, size: float, weight: int) -> pygame.font.Font:
        key = (int(round(size)), weight >= 700)
        if key not in self._label_fonts:
            self._label_fonts[key] = self._load_font(*key)
        return self._label_fonts[key]

    # Input
    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if self._typing:
                    self._handle_name_key(event)
                else:
                    self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key
        participants = self.room.participants

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self._spawn(self.room.primary_action())
        elif key == pygame.K_r:
            self._spawn(self.room.reset_draw())
        elif key == pygame.K_TAB:
            self._typing = True
            self._name_buffer = ""
        elif key == pygame.K_UP and participants:
            self._cursor = (self._cursor - 1) % len(participants)
        elif key == pygame.K_DOWN and participants:
            self._cursor = (self._cursor + 1) % len(participants)
        elif key in (pygame.K_DELETE, pygame.K_BACKSPACE) and participants:
            target = participants[min(self._cursor, len(participants) - 1)]
            self._spawn(self.room.delete_participant(target.id))
        elif key == pygame.K_F5:
            self._spawn(self.room.load_room())
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key == pygame.K_s:
            self._capture_snapshot()

    def _handle_name_key(self, event: pygame.event.Event) -> None:
        """Name entry mode."""
        if event.key == pygame.K_RETURN:
            name = self._name_buffer
            self._typing = False
            self._name_buffer = ""
            self._spawn(self.room.add_participant(name))
        elif event.key == pygame.K_ESCAPE:
            self._typing = False
            self._name_buffer = ""
        elif event.key == pygame.K_BACKSPACE:
            self._name_buffer = self._name_buffer[:-1]
        elif event.unicode and event.unicode.isprintable():
            self._name_buffer += event.unicode

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _on_winner(self, event: Event) -> None:
        name = event.data.get("winner_name") or event.data.get("winner_id")
        logger.info(f"Winner announced: {name}")

    # Rendering
    def _current_geometry(self) -> WheelGeometry:
        wheel = self.room.wheel
        return self.renderer.project(
            wheel.items,
            wheel.rotation_state,
            wheel.selection_state,
            displayed_deg=wheel.displayed_deg(),
        )

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        geometry = self._current_geometry()
        self._last_geometry = geometry
        self._render_wheel(geometry)
        self._render_participants()
        self._render_title_bar()
        if self._show_debug:
            self._render_debug_panel()
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _wheel_origin(self, geometry: WheelGeometry) -> tuple[int, int]:
        x = 40
        y = (self.config.height - geometry.size) // 2
        return x, y

    def _render_wheel(self, geometry: WheelGeometry) -> None:
        """Blit the rasterized wheel, then labels and status on top."""
        buffer = render_frame(geometry, self.config.bg_color)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        ox, oy = self._wheel_origin(geometry)
        self._screen.blit(surface, (ox, oy))

        for s in geometry.slices:
            label = s.label
            screen_deg = label.rotation_deg + geometry.transform_deg
            x, y = polar_to_cartesian(
                geometry.cx, geometry.cy,
                geometry.radius * self.renderer.label_radius_ratio,
                s.mid_deg + geometry.transform_deg,
            )
            font = self._label_font(label.font_size, label.font_weight)
            text = font.render(label.text, True, self.config.label_color)
            # pygame rotates counter-clockwise; screen angles run clockwise
            text = pygame.transform.rotate(text, -screen_deg)
            self._screen.blit(text, text.get_rect(center=(ox + x, oy + y)))

        if self._font:
            status = self._font.render(geometry.status, True, self.config.text_color)
            self._screen.blit(status, status.get_rect(
                center=(ox + geometry.size // 2, oy + geometry.size + 22)
            ))

    def _render_participants(self) -> None:
        """Participant list, primary action and error line."""
        if not self._font or not self._small_font:
            return

        rect = pygame.Rect(self.config.width - 340, 60, 310, self.config.height - 100)
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=8)

        x = rect.x + 14
        y = rect.y + 12
        room = self.room.room
        header = f"Room {room.room_id}" if room else "Room: not loaded"
        self._screen.blit(self._font.render(header, True, self.config.accent_color), (x, y))
        y += 30

        winner_id = self.room.winner.id if self.room.winner else None
        participants = self.room.participants
        if not participants:
            self._screen.blit(
                self._small_font.render("No participants yet", True, self.config.text_color), (x, y)
            )
            y += 20
        for i, p in enumerate(participants):
            marker = ">" if i == self._cursor else " "
            suffix = "  *winner*" if p.id == winner_id else ""
            color = self.config.accent_color if p.id == winner_id else self.config.text_color
            line = self._small_font.render(f"{marker} {p.name}{suffix}", True, color)
            self._screen.blit(line, (x, y))
            y += 18
            if y > rect.bottom - 90:
                break

        bottom = rect.bottom - 80
        if self._typing:
            prompt = f"Name: {self._name_buffer}_"
            self._screen.blit(self._font.render(prompt, True, self.config.text_color), (x, bottom))
        else:
            action = f"[SPACE] {self.room.primary_label()}"
            self._screen.blit(self._font.render(action, True, self.config.accent_color), (x, bottom))
            hint = "[TAB] add  [DEL] remove  [R] reset"
            self._screen.blit(self._small_font.render(hint, True, self.config.text_color), (x, bottom + 26))

        if self.room.error:
            error = self._small_font.render(self.room.error[:48], True, self.config.error_color)
            self._screen.blit(error, (x, bottom + 48))

    def _render_title_bar(self) -> None:
        if not self._font:
            return

        wheel = self.room.wheel
        title = f"{self.config.title} | {wheel.phase.name}"
        self._screen.blit(self._font.render(title, True, self.config.accent_color), (20, 15))

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        if not self._small_font:
            return

        wheel = self.room.wheel
        plan = wheel.active_plan
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Phase: {wheel.phase.name}",
            f"Rotation: {wheel.current_deg:.1f}",
            f"Displayed: {wheel.displayed_deg():.1f}",
            f"Progress: {wheel.progress():.2f}",
            f"Target: {plan.request.target_item_id if plan else '-'}",
            f"Selected: {wheel.selected_id or '-'}",
        ]

        rect = pygame.Rect(20, self.config.height - 30 - 16 * len(lines), 220, 16 * len(lines) + 10)
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=5)
        y = rect.y + 5
        for line in lines:
            self._screen.blit(self._small_font.render(line, True, self.config.text_color), (rect.x + 8, y))
            y += 16

    def _render_log_panel(self) -> None:
        """Render the log viewer panel."""
        if not self._small_font:
            return

        rect = pygame.Rect(10, 50, 420, self.config.height - 100)
        surf = pygame.Surface((rect.width, rect.height), pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)
        pygame.draw.rect(self._screen, (60, 80, 100), rect, 1, border_radius=5)

        y = rect.y + 8
        for line in self._log_buffer[-self._max_log_lines:]:
            if line.startswith('E'):
                color = (255, 100, 100)
            elif line.startswith('W'):
                color = (255, 200, 100)
            elif line.startswith('I'):
                color = (150, 200, 150)
            else:
                color = (150, 150, 170)

            display_line = line[:57] + "..." if len(line) > 60 else line
            self._screen.blit(self._small_font.render(display_line, True, color), (rect.x + 8, y))
            y += 16
            if y > rect.bottom - 10:
                break

    def _capture_snapshot(self) -> None:
        """Save the current wheel frame."""
        if self._last_geometry is None:
            return
        filename = Path(self.config.snapshot_dir) / f"wheel_{int(time.time())}_{self._frame_count}.png"
        save_frame(render_frame(self._last_geometry, self.config.bg_color), filename)

    async def run(self) -> None:
        """Main preview loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")
        await self.room.load_room()

        while self._running:
            self._handle_events()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            await self.event_bus.process_queue()

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield so HTTP calls and the spin timer can run
            await asyncio.sleep(0)

        await self._cleanup()

    async def _cleanup(self) -> None:
        """Clean up pygame resources and pending room calls."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if self._log_handler:
            logging.getLogger().removeHandler(self._log_handler)
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
