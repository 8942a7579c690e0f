"""
Desktop simulator window using pygame.

Runs one GameSession: keyboard and mouse become actions, every frame
steps the session with the measured frame time and blits the rendered
numpy buffer, with a small HUD drawn on top.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..core.events import Event, EventBus, GameEventType
from ..core.state import SessionState
from ..graphics.effects import ParticleEffects
from ..graphics.renderer import SnapshotRenderer
from ..sim.actions import Action
from ..sim.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 960
    height: int = 540
    title: str = "SPARKRUN"
    fps: int = 60
    scale: float = 1.0
    resizable: bool = True

    text_color: tuple[int, int, int] = (233, 238, 252)
    accent_color: tuple[int, int, int] = (108, 240, 255)


KEY_ACTIONS: dict[int, Action] = {
    pygame.K_SPACE: Action.JUMP,
    pygame.K_w: Action.JUMP,
    pygame.K_p: Action.PAUSE,
    pygame.K_r: Action.RESTART,
    pygame.K_BACKSPACE: Action.MENU,
    pygame.K_m: Action.TOGGLE_MUTE,
    pygame.K_j: Action.TOGGLE_DOUBLE_JUMP,
}

MOVE_KEYS: dict[int, Action] = {
    pygame.K_UP: Action.MOVE_UP,
    pygame.K_DOWN: Action.MOVE_DOWN,
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
}


class SimulatorWindow:
    """
    Main simulator window.

    Keyboard Mapping:
        SPACE / W / UP: Jump (UP moves in free-move games)
        ARROWS: Move (free-move games)
        ENTER: Start, or restart after game over
        P: Pause / resume
        R: Restart
        BACKSPACE: Back to menu
        M: Toggle mute
        J: Toggle double jump
        ESC / Q: Exit simulator
    """

    def __init__(
        self,
        session: GameSession,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None
    ) -> None:
        self.config = config or WindowConfig()
        self.session = session
        self.event_bus = event_bus or session.bus or EventBus()
        if session.bus is None:
            session.bus = self.event_bus

        self.renderer = SnapshotRenderer()
        self.effects = ParticleEffects()
        self.effects.attach(self.event_bus)
        self.event_bus.subscribe(GameEventType.GAME_OVER, self._on_game_over)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._last_result = ""

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(f"{self.config.title} - {self.session.profile.display_name}")

        flags = pygame.DOUBLEBUF
        if self.config.resizable:
            flags |= pygame.RESIZABLE
        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()
        self._font = pygame.font.Font(None, 26)

        self.session.resize(self.config.width * self.config.scale,
                            self.config.height * self.config.scale,
                            self.config.scale)

    def _on_game_over(self, event: Event) -> None:
        self._last_result = f"SCORE {event.data['score']}  BEST {event.data['best']}"

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                if event.key in MOVE_KEYS:
                    self.session.on_action(MOVE_KEYS[event.key], pressed=False)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.session.on_action(Action.JUMP)

            elif event.type == pygame.VIDEORESIZE:
                scale = self.config.scale
                self.session.resize(event.w * scale, event.h * scale, scale)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key
        session = self.session

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_RETURN:
            if session.state == SessionState.ENDED:
                session.restart()
            else:
                session.start()
        elif key in MOVE_KEYS:
            session.on_action(MOVE_KEYS[key], pressed=True)
            if key == pygame.K_UP and session.profile.mode == "platform":
                session.on_action(Action.JUMP)
        elif key in KEY_ACTIONS:
            session.on_action(KEY_ACTIONS[key])

    def _render(self) -> None:
        """Render the frame and the HUD."""
        if not self._screen:
            return

        snapshot = self.session.snapshot()
        buffer = self.renderer.render(snapshot, self.effects.particles)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        if surface.get_size() != self._screen.get_size():
            surface = pygame.transform.smoothscale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        self._render_hud(snapshot)
        pygame.display.flip()

    def _render_hud(self, snapshot) -> None:
        if not self._font:
            return
        color = self.config.text_color
        lines = [
            f"SCORE {snapshot.score}",
            f"BEST {snapshot.best}",
            f"LIVES {snapshot.lives}/{snapshot.max_lives}",
            f"SPEED x{snapshot.speed_multiplier:.2f}",
        ]
        if snapshot.streak:
            lines.append(f"STREAK {snapshot.streak}x  BEST {snapshot.best_streak}x")
        if snapshot.distance:
            lines.append(f"DIST {int(snapshot.distance)}")
        for i, line in enumerate(lines):
            self._screen.blit(self._font.render(line, True, color), (12, 10 + i * 22))

        banner = {
            SessionState.IDLE: "PRESS ENTER TO START",
            SessionState.PAUSED: "PAUSED",
            SessionState.ENDED: f"GAME OVER  {self._last_result}  (ENTER)",
        }.get(snapshot.state)
        if banner:
            text = self._font.render(banner, True, self.config.accent_color)
            rect = text.get_rect(center=(self._screen.get_width() // 2, self._screen.get_height() // 3))
            self._screen.blit(text, rect)

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.session.step(delta)

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.effects.detach()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
