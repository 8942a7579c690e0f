"""Particle bursts driven by simulation events."""

import logging
import random
from typing import Callable, Optional

from sparkrun.core.events import Event, EventBus, GameEventType
from sparkrun.sim.pools import ParticlePool

logger = logging.getLogger(__name__)


class ParticleEffects:
    """Subscribes to the event bus and spawns presentation particles.

    Uses its own random source so that visual noise never shifts the
    simulation's seeded sequence.
    """

    def __init__(self, pool: Optional[ParticlePool] = None, seed: Optional[int] = None) -> None:
        self.pool = pool or ParticlePool(random.Random(seed))
        self._unsubscribe: list[Callable[[], None]] = []

    def attach(self, bus: EventBus) -> None:
        handlers = {
            GameEventType.JUMPED: self._on_jump,
            GameEventType.DOUBLE_JUMPED: self._on_jump,
            GameEventType.LANDED: self._on_land,
            GameEventType.PASSED: self._on_pass,
            GameEventType.PICKUP: self._on_pickup,
            GameEventType.POWERUP: self._on_pickup,
            GameEventType.HIT: self._on_hit,
            GameEventType.BLOCKED: self._on_block,
            GameEventType.TICK: self._on_tick,
            GameEventType.STATE_CHANGED: self._on_state,
        }
        for event_type, handler in handlers.items():
            self._unsubscribe.append(bus.subscribe(event_type, handler))

    def detach(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()

    @property
    def particles(self):
        return self.pool.particles

    def _on_tick(self, event: Event) -> None:
        self.pool.update(event.data.get("delta", 0.0))

    def _on_state(self, event: Event) -> None:
        if event.data.get("to") in ("RUNNING", "IDLE") and event.data.get("from") != "PAUSED":
            self.pool.clear()

    def _on_jump(self, event: Event) -> None:
        self.pool.burst(event.data["x"], event.data["y"] - 6, 16, vx=(-120, -20), vy=(-420, -120))

    def _on_land(self, event: Event) -> None:
        self.pool.burst(event.data["x"], event.data["y"] - 2, 8, vx=(-160, 60), vy=(-140, -20),
                        life=(0.15, 0.3), size=(1.2, 2.4))

    def _on_pass(self, event: Event) -> None:
        entity = event.data.get("entity")
        if entity is None:
            return
        self.pool.burst(entity.right, entity.cy, 10, vx=(120, 360), vy=(-160, 160),
                        life=(0.18, 0.38), size=(1.2, 2.8))

    def _on_pickup(self, event: Event) -> None:
        x, y = event.data.get("x"), event.data.get("y")
        if x is None or y is None:
            return
        self.pool.burst(x, y, 12, vx=(-200, 200), vy=(-240, 80), color=(255, 223, 145))

    def _on_hit(self, event: Event) -> None:
        self.pool.burst(event.data["x"], event.data["y"], 26, vx=(-420, 280), vy=(-520, 120),
                        size=(1.4, 3.8), color=(255, 77, 109))

    def _on_block(self, event: Event) -> None:
        self.pool.burst(event.data["x"], event.data["y"], 18, vx=(-300, 300), vy=(-300, 100),
                        color=(233, 238, 252))
