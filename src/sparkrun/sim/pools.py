"""Entity and particle pools.

Pools never remove while iterating. advance() only moves things; prune()
is a separate compaction pass run once the tick's collision checks are
done, so memory is bounded by what is on screen, not by run length.
"""

import logging
import random
from typing import Optional

from sparkrun.profiles import KindSpec
from sparkrun.sim.entities import Entity, Particle
from sparkrun.sim.playfield import Playfield

logger = logging.getLogger(__name__)


class EntityPool:
    """Entities scrolling from the trailing edge towards x < 0."""

    def __init__(
        self,
        playfield: Playfield,
        rng: random.Random,
        spawn_margin: float = 40.0,
        prune_margin: float = 50.0,
        edge_padding: float = 40.0,
    ) -> None:
        self.playfield = playfield
        self.rng = rng
        self.spawn_margin = spawn_margin
        self.prune_margin = prune_margin
        self.edge_padding = edge_padding
        self.entities: list[Entity] = []

    def __len__(self) -> int:
        return len(self.entities)

    def __iter__(self):
        return iter(self.entities)

    @property
    def spawn_x(self) -> float:
        return self.playfield.width + round(self.spawn_margin * self.playfield.scale)

    @property
    def prune_x(self) -> float:
        return -self.prune_margin * self.playfield.scale

    def spawn(
        self,
        spec: KindSpec,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> Entity:
        """Create an entity of the given kind at the trailing edge.

        Args:
            spec: Kind to spawn
            x: Explicit left edge (defaults to just past the trailing edge)
            y: Explicit top edge (defaults to the kind's placement mode)
        """
        scale = self.playfield.scale
        w = round(self.rng.randint(*spec.width) * scale)
        if spec.shape == "circle":
            h = w
        else:
            h = round(self.rng.randint(*spec.height) * scale)

        if y is None:
            y = self._place(spec, h)
        if x is None:
            x = self.spawn_x

        entity = Entity(x=x, y=y, w=w, h=h, spec=spec)
        self.entities.append(entity)
        logger.debug(f"Spawned {spec.name} at x={x:.0f} y={y:.0f} ({w}x{h})")
        return entity

    def _place(self, spec: KindSpec, h: float) -> float:
        if spec.placement == "ground":
            return self.playfield.floor_y - h
        if spec.placement == "air":
            low, high = self.playfield.band
            return self.rng.randint(low, high) - h
        # Free band across the whole surface, centred on the drawn y
        pad = self.edge_padding * self.playfield.scale
        top = min(pad, self.playfield.height / 2)
        cy = self.rng.uniform(top, self.playfield.height - top)
        return cy - h / 2

    def advance(self, dt: float, world_speed: float) -> None:
        """Shift every entity left by its share of the world speed."""
        for entity in self.entities:
            entity.x -= world_speed * entity.spec.speed_scale * dt

    def on_resize(self, ratio: float = 1.0) -> None:
        """Carry live entities over to a new device scale.

        Ground kinds are put back on the floor line, which moves with the
        surface height even when the scale is unchanged.
        """
        floor = self.playfield.floor_y
        for entity in self.entities:
            if ratio != 1.0:
                entity.x *= ratio
                entity.y *= ratio
                entity.w = round(entity.w * ratio)
                entity.h = round(entity.h * ratio)
            if entity.spec.placement == "ground":
                entity.y = floor - entity.h

    def prune(self) -> list[Entity]:
        """Drop off-screen and consumed entities. Returns what was removed."""
        threshold = self.prune_x
        kept: list[Entity] = []
        removed: list[Entity] = []
        for entity in self.entities:
            if entity.consumed or entity.right < threshold:
                removed.append(entity)
            else:
                kept.append(entity)
        self.entities = kept
        return removed

    def clear(self) -> None:
        self.entities = []


class ParticlePool:
    """Short-lived presentation particles with a hard cap."""

    def __init__(self, rng: random.Random, max_particles: int = 260, gravity: float = 468.0) -> None:
        self.rng = rng
        self.max_particles = max_particles
        self.gravity = gravity
        self.particles: list[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def burst(
        self,
        x: float,
        y: float,
        count: int,
        vx: tuple[float, float],
        vy: tuple[float, float],
        life: tuple[float, float] = (0.25, 0.55),
        size: tuple[float, float] = (1.5, 3.5),
        color: tuple = (108, 240, 255),
    ) -> int:
        """Emit up to count particles. Returns how many fit under the cap."""
        emitted = 0
        uniform = self.rng.uniform
        for _ in range(count):
            if len(self.particles) >= self.max_particles:
                break
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=uniform(*vx),
                vy=uniform(*vy),
                life=uniform(*life),
                size=uniform(*size),
                color=color,
            ))
            emitted += 1
        return emitted

    def update(self, dt: float) -> None:
        for p in self.particles:
            p.age += dt
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.vy += self.gravity * dt
        self.particles = [p for p in self.particles if p.alive]

    def clear(self) -> None:
        self.particles = []
