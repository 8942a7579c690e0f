"""Simulation entities: the actor, spawned entities and particles."""

import math
from typing import Optional
from dataclasses import dataclass

from sparkrun.profiles import KindSpec


@dataclass
class Box:
    """Axis-aligned box, top-left origin."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def cx(self) -> float:
        return self.x + self.w / 2

    @property
    def cy(self) -> float:
        return self.y + self.h / 2

    @property
    def radius(self) -> float:
        return min(self.w, self.h) / 2


def overlaps(a: Box, b: Box) -> bool:
    """Strict AABB overlap; touching edges do not count."""
    return (
        a.x < b.x + b.w
        and a.x + a.w > b.x
        and a.y < b.y + b.h
        and a.y + a.h > b.y
    )


def circles_overlap(a: Box, b: Box) -> bool:
    """Centre distance against combined radius."""
    return math.hypot(a.cx - b.cx, a.cy - b.cy) < a.radius + b.radius


@dataclass
class Actor(Box):
    """The player-controlled entity."""

    vy: float = 0.0
    grounded: bool = True
    can_double: bool = False
    shield: bool = False
    invulnerable: float = 0.0
    # Presentation only
    squash: float = 0.0

    def box(self) -> Box:
        return Box(self.x, self.y, self.w, self.h)


@dataclass
class Entity(Box):
    """A spawned obstacle, hazard or collectible."""

    spec: Optional[KindSpec] = None
    resolved: bool = False
    consumed: bool = False

    @property
    def kind(self) -> str:
        return self.spec.name

    @property
    def category(self) -> str:
        return self.spec.category

    @property
    def is_harmful(self) -> bool:
        return self.spec.is_harmful

    def resolve(self) -> bool:
        """Mark resolved. Returns False if it already was."""
        if self.resolved:
            return False
        self.resolved = True
        return True


@dataclass
class Particle:
    """Presentation-only particle."""

    x: float
    y: float
    vx: float
    vy: float
    life: float
    size: float = 2.0
    color: tuple = (108, 240, 255)
    age: float = 0.0

    @property
    def alive(self) -> bool:
        return self.age < self.life

    @property
    def fade(self) -> float:
        """Remaining life, 1.0 when fresh down to 0.0."""
        if self.life <= 0:
            return 0.0
        return max(0.0, 1.0 - self.age / self.life)


@dataclass
class RunTally:
    """Per-run counters shared by the session and the collision engine."""

    score: int = 0
    score_carry: float = 0.0
    lives: int = 3
    streak: int = 0
    best_streak: int = 0
    passed: int = 0
    hits: int = 0
    slow: float = 0.0
    hit_stop: float = 0.0
    distance: float = 0.0

    def add_score(self, points: float) -> int:
        """Accumulate fractional points. Returns whole points added."""
        self.score_carry += points
        whole = int(self.score_carry)
        self.score_carry -= whole
        self.score += whole
        return whole
