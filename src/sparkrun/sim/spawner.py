"""Time-driven spawn scheduling."""

import logging
import random
from typing import Optional, Sequence

from sparkrun.core.events import Event, GameEventType
from sparkrun.profiles import BonusSpec, KindSpec, SpawnChannel
from sparkrun.sim.entities import Entity
from sparkrun.sim.pools import EntityPool

logger = logging.getLogger(__name__)


def weighted_choice(rng: random.Random, kinds: Sequence[KindSpec]) -> KindSpec:
    """Pick a kind with probability proportional to its weight.

    Uses a single uniform draw walked against cumulative weights, so the
    same seed always yields the same sequence of kinds.
    """
    total = sum(spec.weight for spec in kinds)
    roll = rng.random() * total
    acc = 0.0
    for spec in kinds:
        acc += spec.weight
        if roll < acc:
            return spec
    return kinds[-1]


class Spawner:
    """Countdown for one spawn channel.

    When the countdown expires the spawner either spawns a kind drawn from
    the channel, or, if its previous spawn has not yet moved a safe gap
    away from the trailing edge, retries after a short fixed delay. An
    obstacle spawn may also drop a bonus power-up ahead of itself.
    """

    def __init__(
        self,
        channel: SpawnChannel,
        pool: EntityPool,
        rng: random.Random,
        bonus: Optional[BonusSpec] = None,
        bonus_pool: Optional[EntityPool] = None,
    ) -> None:
        self.channel = channel
        self.pool = pool
        self.rng = rng
        self.bonus = bonus if channel.carries_bonus else None
        self.bonus_pool = bonus_pool if bonus_pool is not None else pool
        self.countdown = 0.0
        self.last_bonus_at = float("-inf")
        self.last_spawn: Optional[Entity] = None
        self.reset()

    def reset(self) -> None:
        self.last_spawn = None
        self.last_bonus_at = float("-inf")
        if self.channel.first_delay is not None:
            self.countdown = self.channel.first_delay
        else:
            self.countdown = self.next_interval(0.0)

    def next_interval(self, elapsed: float) -> float:
        """Draw the next countdown, shrinking as the run goes on."""
        channel = self.channel
        base = self.rng.uniform(channel.interval_min, channel.interval_max)
        interval = base / (1.0 + channel.interval_decay * elapsed)
        return max(channel.interval_floor, interval)

    def gap_clear(self) -> bool:
        """True once the previous spawn has travelled the safe gap."""
        if self.channel.safe_gap <= 0 or self.last_spawn is None:
            return True
        travelled = self.pool.spawn_x - self.last_spawn.x
        return travelled >= self.channel.safe_gap * self.pool.playfield.scale

    def update(self, dt: float, elapsed: float) -> list[Event]:
        """Advance the countdown and spawn when it expires.

        Args:
            dt: Simulation step in seconds
            elapsed: Run time so far, drives interval shrinking and the
                bonus interval
        """
        self.countdown -= dt
        if self.countdown > 0:
            return []

        if not self.gap_clear():
            self.countdown = self.channel.retry_delay
            logger.debug(f"{self.channel.name}: spawn deferred, gap not clear")
            return [Event(GameEventType.DEFERRED, data={"channel": self.channel.name}, source="spawner")]

        spec = weighted_choice(self.rng, self.channel.kinds)
        entity = self.pool.spawn(spec)
        self.last_spawn = entity
        self.countdown = self.next_interval(elapsed)

        events = [Event(
            GameEventType.SPAWNED,
            data={"channel": self.channel.name, "kind": spec.name, "entity": entity},
            source="spawner",
        )]

        bonus_entity = self._maybe_bonus(entity, elapsed)
        if bonus_entity is not None:
            events.append(Event(
                GameEventType.SPAWNED,
                data={"channel": "bonus", "kind": bonus_entity.kind, "entity": bonus_entity},
                source="spawner",
            ))
        return events

    def _maybe_bonus(self, anchor: Entity, elapsed: float) -> Optional[Entity]:
        bonus = self.bonus
        if bonus is None:
            return None
        if elapsed - self.last_bonus_at <= bonus.min_interval:
            return None
        if self.rng.random() >= bonus.chance:
            return None

        self.last_bonus_at = elapsed
        spec = weighted_choice(self.rng, bonus.kinds)
        playfield = self.pool.playfield
        scale = playfield.scale

        size = round(spec.width[0] * scale)
        floor = playfield.floor_y
        y = floor - size - round(bonus.lift * scale)
        top = round(playfield.height * bonus.band_top)
        lowest = floor - size - round(bonus.floor_clearance * scale)
        y = max(top, min(lowest, y))
        x = anchor.right + round(self.rng.uniform(*bonus.offset) * scale)

        logger.debug(f"Bonus {spec.name} placed ahead of {anchor.kind}")
        return self.bonus_pool.spawn(spec, x=x, y=y)
