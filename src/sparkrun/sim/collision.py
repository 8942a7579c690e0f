"""Collision and pass detection between the actor and the pools."""

import logging
from typing import Iterable

from sparkrun.core.events import Event, GameEventType
from sparkrun.profiles import GameProfile
from sparkrun.sim.entities import Actor, Box, Entity, RunTally, circles_overlap, overlaps
from sparkrun.sim.pools import EntityPool

logger = logging.getLogger(__name__)


class CollisionEngine:
    """Resolves contacts for one tick.

    Every effect is gated on the entity's resolved flag, which only ever
    goes from False to True, so no entity scores, heals or damages twice
    regardless of scan order.
    """

    def __init__(self, profile: GameProfile) -> None:
        self.profile = profile
        self.round_actor = profile.mode == "free"

    def touches(self, actor: Box, entity: Entity) -> bool:
        if self.round_actor and entity.spec.shape == "circle":
            return circles_overlap(actor, entity)
        return overlaps(actor, entity)

    def check_passes(self, actor: Actor, pools: Iterable[EntityPool], tally: RunTally) -> list[Event]:
        """Award the pass bonus for obstacles whose trailing edge cleared the actor."""
        events = []
        for pool in pools:
            for entity in pool:
                if entity.category != "obstacle" or entity.resolved:
                    continue
                if entity.right < actor.x:
                    entity.resolve()
                    bonus = self.profile.pass_bonus
                    if bonus is None:
                        bonus = entity.spec.score
                    tally.score += bonus
                    tally.passed += 1
                    events.append(Event(
                        GameEventType.PASSED,
                        data={"kind": entity.kind, "points": bonus, "entity": entity},
                        source="collision",
                    ))
        return events

    def check_all(self, actor: Actor, pools: Iterable[EntityPool], tally: RunTally) -> list[Event]:
        """Test the actor against every unresolved entity.

        Collectibles are checked first and are never blocked by the
        invulnerability window. Harmful contacts are skipped entirely
        while the window is open.
        """
        pools = list(pools)
        box = actor.box()
        events: list[Event] = []

        for pool in pools:
            for entity in pool:
                if entity.category == "collectible" and not entity.resolved and self.touches(box, entity):
                    events.append(self._collect(actor, entity, tally))

        for pool in pools:
            for entity in pool:
                if actor.invulnerable > 0 or tally.lives <= 0:
                    return events
                if not entity.is_harmful or entity.resolved:
                    continue
                if self.touches(box, entity):
                    events.append(self._hit(actor, entity, tally))
        return events

    def _collect(self, actor: Actor, entity: Entity, tally: RunTally) -> Event:
        entity.resolve()
        entity.consumed = True
        profile = self.profile
        effect = entity.spec.effect

        if effect == "shield":
            actor.shield = True
            tally.score += profile.shield_score
            return Event(
                GameEventType.POWERUP,
                data={"kind": entity.kind, "effect": effect, "points": profile.shield_score},
                source="collision",
            )
        if effect == "slow":
            tally.slow = profile.slow_duration
            tally.score += profile.slow_score
            return Event(
                GameEventType.POWERUP,
                data={"kind": entity.kind, "effect": effect, "points": profile.slow_score},
                source="collision",
            )

        points = entity.spec.score + tally.streak * profile.streak_bonus
        tally.score += points
        tally.streak += 1
        if profile.streak_cap:
            tally.streak = min(tally.streak, profile.streak_cap)
        tally.best_streak = max(tally.best_streak, tally.streak)
        if profile.pickup_restores:
            tally.lives += profile.pickup_restores
            if profile.lives_cap is not None:
                tally.lives = min(tally.lives, profile.lives_cap)
        return Event(
            GameEventType.PICKUP,
            data={"kind": entity.kind, "points": points, "streak": tally.streak, "x": entity.cx, "y": entity.cy},
            source="collision",
        )

    def _hit(self, actor: Actor, entity: Entity, tally: RunTally) -> Event:
        entity.resolve()
        if entity.spec.consumed_on_contact:
            entity.consumed = True
        profile = self.profile

        if actor.shield:
            actor.shield = False
            actor.invulnerable = profile.shield_invulnerable_time
            tally.hit_stop = profile.shield_hit_stop
            logger.debug(f"Shield absorbed {entity.kind}")
            return Event(
                GameEventType.BLOCKED,
                data={"kind": entity.kind, "x": actor.cx, "y": actor.cy},
                source="collision",
            )

        tally.lives = max(0, tally.lives - 1)
        tally.streak = 0
        tally.hits += 1
        actor.invulnerable = profile.invulnerable_time
        tally.hit_stop = profile.hit_stop
        logger.debug(f"Hit by {entity.kind}, lives left: {tally.lives}")
        return Event(
            GameEventType.HIT,
            data={"kind": entity.kind, "lives": tally.lives, "x": actor.cx, "y": actor.cy},
            source="collision",
        )
