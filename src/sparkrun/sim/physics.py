"""Actor physics: gravity runner or free-moving dodger."""

import logging
from typing import Optional

from sparkrun.core.events import Event, GameEventType
from sparkrun.profiles import GameProfile
from sparkrun.sim.actions import Action
from sparkrun.sim.entities import Actor
from sparkrun.sim.playfield import Playfield

logger = logging.getLogger(__name__)


class ActorPhysics:
    """Integrates the actor's motion.

    In platform mode the actor runs on the floor line: gravity pulls it
    down, a jump sets an upward velocity and an optional second jump can
    be spent while airborne. In free mode the actor moves in the held
    directions at a constant speed and stays inside the playfield.
    """

    SQUASH_DECAY = 2.6

    def __init__(self, profile: GameProfile, playfield: Playfield) -> None:
        self.profile = profile
        self.playfield = playfield
        w, h = profile.actor_size
        self.actor = Actor(x=0.0, y=0.0, w=w, h=h)
        self._held: set[Action] = set()
        self.reset()

    @property
    def free(self) -> bool:
        return self.profile.mode == "free"

    @property
    def rest_y(self) -> float:
        """Top edge of the actor when standing on the floor."""
        return self.playfield.floor_y - self.actor.h

    def reset(self) -> None:
        """Place the actor at its anchor, at rest."""
        scale = self.playfield.scale
        w, h = self.profile.actor_size
        actor = self.actor
        actor.w = round(w * scale)
        actor.h = round(h * scale)
        actor.vy = 0.0
        actor.grounded = not self.free
        actor.can_double = False
        actor.shield = False
        actor.invulnerable = 0.0
        actor.squash = 0.0
        self._held.clear()
        self._anchor()

    def _anchor(self) -> None:
        actor = self.actor
        if self.free:
            actor.x = self.playfield.actor_x
            actor.y = self.playfield.actor_cy - actor.h / 2
            self._clamp_to_bounds()
        else:
            actor.x = self.playfield.actor_x
            actor.y = self.rest_y

    def on_resize(self, ratio: float = 1.0) -> None:
        """Recompute size and anchor after the playfield changed size.

        Args:
            ratio: New device scale divided by the old one
        """
        actor = self.actor
        scale = self.playfield.scale
        w, h = self.profile.actor_size
        actor.w = round(w * scale)
        actor.h = round(h * scale)
        actor.vy *= ratio
        if self.free:
            actor.x *= ratio
            actor.y *= ratio
            self._clamp_to_bounds()
            return
        actor.x = self.playfield.actor_x
        if actor.grounded or actor.y > self.rest_y:
            actor.y = self.rest_y

    def apply_action(self, action: Action, double_jump: bool = False) -> Optional[Event]:
        """Apply a jump. Returns the resulting event, or None if ignored."""
        if action is not Action.JUMP or self.free:
            return None

        actor = self.actor
        scale = self.playfield.scale
        if actor.grounded:
            actor.vy = -self.profile.jump_impulse * scale
            actor.grounded = False
            actor.can_double = double_jump
            actor.squash = 1.0
            return Event(GameEventType.JUMPED, data={"x": actor.cx, "y": actor.bottom}, source="physics")

        if double_jump and actor.can_double:
            actor.vy = -self.profile.double_jump_impulse * scale
            actor.can_double = False
            actor.squash = 0.9
            return Event(GameEventType.DOUBLE_JUMPED, data={"x": actor.cx, "y": actor.bottom}, source="physics")

        return None

    def set_moving(self, action: Action, pressed: bool) -> None:
        """Track a held direction for free-move mode."""
        if not action.is_move:
            return
        if pressed:
            self._held.add(action)
        else:
            self._held.discard(action)

    def integrate(self, dt: float) -> list[Event]:
        """Advance the actor by dt seconds."""
        self.actor.squash = max(0.0, self.actor.squash - dt * self.SQUASH_DECAY)
        if self.free:
            self._move(dt)
            return []
        return self._fall(dt)

    def _fall(self, dt: float) -> list[Event]:
        actor = self.actor
        actor.vy += self.profile.gravity * self.playfield.scale * dt
        actor.y += actor.vy * dt

        rest = self.rest_y
        if actor.y >= rest:
            landed = not actor.grounded
            actor.y = rest
            actor.vy = 0.0
            actor.grounded = True
            actor.can_double = False
            if landed:
                actor.squash = 0.85
                return [Event(GameEventType.LANDED, data={"x": actor.cx, "y": actor.bottom}, source="physics")]
        else:
            actor.grounded = False
        return []

    def _move(self, dt: float) -> None:
        step = self.profile.move_speed * self.playfield.scale * dt
        actor = self.actor
        if Action.MOVE_UP in self._held:
            actor.y -= step
        if Action.MOVE_DOWN in self._held:
            actor.y += step
        if Action.MOVE_LEFT in self._held:
            actor.x -= step
        if Action.MOVE_RIGHT in self._held:
            actor.x += step
        self._clamp_to_bounds()

    def _clamp_to_bounds(self) -> None:
        actor = self.actor
        actor.x = max(0.0, min(self.playfield.width - actor.w, actor.x))
        actor.y = max(0.0, min(self.playfield.height - actor.h, actor.y))

    def knock_back(self) -> None:
        """Bounce the actor up after an unshielded hit."""
        if self.free or self.profile.knockback <= 0:
            return
        actor = self.actor
        actor.vy = -max(actor.vy, self.profile.knockback * self.playfield.scale)
        actor.grounded = False
