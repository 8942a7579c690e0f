"""Draws session snapshots into a numpy frame buffer."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from sparkrun.core.state import SessionState
from sparkrun.graphics.primitives import (
    Buffer, Color, dim, draw_circle, draw_hline, draw_rect, fill, new_buffer,
)
from sparkrun.sim.entities import Particle
from sparkrun.sim.session import EntityView, SessionSnapshot

logger = logging.getLogger(__name__)


@dataclass
class Palette:
    """Flat colors per entity category."""

    background: Color = (9, 12, 26)
    floor: Color = (60, 64, 80)
    actor: Color = (108, 240, 255)
    actor_round: Color = (246, 196, 83)
    shield: Color = (233, 238, 252)
    obstacle: Color = (255, 77, 109)
    hazard: Color = (255, 123, 84)
    collectible: Color = (255, 223, 145)
    powerup_shield: Color = (120, 200, 255)
    powerup_slow: Color = (92, 255, 152)


class SnapshotRenderer:
    """Plain-shape renderer for any profile.

    The renderer only reads snapshots; it keeps a buffer sized to the
    playfield and reallocates it when the snapshot size changes.
    """

    BLINK_HZ = 12.0

    def __init__(self, palette: Optional[Palette] = None) -> None:
        self.palette = palette or Palette()
        self._buffer: Optional[Buffer] = None

    def buffer_for(self, snapshot: SessionSnapshot) -> Buffer:
        width, height = int(snapshot.width), int(snapshot.height)
        if self._buffer is None or self._buffer.shape[:2] != (height, width):
            self._buffer = new_buffer(width, height, self.palette.background)
            logger.debug(f"Frame buffer allocated {width}x{height}")
        return self._buffer

    def render(self, snapshot: SessionSnapshot, particles: Iterable[Particle] = ()) -> Buffer:
        """Render a full frame and return the buffer."""
        buffer = self.buffer_for(snapshot)
        palette = self.palette
        fill(buffer, palette.background)

        if not snapshot.actor_round:
            draw_hline(buffer, snapshot.floor_y, palette.floor, thickness=max(1, int(2 * snapshot.scale)))

        for entity in snapshot.entities:
            self._draw_entity(buffer, entity)

        for p in particles:
            draw_circle(buffer, p.x, p.y, p.size, dim(p.color, p.fade))

        self._draw_actor(buffer, snapshot)
        return buffer

    def entity_color(self, entity: EntityView) -> Color:
        palette = self.palette
        if entity.effect == "shield":
            return palette.powerup_shield
        if entity.effect == "slow":
            return palette.powerup_slow
        return getattr(palette, entity.category)

    def _draw_entity(self, buffer: Buffer, entity: EntityView) -> None:
        color = self.entity_color(entity)
        if entity.resolved and entity.category != "collectible":
            color = dim(color, 0.5)
        if entity.shape == "circle":
            draw_circle(buffer, entity.x + entity.w / 2, entity.y + entity.h / 2, entity.w / 2, color)
        else:
            draw_rect(buffer, entity.x, entity.y, entity.w, entity.h, color)

    def _draw_actor(self, buffer: Buffer, snapshot: SessionSnapshot) -> None:
        actor = snapshot.actor
        palette = self.palette

        # Blink while invulnerable
        if snapshot.invulnerable > 0 and int(snapshot.elapsed * self.BLINK_HZ) % 2:
            return

        color = palette.actor_round if snapshot.actor_round else palette.actor
        if snapshot.state == SessionState.ENDED:
            color = dim(color, 0.4)

        if snapshot.actor_round:
            draw_circle(buffer, actor.cx, actor.cy, actor.radius, color)
        else:
            # Squash: shorter and wider right after a jump or landing
            squash = snapshot.squash * 0.12
            w = actor.w * (1 + squash)
            h = actor.h * (1 - squash)
            draw_rect(buffer, actor.x - (w - actor.w) / 2, actor.y + (actor.h - h), w, h, color)

        if snapshot.shield:
            draw_circle(buffer, actor.cx, actor.cy, max(actor.w, actor.h) * 0.75, palette.shield, filled=False)
