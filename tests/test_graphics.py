"""Tests for the frame buffer renderer and event-driven particles."""

import numpy as np

from sparkrun.core.events import Event, EventBus, GameEventType, state_event, tick_event
from sparkrun.graphics import ParticleEffects, SnapshotRenderer
from sparkrun.graphics.primitives import draw_circle, draw_rect, new_buffer
from sparkrun.profiles import ORBS, SPARK
from sparkrun.sim.session import GameSession


def test_draw_rect_clips():
    buffer = new_buffer(10, 10)
    draw_rect(buffer, -5, -5, 8, 8, (255, 0, 0))
    draw_rect(buffer, 20, 20, 5, 5, (0, 255, 0))
    assert tuple(buffer[0, 0]) == (255, 0, 0)
    assert tuple(buffer[3, 3]) == (0, 0, 0)
    assert not (buffer[:, :, 1] > 0).any()


def test_draw_circle_mask():
    buffer = new_buffer(20, 20)
    draw_circle(buffer, 10, 10, 4, (0, 0, 255))
    assert tuple(buffer[10, 10]) == (0, 0, 255)
    assert tuple(buffer[0, 0]) == (0, 0, 0)


def test_render_snapshot():
    session = GameSession(SPARK, seed=1)
    session.pools["obstacles"].spawn(SPARK.kind("spike"), x=500, y=300)
    renderer = SnapshotRenderer()
    buffer = renderer.render(session.snapshot())

    assert buffer.shape == (540, 960, 3)
    assert buffer.dtype == np.uint8
    actor = session.actor
    assert tuple(buffer[int(actor.cy), int(actor.cx)]) == renderer.palette.actor
    assert tuple(buffer[320, 517]) == renderer.palette.obstacle
    assert tuple(buffer[int(session.playfield.floor_y), 5]) == renderer.palette.floor


def test_render_round_actor_and_resize():
    session = GameSession(ORBS, seed=1)
    renderer = SnapshotRenderer()
    renderer.render(session.snapshot())
    session.resize(640, 360)
    buffer = renderer.render(session.snapshot())
    assert buffer.shape == (360, 640, 3)
    actor = session.actor
    assert tuple(buffer[int(actor.cy), int(actor.cx)]) == renderer.palette.actor_round


def test_effects_follow_events():
    bus = EventBus()
    effects = ParticleEffects(seed=4)
    effects.attach(bus)

    bus.emit(Event(GameEventType.JUMPED, data={"x": 10, "y": 20}))
    assert len(effects.particles) == 16

    bus.emit(tick_event(1.0, 1))
    assert effects.particles == []

    bus.emit(Event(GameEventType.HIT, data={"x": 10, "y": 20}))
    bus.emit(state_event("RUNNING", "PAUSED"))
    bus.emit(state_event("PAUSED", "RUNNING"))
    assert len(effects.particles) == 26
    bus.emit(state_event("ENDED", "RUNNING"))
    assert effects.particles == []

    effects.detach()
    bus.emit(Event(GameEventType.JUMPED, data={"x": 10, "y": 20}))
    assert effects.particles == []
