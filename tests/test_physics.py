"""Tests for actor physics in platform and free-move modes."""

import pytest

from sparkrun.core.events import GameEventType
from sparkrun.profiles import ORBS, RUSH, SPARK
from sparkrun.sim.actions import Action
from sparkrun.sim.physics import ActorPhysics
from sparkrun.sim.playfield import Playfield


@pytest.fixture
def rush():
    # Floor at 484 with a 64px actor puts the resting top edge at 420
    playfield = Playfield(width=960, height=484, floor_line=1.0, anchor_x=RUSH.anchor_x)
    return ActorPhysics(RUSH, playfield)


def test_actor_starts_at_rest(rush):
    actor = rush.actor
    assert actor.grounded
    assert actor.y == 420
    assert actor.x == 140


def test_jump_sets_impulse(rush):
    event = rush.apply_action(Action.JUMP)
    assert event.type == GameEventType.JUMPED
    assert rush.actor.vy == -920
    assert not rush.actor.grounded


def test_gravity_integration_without_floor(rush):
    actor = rush.actor
    rush.apply_action(Action.JUMP)
    actor.y = -10000.0
    rush.integrate(1.0)
    assert actor.vy == pytest.approx(1480)
    assert not actor.grounded


def test_jump_lands_back_on_floor(rush):
    actor = rush.actor
    rush.apply_action(Action.JUMP)
    landed = []
    peak = actor.y
    for _ in range(200):
        events = rush.integrate(0.01)
        landed += [e for e in events if e.type == GameEventType.LANDED]
        peak = min(peak, actor.y)
    assert len(landed) == 1
    assert actor.y == 420
    assert actor.vy == 0
    assert actor.grounded
    # Apex of v^2 / 2g is about 176px above the floor
    assert 420 - peak == pytest.approx(920 ** 2 / (2 * 2400), rel=0.05)


def test_no_landing_event_while_resting(rush):
    for _ in range(50):
        assert rush.integrate(0.016) == []


def test_airborne_jump_ignored_without_double_jump(rush):
    rush.apply_action(Action.JUMP)
    rush.integrate(0.05)
    vy = rush.actor.vy
    assert rush.apply_action(Action.JUMP) is None
    assert rush.actor.vy == vy


def test_double_jump_once_per_flight():
    physics = ActorPhysics(SPARK, Playfield(width=960, height=540))
    assert physics.apply_action(Action.JUMP, double_jump=True).type == GameEventType.JUMPED
    physics.integrate(0.05)
    event = physics.apply_action(Action.JUMP, double_jump=True)
    assert event.type == GameEventType.DOUBLE_JUMPED
    assert physics.actor.vy == -900
    assert physics.apply_action(Action.JUMP, double_jump=True) is None


def test_knock_back_lifts_actor():
    physics = ActorPhysics(SPARK, Playfield(width=960, height=540))
    physics.knock_back()
    assert physics.actor.vy == -420
    assert not physics.actor.grounded


def test_resize_keeps_grounded_actor_on_floor(rush):
    rush.playfield.resize(1280, 720)
    rush.on_resize()
    assert rush.actor.y == 720 - 64
    assert rush.actor.x == int(1280 * RUSH.anchor_x)


def test_free_mode_moves_and_clamps():
    physics = ActorPhysics(ORBS, Playfield(width=960, height=540, anchor_x=ORBS.anchor_x))
    actor = physics.actor
    start_x = actor.x
    assert not actor.grounded

    physics.set_moving(Action.MOVE_RIGHT, True)
    for _ in range(20):
        physics.integrate(0.05)
    assert actor.x == pytest.approx(start_x + 240)

    physics.set_moving(Action.MOVE_RIGHT, False)
    physics.set_moving(Action.MOVE_LEFT, True)
    physics.set_moving(Action.MOVE_UP, True)
    for _ in range(100):
        physics.integrate(0.05)
    assert actor.x == 0
    assert actor.y == 0


def test_free_mode_ignores_jump():
    physics = ActorPhysics(ORBS, Playfield(width=960, height=540))
    assert physics.apply_action(Action.JUMP) is None


def test_scale_change_resizes_actor():
    playfield = Playfield(width=960, height=540)
    physics = ActorPhysics(SPARK, playfield)
    playfield.resize(1920, 1080, 2.0)
    physics.on_resize(2.0)
    actor = physics.actor
    assert (actor.w, actor.h) == (92, 112)
    assert actor.bottom == playfield.floor_y


def test_free_mode_scale_change_keeps_relative_position():
    playfield = Playfield(width=960, height=540, anchor_x=ORBS.anchor_x)
    physics = ActorPhysics(ORBS, playfield)
    x, y = physics.actor.x, physics.actor.y
    playfield.resize(1920, 1080, 2.0)
    physics.on_resize(2.0)
    actor = physics.actor
    assert (actor.w, actor.h) == (112, 112)
    assert (actor.x, actor.y) == (x * 2, y * 2)
