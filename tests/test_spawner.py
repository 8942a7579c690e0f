"""Tests for spawn scheduling, weighted choice and bonus placement."""

import random
from collections import Counter

import pytest

from sparkrun.core.events import GameEventType
from sparkrun.profiles import SPARK, BonusSpec, KindSpec, SpawnChannel
from sparkrun.sim.pools import EntityPool
from sparkrun.sim.spawner import Spawner, weighted_choice

SPIKE = KindSpec(name="spike", width=(34, 34), height=(40, 40))
SHIELD = KindSpec(name="shield", category="collectible", width=(30, 30), height=(30, 30),
                  effect="shield", shape="circle")


def channel(**overrides):
    values = dict(name="obstacles", kinds=[SPIKE], interval_min=0.5, interval_max=0.5)
    values.update(overrides)
    return SpawnChannel(**values)


def test_weighted_choice_follows_weights():
    rng = random.Random(2024)
    kinds = SPARK.channels[0].kinds
    draws = 20000
    counts = Counter(weighted_choice(rng, kinds).name for _ in range(draws))
    assert counts["spike"] / draws == pytest.approx(0.55, abs=0.02)
    assert counts["wall"] / draws == pytest.approx(0.30, abs=0.02)
    assert counts["drone"] / draws == pytest.approx(0.15, abs=0.02)


def test_same_seed_same_sequence(playfield):
    def sequence(seed):
        rng = random.Random(seed)
        spawner = Spawner(SPARK.channels[0].model_copy(update={"safe_gap": 0.0}),
                          EntityPool(playfield, rng), rng)
        names = []
        for _ in range(400):
            for event in spawner.update(1 / 30, 0.0):
                names.append(event.data["kind"])
        return names

    assert sequence(11) == sequence(11)
    assert len(sequence(11)) > 5


def test_first_delay(playfield, rng):
    spawner = Spawner(channel(first_delay=0.9), EntityPool(playfield, rng), rng)
    assert spawner.update(0.8, 0.0) == []
    events = spawner.update(0.15, 0.0)
    assert [e.type for e in events] == [GameEventType.SPAWNED]


def test_interval_shrinks_to_floor(playfield, rng):
    spawner = Spawner(channel(interval_min=1.0, interval_max=2.0, interval_decay=0.5,
                              interval_floor=0.3),
                      EntityPool(playfield, rng), rng)
    for elapsed in (0, 1, 10, 100, 1000):
        interval = spawner.next_interval(elapsed)
        assert 0.3 <= interval <= max(0.3, 2.0 / (1 + 0.5 * elapsed))


def test_spawn_deferred_until_gap_clear(playfield, rng):
    pool = EntityPool(playfield, rng)
    spawner = Spawner(channel(safe_gap=90), pool, rng)

    first = spawner.update(0.5, 0.0)
    assert [e.type for e in first] == [GameEventType.SPAWNED]

    deferred = spawner.update(0.5, 0.5)
    assert [e.type for e in deferred] == [GameEventType.DEFERRED]
    assert spawner.countdown == pytest.approx(0.12)
    assert len(pool) == 1

    pool.advance(1.0, 100)
    events = spawner.update(0.12, 0.62)
    assert [e.type for e in events] == [GameEventType.SPAWNED]
    assert len(pool) == 2


def test_bonus_placed_ahead_and_rate_limited(playfield, rng):
    pool = EntityPool(playfield, rng)
    bonus_pool = EntityPool(playfield, rng)
    bonus = BonusSpec(kinds=[SHIELD], chance=1.0, min_interval=6.5)
    spawner = Spawner(channel(carries_bonus=True), pool, rng, bonus, bonus_pool)

    events = spawner.update(0.5, 0.0)
    assert len(events) == 2
    obstacle = events[0].data["entity"]
    power = events[1].data["entity"]
    assert events[1].data["channel"] == "bonus"
    assert power in list(bonus_pool)
    assert obstacle.right + 120 <= power.x <= obstacle.right + 220
    # floor 467 - size 30 - lift 70, inside [height * 0.35, floor - size - 22]
    assert power.y == 367

    events = spawner.update(0.5, 1.0)
    assert len(events) == 1
    assert len(bonus_pool) == 1


def test_bonus_ignored_without_flag(playfield, rng):
    bonus = BonusSpec(kinds=[SHIELD], chance=1.0)
    spawner = Spawner(channel(), EntityPool(playfield, rng), rng, bonus)
    assert spawner.bonus is None
    assert len(spawner.update(0.5, 10.0)) == 1
