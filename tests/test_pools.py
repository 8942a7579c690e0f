"""Tests for entity and particle pools."""

import random

import pytest

from sparkrun.profiles import KindSpec
from sparkrun.sim.playfield import Playfield
from sparkrun.sim.pools import EntityPool, ParticlePool

SPIKE = KindSpec(name="spike", width=(34, 34), height=(40, 40))
DRONE = KindSpec(name="drone", width=(42, 42), height=(32, 32), placement="air")
ORB = KindSpec(name="orb", category="collectible", width=(24, 24), height=(10, 10),
               placement="band", shape="circle")


@pytest.fixture
def pool(playfield, rng):
    return EntityPool(playfield, rng)


def test_spawns_at_trailing_edge_on_floor(pool, playfield):
    entity = pool.spawn(SPIKE)
    assert entity.x == playfield.width + 40
    assert entity.y == playfield.floor_y - 40
    assert entity.bottom == playfield.floor_y
    assert len(pool) == 1


def test_air_placement_stays_in_band(pool, playfield):
    low, high = playfield.band
    for _ in range(100):
        entity = pool.spawn(DRONE)
        assert low <= entity.bottom <= high


def test_band_placement_and_circle_size(pool, playfield):
    for _ in range(100):
        entity = pool.spawn(ORB)
        assert entity.w == entity.h == 24
        assert 40 <= entity.cy <= playfield.height - 40


def test_explicit_position(pool):
    entity = pool.spawn(SPIKE, x=12.5, y=30)
    assert (entity.x, entity.y) == (12.5, 30)


def test_scale_applies_to_size_and_margin(rng):
    playfield = Playfield(width=1920, height=1080, scale=2.0)
    pool = EntityPool(playfield, rng)
    entity = pool.spawn(SPIKE)
    assert (entity.w, entity.h) == (68, 80)
    assert entity.x == 1920 + 80
    assert pool.prune_x == -100


def test_advance_uses_speed_scale(pool):
    fast = KindSpec(name="meteor", speed_scale=1.25)
    slow = pool.spawn(SPIKE, x=500, y=0)
    quick = pool.spawn(fast, x=500, y=0)
    pool.advance(0.5, 200)
    assert slow.x == pytest.approx(400)
    assert quick.x == pytest.approx(375)


def test_prune_removes_exactly_offscreen(playfield):
    rng = random.Random(5)
    pool = EntityPool(playfield, rng, prune_margin=50)
    for _ in range(60):
        pool.spawn(SPIKE, x=rng.uniform(-200, 1000), y=0)
    for _ in range(10):
        pool.advance(1 / 30, 600)

    expected = {id(e) for e in pool if e.right < -50}
    removed = pool.prune()

    assert {id(e) for e in removed} == expected
    assert all(e.right >= -50 for e in pool)
    assert len(pool) + len(removed) == 60


def test_prune_removes_consumed(pool):
    keep = pool.spawn(SPIKE, x=300, y=0)
    gone = pool.spawn(SPIKE, x=300, y=0)
    gone.consumed = True
    assert pool.prune() == [gone]
    assert list(pool) == [keep]


def test_clear(pool):
    pool.spawn(SPIKE)
    pool.clear()
    assert len(pool) == 0


def test_particle_pool_is_capped():
    particles = ParticlePool(random.Random(1), max_particles=20)
    assert particles.burst(0, 0, 15, vx=(-1, 1), vy=(-1, 1)) == 15
    assert particles.burst(0, 0, 15, vx=(-1, 1), vy=(-1, 1)) == 5
    assert len(particles) == 20


def test_particles_expire():
    particles = ParticlePool(random.Random(1))
    particles.burst(10, 10, 8, vx=(-50, 50), vy=(-50, 0), life=(0.2, 0.4))
    particles.update(0.1)
    assert len(particles) == 8
    particles.update(0.5)
    assert len(particles) == 0


def test_resize_reseats_ground_entities(pool, playfield):
    spike = pool.spawn(SPIKE, x=300)
    drone = pool.spawn(DRONE, x=300)
    drone_y = drone.y
    playfield.resize(960, 720)
    pool.on_resize()
    assert spike.bottom == playfield.floor_y
    assert drone.y == drone_y


def test_resize_scales_entities(pool, playfield):
    drone = pool.spawn(DRONE, x=300, y=100)
    playfield.resize(1920, 1080, 2.0)
    pool.on_resize(2.0)
    assert (drone.x, drone.y, drone.w, drone.h) == (600, 200, 84, 64)
