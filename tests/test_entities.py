"""Tests for boxes, overlap tests and the run tally."""

import random

from sparkrun.sim.entities import Box, Entity, RunTally, circles_overlap, overlaps
from sparkrun.profiles import KindSpec


def test_overlap_is_symmetric():
    rng = random.Random(42)
    for _ in range(500):
        a = Box(rng.uniform(-50, 50), rng.uniform(-50, 50), rng.uniform(1, 40), rng.uniform(1, 40))
        b = Box(rng.uniform(-50, 50), rng.uniform(-50, 50), rng.uniform(1, 40), rng.uniform(1, 40))
        assert overlaps(a, b) == overlaps(b, a)
        assert circles_overlap(a, b) == circles_overlap(b, a)


def test_touching_edges_do_not_overlap():
    a = Box(0, 0, 10, 10)
    assert not overlaps(a, Box(10, 0, 10, 10))
    assert not overlaps(a, Box(0, 10, 10, 10))
    assert overlaps(a, Box(9.5, 9.5, 10, 10))


def test_contained_box_overlaps():
    assert overlaps(Box(0, 0, 100, 100), Box(40, 40, 5, 5))


def test_circles_reject_corner_contact():
    a = Box(0, 0, 20, 20)
    corner = Box(18, 18, 20, 20)
    assert overlaps(a, corner)
    assert not circles_overlap(a, corner)


def test_entity_resolves_once():
    entity = Entity(x=0, y=0, w=10, h=10, spec=KindSpec(name="spike"))
    assert entity.resolve()
    assert not entity.resolve()
    assert entity.resolved
    assert entity.kind == "spike"
    assert entity.is_harmful


def test_collectible_is_not_harmful():
    entity = Entity(x=0, y=0, w=10, h=10, spec=KindSpec(name="orb", category="collectible"))
    assert not entity.is_harmful


def test_tally_accumulates_fractional_score():
    tally = RunTally()
    added = sum(tally.add_score(0.25) for _ in range(10))
    assert added == 2
    assert tally.score == 2
    assert 0.0 <= tally.score_carry < 1.0
