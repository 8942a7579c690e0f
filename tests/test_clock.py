"""Tests for the clamped frame clock."""

import math

import pytest

from sparkrun.core.clock import FrameClock


@pytest.mark.parametrize("raw, expected", [
    (0.0, 0.0),
    (0.01, 0.01),
    (0.033, 0.033),
    (0.5, 0.033),
    (12.0, 0.033),
    (-0.2, 0.0),
    (float("nan"), 0.0),
    (float("-inf"), 0.0),
    (float("inf"), 0.033),
])
def test_tick_clamps(raw, expected):
    assert FrameClock(0.033).tick(raw) == pytest.approx(expected)


def test_tick_always_in_range():
    clock = FrameClock(1 / 24)
    for i in range(-50, 200):
        dt = clock.tick(i / 100)
        assert 0.0 <= dt <= 1 / 24
        assert not math.isnan(dt)


def test_since_first_call_is_zero():
    clock = FrameClock(0.033)
    assert clock.since(1000.0, millis=True) == 0.0


def test_since_measures_and_clamps():
    clock = FrameClock(0.033)
    clock.since(1000.0, millis=True)
    assert clock.since(1016.0, millis=True) == pytest.approx(0.016)
    # Tab was in the background for five seconds
    assert clock.since(6016.0, millis=True) == pytest.approx(0.033)
    # Host clock went backwards
    assert clock.since(6000.0, millis=True) == 0.0


def test_reset_forgets_last_timestamp():
    clock = FrameClock(0.033)
    clock.since(1.0)
    clock.reset()
    assert clock.since(100.0) == 0.0
