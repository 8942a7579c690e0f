"""Shared fixtures for the simulation tests."""

import random

import pytest

from sparkrun.core.events import EventBus
from sparkrun.profiles import GameProfile, SpawnChannel
from sparkrun.sim.playfield import Playfield
from sparkrun.sim.session import GameSession
from sparkrun.storage import MemoryStore


def quiet(profile: GameProfile) -> GameProfile:
    """Same profile with spawning pushed out of reach, for hand-placed entities."""
    channels = [
        SpawnChannel(name=c.name, kinds=c.kinds, interval_min=1e6, interval_max=1e6)
        for c in profile.channels
    ]
    return profile.model_copy(update={"channels": channels})


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def playfield():
    return Playfield(width=960, height=540)


@pytest.fixture
def make_session(store, bus):
    def factory(profile: GameProfile, **kwargs) -> GameSession:
        kwargs.setdefault("store", store)
        kwargs.setdefault("bus", bus)
        kwargs.setdefault("seed", 7)
        return GameSession(profile, **kwargs)
    return factory


def event_types(events):
    return [e.type for e in events]
