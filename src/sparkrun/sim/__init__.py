"""Simulation core: actor, entity pools, spawning, collisions and the session."""

from .actions import Action
from .entities import Actor, Box, Entity, Particle, RunTally, circles_overlap, overlaps
from .playfield import Playfield
from .pools import EntityPool, ParticlePool
from .spawner import Spawner, weighted_choice
from .physics import ActorPhysics
from .collision import CollisionEngine
from .session import GameSession, SessionSnapshot, EntityView

__all__ = [
    "Action",
    "Actor",
    "Box",
    "Entity",
    "Particle",
    "RunTally",
    "circles_overlap",
    "overlaps",
    "Playfield",
    "EntityPool",
    "ParticlePool",
    "Spawner",
    "weighted_choice",
    "ActorPhysics",
    "CollisionEngine",
    "GameSession",
    "SessionSnapshot",
    "EntityView",
]
