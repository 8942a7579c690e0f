"""Persistence for best scores and preferences."""

from .store import KeyValueStore, MemoryStore, JsonFileStore
from .scoreboard import ScoreBoard, parse_score

__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore", "ScoreBoard", "parse_score"]
