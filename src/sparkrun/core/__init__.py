"""Core framework components for SPARKRUN."""

from .state import SessionState, StateMachine
from .events import EventBus, Event, GameEventType
from .clock import FrameClock

__all__ = [
    "SessionState",
    "StateMachine",
    "EventBus",
    "Event",
    "GameEventType",
    "FrameClock",
]
