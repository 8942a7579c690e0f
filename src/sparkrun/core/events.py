"""
Event bus system for SPARKRUN.

The simulation never draws, plays sounds or writes storage itself.
Each tick produces a list of events which the session publishes here;
renderers, effects and storage subscribe to the types they care about.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class GameEventType(Enum):
    """Built-in event types."""
    # Lifecycle events
    STATE_CHANGED = auto()
    GAME_OVER = auto()
    NEW_BEST = auto()
    PREFERENCE_CHANGED = auto()
    RESIZED = auto()

    # Simulation events
    TICK = auto()
    SPAWNED = auto()
    DEFERRED = auto()
    JUMPED = auto()
    DOUBLE_JUMPED = auto()
    LANDED = auto()

    # Collision events
    PASSED = auto()
    PICKUP = auto()
    POWERUP = auto()
    BLOCKED = auto()
    HIT = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (GameEventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: GameEventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "session"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Dispatch is synchronous: the simulation runs on one thread and every
    handler finishes before emit() returns.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[GameEventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: GameEventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to all events. Returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._add_to_history(event)
        handlers = self._handlers.get(event.type, []) + self._global_handlers

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def emit_all(self, events: list[Event]) -> None:
        """Emit a batch of events in order."""
        for event in events:
            self.emit(event)

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: GameEventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event."""
    return Event(GameEventType.TICK, data={"delta": delta, "frame": frame})


def state_event(old: str, new: str) -> Event:
    """Create a state change event."""
    return Event(GameEventType.STATE_CHANGED, data={"from": old, "to": new})
