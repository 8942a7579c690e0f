"""
State machine for a SPARKRUN session.

States:
    IDLE: Before the first start, or back at the menu (world is static)
    RUNNING: Simulation advancing
    PAUSED: Simulation frozen, rendering continues
    ENDED: Run finished; the world may still be drawn but never simulated
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Run states."""
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    ENDED = auto()


Listener = Callable[[SessionState, SessionState], None]


class StateMachine:
    """
    Tracks the run state and validates transitions.

    Listeners are notified after every successful transition. Callers that
    handle player input should check can_transition() first; transition()
    itself logs a warning when asked for an invalid move.
    """

    VALID_TRANSITIONS: list[tuple[SessionState, SessionState]] = [
        # From IDLE
        (SessionState.IDLE, SessionState.RUNNING),

        # From RUNNING
        (SessionState.RUNNING, SessionState.PAUSED),
        (SessionState.RUNNING, SessionState.ENDED),
        (SessionState.RUNNING, SessionState.IDLE),  # Back to menu

        # From PAUSED
        (SessionState.PAUSED, SessionState.RUNNING),
        (SessionState.PAUSED, SessionState.ENDED),
        (SessionState.PAUSED, SessionState.IDLE),

        # From ENDED
        (SessionState.ENDED, SessionState.RUNNING),  # Play again
        (SessionState.ENDED, SessionState.IDLE),
    ]

    def __init__(self, initial_state: SessionState = SessionState.IDLE) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> SessionState:
        """Get current state."""
        return self._state

    @property
    def is_simulating(self) -> bool:
        """True while the world should advance."""
        return self._state == SessionState.RUNNING

    def can_transition(self, to_state: SessionState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: SessionState) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.debug(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
