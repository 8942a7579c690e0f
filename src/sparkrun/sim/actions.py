"""Discrete player actions delivered by input sources."""

from enum import Enum


class Action(Enum):
    """Actions accepted by GameSession.on_action()."""

    JUMP = "jump"
    START = "start"
    RESTART = "restart"
    PAUSE = "pause"
    MENU = "menu"

    # Held directions (free-move games), sent with pressed=True/False
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"

    # Preferences
    TOGGLE_MUTE = "toggle_mute"
    TOGGLE_DOUBLE_JUMP = "toggle_double_jump"
    RESET_BEST = "reset_best"

    @property
    def is_move(self) -> bool:
        return self in MOVES


MOVES = frozenset({Action.MOVE_UP, Action.MOVE_DOWN, Action.MOVE_LEFT, Action.MOVE_RIGHT})
