"""
Controllers decide what a player's falling piece does each tick.
"""

from collections import deque
from enum import Enum

from .board import Board
from .pieces import Piece


class Intent(Enum):
    """A single movement request for the falling piece."""
    NONE = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    ROTATE_CLOCKWISE = 3
    ROTATE_COUNTER_CLOCKWISE = 4
    DROP = 5


class Controller:
    """Base class for the input source of a player."""

    name = 'controller'
    is_human = False

    def decide_intent(self, board: Board, piece: Piece) -> Intent:
        raise NotImplementedError

    def reset(self):
        """Forget anything tied to the current game."""
        pass


class HumanController(Controller):
    """Queues discrete key presses from the input layer, one consumed per tick."""

    name = 'human'
    is_human = True

    # Key names accepted by press()
    KEY_BINDINGS = {
        'left': Intent.MOVE_LEFT,
        'right': Intent.MOVE_RIGHT,
        'up': Intent.ROTATE_COUNTER_CLOCKWISE,
        'rotate': Intent.ROTATE_COUNTER_CLOCKWISE,
        'down': Intent.DROP,
        'drop': Intent.DROP,
    }

    def __init__(self):
        self.pending = deque()

    def press(self, key):
        """Record a key release; accepts an Intent or a bound key name."""
        intent = key if isinstance(key, Intent) else self.KEY_BINDINGS.get(str(key).lower())
        if intent is not None and intent != Intent.NONE:
            self.pending.append(intent)

    def decide_intent(self, board: Board, piece: Piece) -> Intent:
        if not self.pending:
            return Intent.NONE
        return self.pending.popleft()

    def reset(self):
        self.pending.clear()
