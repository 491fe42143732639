"""
Shared fixtures for the Tetris Versus tests.
"""

from tetris_versus.core.controllers import Controller, Intent

# Identity used for blocks written straight into the grid
FILLER_ID = 999_999


def fill_cells(board, cells):
    """Write filler blocks at the given (col, row) locations."""
    for col, row in cells:
        board.board[row, col] = FILLER_ID
        board.types[row, col] = 0


def fill_row(board, row, skip=()):
    """Fill a whole row except the columns in `skip`."""
    fill_cells(board, [(col, row) for col in range(board.BOARD_WIDTH) if col not in skip])


class IdleController(Controller):
    """Never moves the piece; gravity does all the work."""

    name = 'idle'

    def decide_intent(self, board, piece):
        return Intent.NONE


def run_until(player, condition, delta=0.5, limit=1000):
    """Tick the player until `condition()` holds; returns the tick count."""
    for tick in range(limit):
        if condition():
            return tick
        player.update(delta)
    raise AssertionError(f"Condition not reached after {limit} ticks")
