"""
Player state machine for Tetris Versus.
Runs the piece lifecycle on one board: spawn, fall, lock, line clear, game over.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
import numpy as np

from .board import Board
from .config import (COLS, ROWS, START_COL, START_ROW, START_RANGE,
                     GameConfig, GameMode)
from .controllers import Controller, Intent
from .pieces import Piece, get_random_piece
from .stats import Stats
from .timer import Timer


class PlayerState(Enum):
    """Where the player is in the piece lifecycle."""
    SPAWNING = 0
    FALLING = 1
    LOCKING = 2
    LINE_CLEAR_PENDING = 3
    LINE_CLEAR_RESOLVING = 4
    GAME_OVER = 5


class Player:
    """One board plus its current and next piece, driven by a controller."""

    def __init__(self, controller: Controller, config: Optional[GameConfig] = None,
                 rng: Optional[np.random.Generator] = None, name: Optional[str] = None,
                 stats: Optional[Stats] = None, drop_delay: Optional[float] = None):
        self.controller = controller
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.name = name or controller.name
        self.stats = stats or Stats(GameMode.NORMAL, lines_per_level=self.config.lines_per_level)
        self.board = Board()

        # Timer that determines when a piece will drop
        self.drop_timer = Timer(drop_delay or self.config.drop_delay)
        # Timer that determines how long to display completed lines
        self.clear_timer = Timer(self.config.line_clear_delay)

        self.piece: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.game_over = False
        self.state = PlayerState.SPAWNING
        self.pieces_locked = 0

        # Callbacks
        self.on_piece_locked: Optional[Callable] = None
        self.on_lines_cleared: Optional[Callable] = None
        self.on_game_over: Optional[Callable] = None
        self.on_level_up: Optional[Callable] = None

        self._create_next_piece()

    @property
    def is_human(self) -> bool:
        return self.controller.is_human

    @property
    def lines(self) -> int:
        return self.board.lines

    @property
    def level(self) -> int:
        return self.stats.level

    @property
    def drop_delay(self) -> float:
        return self.drop_timer.delay

    def set_drop_delay(self, delay: float):
        """Change the time between drops; the running countdown is kept."""
        self.drop_timer.delay = delay

    def reset(self):
        """Start a fresh board; stats and the game clock are kept."""
        self.board.reset()
        self.drop_timer.reset()
        self.clear_timer.reset()
        self.piece = None
        self.next_piece = None
        self.game_over = False
        self.state = PlayerState.SPAWNING
        self.controller.reset()
        self._create_next_piece()

    def update(self, delta: float, intent: Optional[Intent] = None):
        """Advance the player by one tick of `delta` seconds."""
        if self.game_over:
            return

        self.stats.update(self.board.lines, delta)

        # While lines are displayed the piece timer is frozen
        if self.board.complete:
            self._update_line_clear(delta)
            return

        if self.piece is None:
            self._spawn_piece()
            return

        self._update_gravity(delta)

        if self.piece is not None and not self.game_over:
            if intent is None:
                intent = self.controller.decide_intent(self.board, self.piece)
            self.apply_intent(intent)

    def apply_intent(self, intent: Intent) -> bool:
        """Apply one movement to the falling piece; invalid moves are undone."""
        if self.piece is None or intent == Intent.NONE:
            return False

        if intent == Intent.MOVE_LEFT:
            return self._move(-1)
        elif intent == Intent.MOVE_RIGHT:
            return self._move(1)
        elif intent == Intent.ROTATE_CLOCKWISE:
            return self._rotate(1)
        elif intent == Intent.ROTATE_COUNTER_CLOCKWISE:
            return self._rotate(-1)
        elif intent == Intent.DROP:
            # Expire the timer so the piece falls on the next tick
            self.drop_timer.set_remaining(0)
            return True
        return False

    def _move(self, dcol: int) -> bool:
        self.piece.translate(dcol, 0)
        if not self.board.is_valid_position(self.piece):
            self.piece.translate(-dcol, 0)
            return False
        return True

    def _rotate(self, direction: int) -> bool:
        if direction > 0:
            self.piece.rotate_clockwise()
        else:
            self.piece.rotate_counter_clockwise()

        if not self._is_above_ceiling() and not self.board.is_valid_position(self.piece):
            if direction > 0:
                self.piece.rotate_counter_clockwise()
            else:
                self.piece.rotate_clockwise()
            return False
        return True

    def _is_above_ceiling(self) -> bool:
        return self.piece.row < self.config.ceiling_row

    def _create_next_piece(self):
        # The preview piece waits off to the right of the board
        self.next_piece = Piece(get_random_piece(self.rng), COLS + 2, START_ROW + ROWS - 3)

    def _spawn_piece(self):
        if self.next_piece is None:
            self._create_next_piece()

        self.piece = self.next_piece
        self.piece.col = START_COL
        self.piece.row = START_ROW
        self._create_next_piece()
        self.state = PlayerState.FALLING

    def _update_gravity(self, delta: float):
        if not self.drop_timer.has_time_passed():
            self.drop_timer.update(delta)
            return

        self.drop_timer.reset()
        self.piece.translate(0, 1)

        if self._is_above_ceiling():
            return

        if not self.board.has_bounds(self.piece) or self.board.has_block(self.piece):
            self.piece.translate(0, -1)
            self._lock_piece()

    def _lock_piece(self):
        self.state = PlayerState.LOCKING
        piece = self.piece
        crashed = False

        if not self.board.has_bounds(piece) or self.board.has_block(piece):
            # Jammed at spawn or locked over another block
            self.board.fill_piece(piece)
            crashed = True
        else:
            self.board.add_piece(piece)

        if self._is_spawn_buried():
            crashed = True

        self.pieces_locked += 1
        self.piece = None

        if self.on_piece_locked:
            self.on_piece_locked(self, piece)

        if self.board.mark_completed_row():
            self.state = PlayerState.LINE_CLEAR_PENDING
        else:
            self.state = PlayerState.SPAWNING

        if crashed:
            self._set_game_over()

    def _is_spawn_buried(self) -> bool:
        for offset in range(START_RANGE + 1):
            if self.board.is_occupied(START_COL - offset, START_ROW):
                return True
            if self.board.is_occupied(START_COL + offset, START_ROW):
                return True
        return False

    def _update_line_clear(self, delta: float):
        if not self.clear_timer.has_time_passed():
            self.state = PlayerState.LINE_CLEAR_PENDING
            self.clear_timer.update(delta)
            return

        self.state = PlayerState.LINE_CLEAR_RESOLVING
        previous_level = self.level
        count = self.board.get_completed_row_count()

        self.board.lines += count
        self.board.clear_completed_rows()
        self.board.drop_blocks()
        self.board.complete = False
        self.clear_timer.reset()
        self.state = PlayerState.SPAWNING

        self.stats.lines = self.board.lines

        if self.on_lines_cleared:
            self.on_lines_cleared(self, count)

        if self.level > previous_level and self.on_level_up:
            self.on_level_up(self, self.level)

    def _set_game_over(self):
        self.game_over = True
        self.state = PlayerState.GAME_OVER
        if self.on_game_over:
            self.on_game_over(self)

    def get_piece_cells(self) -> List[Tuple[int, int]]:
        """Board cells of the falling piece, empty while none is in play."""
        if self.piece is None:
            return []
        return self.piece.get_occupied_cells()

    def get_stats(self) -> Dict[str, Any]:
        """Get current player statistics."""
        stats = self.stats.to_dict()
        stats.update({
            'name': self.name,
            'state': self.state.name,
            'lines': self.lines,
            'level': self.level,
            'pieces_locked': self.pieces_locked,
            'game_over': self.game_over,
            'board_height': max(self.board.get_height_map()),
            'holes': self.board.get_hole_count(),
            'bumpiness': self.board.get_bumpiness(),
        })
        return stats

    def __str__(self):
        """Board with the falling piece drawn over it."""
        rows = str(self.board).split("\n")
        for col, row in self.get_piece_cells():
            if self.board.in_bounds(col, row):
                rows[row] = rows[row][:col] + "○" + rows[row][col + 1:]
        header = f"{self.name}  lines: {self.lines}  level: {self.level}  health: {self.stats.health}"
        return "\n".join([header] + rows)

    def __repr__(self):
        return f"Player(name={self.name!r}, state={self.state.name}, lines={self.lines})"
