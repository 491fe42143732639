"""
Board state management for Tetris Versus.
Handles the block grid, collisions, line clearing and the board features used by the AI.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from .config import COLS, ROWS
from .exceptions import CollisionException, OutOfBoundsException
from .pieces import Piece, PieceType, PIECE_COLORS


@dataclass(frozen=True)
class Cell:
    """A locked block on the board."""
    piece_id: int
    piece_type: PieceType

    @property
    def color(self) -> Tuple[int, int, int]:
        return PIECE_COLORS[self.piece_type]


class Board:
    """Main board class: a COLS x ROWS grid of blocks owned by pieces."""

    BOARD_WIDTH = COLS
    BOARD_HEIGHT = ROWS

    # Marker for an empty cell in the type grid
    EMPTY = -1

    def __init__(self):
        # Piece id per cell, 0 = empty
        self.board = np.zeros((self.BOARD_HEIGHT, self.BOARD_WIDTH), dtype=np.int64)
        # Piece type per cell, EMPTY = empty
        self.types = np.full((self.BOARD_HEIGHT, self.BOARD_WIDTH), self.EMPTY, dtype=np.int8)
        self.lines = 0
        self.complete = False

    def reset(self):
        """Reset the board to initial state."""
        self.board[:, :] = 0
        self.types[:, :] = self.EMPTY
        self.lines = 0
        self.complete = False

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.BOARD_WIDTH and 0 <= row < self.BOARD_HEIGHT

    def is_occupied(self, col: int, row: int) -> bool:
        """Is there a block at the location? Out of bounds is never occupied."""
        if not self.in_bounds(col, row):
            return False
        return self.board[row, col] != 0

    def get_cell(self, col: int, row: int) -> Optional[Cell]:
        if not self.is_occupied(col, row):
            return None
        return Cell(int(self.board[row, col]), PieceType(int(self.types[row, col])))

    def has_bounds(self, piece: Piece) -> bool:
        """Is every block of the piece within the board?"""
        return all(self.in_bounds(col, row) for col, row in piece.get_occupied_cells())

    def has_block(self, piece: Piece) -> bool:
        """Does any block of the piece overlap a block already on the board?"""
        return any(self.is_occupied(col, row) for col, row in piece.get_occupied_cells())

    def is_valid_position(self, piece: Piece) -> bool:
        """Check if a piece position is valid (within bounds and not colliding)."""
        return self.has_bounds(piece) and not self.has_block(piece)

    def add_piece(self, piece: Piece):
        """Write the piece's blocks into the grid."""
        if self.has_block(piece):
            raise CollisionException("A block already exists here and the piece can't be placed")
        if not self.has_bounds(piece):
            raise OutOfBoundsException(f"{piece!r} does not fit within the board")

        for col, row in piece.get_occupied_cells():
            self._set_block(col, row, piece)

    def remove_piece(self, piece: Piece):
        """Remove every block belonging to the piece, wherever it sits."""
        owned = self.board == piece.piece_id
        self.board[owned] = 0
        self.types[owned] = self.EMPTY

    def fill_piece(self, piece: Piece):
        """Place whichever blocks of the piece fit; used when the board crashes."""
        for col, row in piece.get_occupied_cells():
            if self.in_bounds(col, row) and not self.is_occupied(col, row):
                self._set_block(col, row, piece)

    def _set_block(self, col: int, row: int, piece: Piece):
        self.board[row, col] = piece.piece_id
        self.types[row, col] = piece.piece_type.value

    def get_drop_row(self, piece: Piece) -> int:
        """Lowest anchor row the piece reaches by falling from its current row."""
        original_row = piece.row
        try:
            while True:
                piece.row += 1
                if not self.has_bounds(piece) or self.has_block(piece):
                    return piece.row - 1
        finally:
            piece.row = original_row

    def has_empty_row(self, row: int) -> bool:
        return not np.any(self.board[row])

    def has_completed_row(self, row: int) -> bool:
        return bool(np.all(self.board[row]))

    def get_completed_rows(self) -> List[int]:
        return [row for row in range(self.BOARD_HEIGHT) if self.has_completed_row(row)]

    def get_completed_row_count(self) -> int:
        return len(self.get_completed_rows())

    def mark_completed_row(self) -> bool:
        """Flag the board complete if at least one row is full."""
        if self.get_completed_row_count() > 0:
            self.complete = True
            return True
        return False

    def clear_completed_rows(self):
        """Empty every full row in place; nothing is shifted."""
        for row in self.get_completed_rows():
            self.board[row] = 0
            self.types[row] = self.EMPTY

    def drop_blocks(self):
        """Move rows down into empty rows beneath them until nothing moves."""
        check = True
        while check:
            check = False
            for row in range(self.BOARD_HEIGHT - 1):
                if not self.has_empty_row(row) and self.has_empty_row(row + 1):
                    self._drop_row(row)
                    check = True

    def _drop_row(self, row: int):
        self.board[row + 1] = self.board[row]
        self.types[row + 1] = self.types[row]
        self.board[row] = 0
        self.types[row] = self.EMPTY

    def get_column_height(self, col: int) -> int:
        """ROWS minus the row of the topmost block, 0 for an empty column."""
        filled = np.flatnonzero(self.board[:, col])
        if filled.size == 0:
            return 0
        return self.BOARD_HEIGHT - int(filled[0])

    def get_height_map(self) -> List[int]:
        """Get the height of each column."""
        return [self.get_column_height(col) for col in range(self.BOARD_WIDTH)]

    def get_aggregate_height(self) -> int:
        return sum(self.get_height_map())

    def get_hole_count(self) -> int:
        """Count empty cells with at least one block above them in the same column."""
        occupied = self.board != 0
        covered = np.logical_or.accumulate(occupied, axis=0)
        return int(np.sum(covered & ~occupied))

    def get_bumpiness(self) -> int:
        """Sum of height differences between adjacent columns."""
        heights = np.array(self.get_height_map())
        return int(np.sum(np.abs(np.diff(heights))))

    def is_empty(self) -> bool:
        return not np.any(self.board)

    def to_array(self) -> np.ndarray:
        """Occupancy copy, 1 = filled, indexed [row][col]."""
        return (self.board != 0).astype(np.int8)

    def __str__(self):
        """String representation of the board."""
        result = []
        for row in range(self.BOARD_HEIGHT):
            result.append("".join("█" if self.board[row, col] else "·" for col in range(self.BOARD_WIDTH)))
        return "\n".join(result)

    def __repr__(self):
        return f"Board(lines={self.lines}, complete={self.complete}, height={self.get_aggregate_height()})"
