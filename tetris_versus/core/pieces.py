"""
Tetromino piece definitions and operations for Tetris Versus.
Includes all 7 Tetris pieces, their colours and integer rotation.
"""

import itertools
from enum import Enum
from typing import List, Tuple
import numpy as np

from .exceptions import InvalidPieceException


class PieceType(Enum):
    """The 7 standard Tetris pieces."""
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


# Block offsets (col, row) from the piece anchor in the spawn orientation
PIECE_DEFINITIONS = {
    PieceType.I: [(-2, 0), (-1, 0), (0, 0), (1, 0)],
    PieceType.J: [(0, 0), (0, 1), (1, 1), (2, 1)],
    PieceType.L: [(0, 0), (0, 1), (-1, 1), (-2, 1)],
    PieceType.O: [(-1, 0), (0, 0), (0, 1), (-1, 1)],
    PieceType.S: [(0, 0), (1, 0), (0, 1), (-1, 1)],
    PieceType.T: [(0, 0), (0, 1), (1, 1), (-1, 1)],
    PieceType.Z: [(0, 0), (-1, 0), (0, 1), (1, 1)],
}

PIECE_COLORS = {
    PieceType.I: (0, 0, 255),  # Blue
    PieceType.J: (0, 255, 255),  # Cyan
    PieceType.L: (128, 128, 128),  # Gray
    PieceType.O: (255, 255, 0),  # Yellow
    PieceType.S: (0, 255, 0),  # Green
    PieceType.T: (255, 200, 0),  # Orange
    PieceType.Z: (255, 0, 0),  # Red
}

TOTAL_ROTATIONS = 4

# One clockwise quarter turn applied to a row vector: (c, r) -> (r, -c)
CLOCKWISE = np.array([[0, -1],
                      [1, 0]], dtype=int)

# Offsets for every (type, rotation), derived from the spawn table
_ROTATED_OFFSETS = {
    (piece_type, rotation): np.array(offsets, dtype=int) @ np.linalg.matrix_power(CLOCKWISE, rotation)
    for piece_type, offsets in PIECE_DEFINITIONS.items()
    for rotation in range(TOTAL_ROTATIONS)
}

_piece_ids = itertools.count(1)


def next_piece_id() -> int:
    """Fresh identity token; 0 is reserved for empty board cells."""
    return next(_piece_ids)


def to_piece_type(value) -> PieceType:
    """Resolve a PieceType from a member or its index."""
    if isinstance(value, PieceType):
        return value
    try:
        return PieceType(value)
    except ValueError:
        raise InvalidPieceException(f"Piece is not setup here - {value!r}") from None


class Piece:
    """A falling tetromino: a type, an anchor and a rotation count."""

    def __init__(self, piece_type, col: int, row: int, rotation: int = 0):
        self.piece_type = to_piece_type(piece_type)
        self.col = col
        self.row = row
        self.rotation = rotation
        self.piece_id = next_piece_id()

    @property
    def rotation(self) -> int:
        return self._rotation

    @rotation.setter
    def rotation(self, value: int):
        if value not in range(TOTAL_ROTATIONS):
            raise InvalidPieceException(f"Invalid rotation count: {value!r}")
        self._rotation = value

    @property
    def color(self) -> Tuple[int, int, int]:
        return PIECE_COLORS[self.piece_type]

    @property
    def offsets(self) -> np.ndarray:
        """Block offsets (col, row) for the current rotation, shape (4, 2)."""
        return _ROTATED_OFFSETS[(self.piece_type, self.rotation)]

    def get_occupied_cells(self) -> List[Tuple[int, int]]:
        """Get the board coordinates (col, row) occupied by this piece."""
        return [(self.col + int(c), self.row + int(r)) for c, r in self.offsets]

    def has_block(self, col: int, row: int) -> bool:
        """Does a block of this piece sit at the board location?"""
        return (col, row) in self.get_occupied_cells()

    def rotate_clockwise(self):
        """Rotate the piece 90 degrees clockwise."""
        self.rotation = (self.rotation + 1) % TOTAL_ROTATIONS

    def rotate_counter_clockwise(self):
        """Rotate the piece 90 degrees counter-clockwise."""
        self.rotation = (self.rotation - 1) % TOTAL_ROTATIONS

    def translate(self, dcol: int, drow: int):
        """Move the anchor by the given offsets."""
        self.col += dcol
        self.row += drow

    def get_top_offset(self) -> int:
        """Smallest row offset of the current rotation."""
        return int(self.offsets[:, 1].min())

    def __repr__(self):
        return f"Piece({self.piece_type.name}, col={self.col}, row={self.row}, r={self.rotation}, id={self.piece_id})"


def get_all_piece_types() -> List[PieceType]:
    """Get all piece types."""
    return list(PieceType)


def get_random_piece(rng: np.random.Generator) -> PieceType:
    """Pick a piece type uniformly at random."""
    return PieceType(int(rng.integers(len(PieceType))))
