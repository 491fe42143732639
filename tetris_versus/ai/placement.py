"""
One-ply placement search: try every rotation and column, keep the best board.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..core.board import Board
from ..core.config import START_ROW
from ..core.pieces import Piece, TOTAL_ROTATIONS
from .evaluation import BoardEvaluator


@dataclass(frozen=True)
class Destination:
    """Target rotation and column for the current piece."""
    rotation: int
    column: int
    score: float


class PlacementSearch:
    """Finds the best landing spot for a piece by simulating each drop."""

    def __init__(self, evaluator: Optional[BoardEvaluator] = None):
        self.evaluator = evaluator or BoardEvaluator()

    def get_start_row(self, piece: Piece) -> int:
        """Highest anchor row that keeps every block below the top edge."""
        return max(START_ROW, START_ROW - piece.get_top_offset())

    def iter_placements(self, board: Board, piece: Piece) -> Iterator[Tuple[int, int, int]]:
        """
        Yield (rotation, column, landing row) for every reachable drop.
        The piece is left rotated and positioned at each candidate while the
        caller handles it; rotation and anchor are restored afterwards.
        """
        original_col, original_row, original_rotation = piece.col, piece.row, piece.rotation

        try:
            for _ in range(TOTAL_ROTATIONS):
                for col in range(board.BOARD_WIDTH):
                    piece.col = col
                    piece.row = self.get_start_row(piece)

                    # Out of bounds or a block already exists here
                    if not board.has_bounds(piece) or board.has_block(piece):
                        continue

                    piece.row = board.get_drop_row(piece)
                    yield piece.rotation, col, piece.row

                piece.rotate_clockwise()
        finally:
            piece.col, piece.row = original_col, original_row
            piece.rotation = original_rotation

    def score_placement(self, board: Board, piece: Piece) -> float:
        """Add the piece, score the board, remove the piece again."""
        board.add_piece(piece)
        try:
            return self.evaluator.evaluate_placement(board, piece)
        finally:
            board.remove_piece(piece)

    def find_destination(self, board: Board, piece: Piece) -> Destination:
        """Best scoring (rotation, column); earlier candidates win ties."""
        best: Optional[Destination] = None

        for rotation, col, _ in self.iter_placements(board, piece):
            score = self.score_placement(board, piece)
            if best is None or score > best.score:
                best = Destination(rotation, col, score)

        if best is None:
            # Nowhere to go, stay put and let the piece fall
            return Destination(piece.rotation, piece.col, float('-inf'))
        return best
