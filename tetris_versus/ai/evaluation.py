"""
Board evaluation functions for Tetris Versus.
Provides heuristic-based evaluation for board states and piece placements.
"""

from dataclasses import dataclass, fields
from typing import Dict, Optional

from ..core.board import Board
from ..core.exceptions import InvalidConfigException
from ..core.pieces import Piece


def weights_from_dict(cls, data: Dict[str, float]):
    """Build a weights dataclass from plain data, rejecting unknown names."""
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise InvalidConfigException(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**{key: float(value) for key, value in data.items()})


@dataclass(frozen=True)
class HeuristicWeights:
    """Weights for the board evaluation heuristics."""
    height: float = -0.666
    lines_cleared: float = 0.993
    holes: float = -0.465
    bumpiness: float = -0.241

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> 'HeuristicWeights':
        return weights_from_dict(cls, data)


class BoardEvaluator:
    """Linear weighted score over aggregate height, completed lines, holes and bumpiness."""

    def __init__(self, weights: Optional[HeuristicWeights] = None):
        self.weights = weights or HeuristicWeights()

    def evaluate_board(self, board: Board) -> float:
        """Evaluate the current state of the board."""
        score = 0.0
        score += self.weights.height * board.get_aggregate_height()
        score += self.weights.lines_cleared * board.get_completed_row_count()
        score += self.weights.holes * board.get_hole_count()
        score += self.weights.bumpiness * board.get_bumpiness()
        return score

    def evaluate_placement(self, board: Board, piece: Piece) -> float:
        """Evaluate a board the piece has just been added to."""
        return self.evaluate_board(board)

    def get_detailed_evaluation(self, board: Board) -> Dict[str, float]:
        """Board features alongside the overall score."""
        return {
            'aggregate_height': board.get_aggregate_height(),
            'completed_lines': board.get_completed_row_count(),
            'holes': board.get_hole_count(),
            'bumpiness': board.get_bumpiness(),
            'overall_score': self.evaluate_board(board),
        }


@dataclass(frozen=True)
class LegacyWeights:
    """Weights for the earlier contact based placement score."""
    line: float = 50.0
    block_cover: float = 10.0
    empty_block: float = -100.0
    block_height: float = -5.0

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> 'LegacyWeights':
        return weights_from_dict(cls, data)


class LegacyEvaluator(BoardEvaluator):
    """
    Scores a placement from the piece's point of view:
    1. a bonus for each completed line
    2. a bonus for each block resting on the floor or another piece
    3. a penalty for each empty cell left under the piece
    4. a penalty for the height of each block
    """

    def __init__(self, weights: Optional[LegacyWeights] = None):
        self.weights = weights or LegacyWeights()

    def evaluate_board(self, board: Board) -> float:
        return self.weights.line * board.get_completed_row_count()

    def evaluate_placement(self, board: Board, piece: Piece) -> float:
        score = self.evaluate_board(board)
        score += self.weights.block_cover * self.get_covered_blocks(board, piece)
        score += self.weights.empty_block * self.get_empty_blocks(board, piece)
        score += self.weights.block_height * self.get_piece_height(board, piece)
        return score

    @staticmethod
    def get_covered_blocks(board: Board, piece: Piece) -> int:
        """Blocks sitting directly on the floor or on a block of another piece."""
        cells = set(piece.get_occupied_cells())
        count = 0
        for col, row in cells:
            if (col, row + 1) in cells:
                continue
            if row + 1 >= board.BOARD_HEIGHT or board.is_occupied(col, row + 1):
                count += 1
        return count

    @staticmethod
    def get_empty_blocks(board: Board, piece: Piece) -> int:
        """Empty cells beneath the piece, down to the next block or the floor."""
        cells = set(piece.get_occupied_cells())
        count = 0
        for col, row in cells:
            if (col, row + 1) in cells:
                continue
            below = row + 1
            while below < board.BOARD_HEIGHT and not board.is_occupied(col, below):
                count += 1
                below += 1
        return count

    @staticmethod
    def get_piece_height(board: Board, piece: Piece) -> int:
        return sum(board.BOARD_HEIGHT - row for _, row in piece.get_occupied_cells())


EVALUATORS = {
    'heuristic': BoardEvaluator,
    'legacy': LegacyEvaluator,
}


def create_evaluator(name: str = 'heuristic', weights: Optional[Dict[str, float]] = None) -> BoardEvaluator:
    """Create an evaluator by name, optionally overriding its weights."""
    if name not in EVALUATORS:
        raise InvalidConfigException(f"Unknown evaluator: {name!r}")
    if name == 'legacy':
        return LegacyEvaluator(LegacyWeights.from_dict(weights) if weights else None)
    return BoardEvaluator(HeuristicWeights.from_dict(weights) if weights else None)
