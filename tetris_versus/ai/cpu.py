"""
Cpu opponent: searches once per piece, then steers the piece to its destination.
"""

from typing import Optional

from ..core.board import Board
from ..core.controllers import Controller, Intent
from ..core.pieces import Piece
from .placement import Destination, PlacementSearch


class CpuController(Controller):
    """Controller that plays the best placement found by a PlacementSearch."""

    name = 'cpu'
    is_human = False

    def __init__(self, search: Optional[PlacementSearch] = None):
        self.search = search or PlacementSearch()
        self.destination: Optional[Destination] = None
        self._piece_id: Optional[int] = None

    def has_destination(self, piece: Piece) -> bool:
        return self.destination is not None and self._piece_id == piece.piece_id

    def calculate_destination(self, board: Board, piece: Piece) -> Destination:
        self.destination = self.search.find_destination(board, piece)
        self._piece_id = piece.piece_id
        return self.destination

    def decide_intent(self, board: Board, piece: Piece) -> Intent:
        # The search runs on its own tick, once per piece
        if not self.has_destination(piece):
            self.calculate_destination(board, piece)
            return Intent.NONE

        if piece.rotation != self.destination.rotation:
            return Intent.ROTATE_CLOCKWISE
        elif piece.col < self.destination.column:
            return Intent.MOVE_RIGHT
        elif piece.col > self.destination.column:
            return Intent.MOVE_LEFT
        else:
            # In place, drop the piece
            return Intent.DROP

    def reset(self):
        self.destination = None
        self._piece_id = None
