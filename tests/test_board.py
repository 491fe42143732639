"""
Tests for the board grid, collisions and line clearing.
"""

import unittest
import numpy as np

from tetris_versus.core.board import Board
from tetris_versus.core.exceptions import CollisionException, OutOfBoundsException
from tetris_versus.core.pieces import Piece, PieceType
from tests.helpers import fill_cells, fill_row


class TestBoard(unittest.TestCase):
    """Test the board functionality."""

    def setUp(self):
        self.board = Board()

    def _fill_bottom_two_rows(self):
        pieces = [Piece(PieceType.I, 2, 19), Piece(PieceType.I, 6, 19),
                  Piece(PieceType.I, 2, 18), Piece(PieceType.I, 6, 18),
                  Piece(PieceType.O, 9, 18)]
        for piece in pieces:
            self.board.add_piece(piece)
        return pieces

    def test_board_initialization(self):
        """Test board initialization."""
        self.assertEqual(self.board.board.shape, (20, 10))
        self.assertTrue(self.board.is_empty())
        self.assertEqual(self.board.lines, 0)
        self.assertFalse(self.board.complete)

    def test_add_piece(self):
        piece = Piece(PieceType.T, 4, 18)
        self.board.add_piece(piece)

        for col, row in [(4, 18), (4, 19), (5, 19), (3, 19)]:
            cell = self.board.get_cell(col, row)
            self.assertEqual(cell.piece_id, piece.piece_id)
            self.assertEqual(cell.piece_type, PieceType.T)
        self.assertIsNone(self.board.get_cell(5, 18))
        self.assertEqual(int(np.sum(self.board.to_array())), 4)

    def test_add_piece_collision(self):
        self.board.add_piece(Piece(PieceType.I, 5, 19))
        before = self.board.board.copy()

        with self.assertRaises(CollisionException):
            self.board.add_piece(Piece(PieceType.O, 5, 18))
        np.testing.assert_array_equal(self.board.board, before)

    def test_add_piece_out_of_bounds(self):
        with self.assertRaises(OutOfBoundsException):
            self.board.add_piece(Piece(PieceType.I, 0, 5))
        with self.assertRaises(OutOfBoundsException):
            self.board.add_piece(Piece(PieceType.T, 5, 19))
        self.assertTrue(self.board.is_empty())

    def test_valid_position(self):
        self.assertTrue(self.board.is_valid_position(Piece(PieceType.I, 2, 0)))
        self.assertFalse(self.board.is_valid_position(Piece(PieceType.I, 1, 0)))
        self.assertFalse(self.board.is_valid_position(Piece(PieceType.I, 5, 20)))

        fill_cells(self.board, [(3, 10)])
        self.assertFalse(self.board.is_valid_position(Piece(PieceType.I, 5, 10)))

    def test_out_of_bounds_is_never_occupied(self):
        self.assertFalse(self.board.is_occupied(-1, 5))
        self.assertFalse(self.board.is_occupied(3, 20))
        self.assertIsNone(self.board.get_cell(10, 0))

    def test_remove_piece(self):
        piece = Piece(PieceType.L, 5, 10)
        other = Piece(PieceType.O, 1, 18)
        self.board.add_piece(piece)
        self.board.add_piece(other)

        self.board.remove_piece(piece)
        self.assertFalse(any(self.board.is_occupied(c, r) for c, r in piece.get_occupied_cells()))
        self.assertTrue(all(self.board.is_occupied(c, r) for c, r in other.get_occupied_cells()))

        # Removing again changes nothing
        self.board.remove_piece(piece)
        self.assertEqual(int(np.sum(self.board.to_array())), 4)

    def test_add_then_remove_restores_board(self):
        fill_row(self.board, 19, skip=(9,))
        before = self.board.board.copy()
        piece = Piece(PieceType.I, 9, 17, 1)

        self.board.add_piece(piece)
        self.board.remove_piece(piece)
        np.testing.assert_array_equal(self.board.board, before)

    def test_fill_piece_keeps_what_fits(self):
        fill_cells(self.board, [(5, 1)])
        piece = Piece(PieceType.J, 5, 0)
        self.board.fill_piece(piece)

        self.assertEqual(self.board.get_cell(5, 0).piece_id, piece.piece_id)
        self.assertNotEqual(self.board.get_cell(5, 1).piece_id, piece.piece_id)
        self.assertTrue(self.board.is_occupied(7, 1))

    def test_drop_row(self):
        piece = Piece(PieceType.I, 5, 0)
        self.assertEqual(self.board.get_drop_row(piece), 19)
        self.assertEqual(piece.row, 0)

        fill_cells(self.board, [(5, 19)])
        self.assertEqual(self.board.get_drop_row(piece), 18)

        fill_cells(self.board, [(6, 12)])
        self.assertEqual(self.board.get_drop_row(piece), 11)

    def test_completed_rows(self):
        self._fill_bottom_two_rows()

        self.assertEqual(self.board.get_completed_rows(), [18, 19])
        self.assertEqual(self.board.get_completed_row_count(), 2)
        self.assertTrue(self.board.mark_completed_row())
        self.assertTrue(self.board.complete)

    def test_mark_completed_row_without_full_rows(self):
        fill_row(self.board, 19, skip=(0,))
        self.assertFalse(self.board.mark_completed_row())
        self.assertFalse(self.board.complete)

    def test_clear_and_drop_empties_board(self):
        self._fill_bottom_two_rows()
        self.board.clear_completed_rows()
        self.board.drop_blocks()
        self.assertTrue(self.board.is_empty())

    def test_drop_blocks_closes_gaps(self):
        self.board.add_piece(Piece(PieceType.T, 4, 17))
        fill_row(self.board, 19)

        self.board.clear_completed_rows()
        self.assertTrue(self.board.has_empty_row(19))
        self.board.drop_blocks()

        self.assertEqual(
            {(c, r) for r in range(20) for c in range(10) if self.board.is_occupied(c, r)},
            {(4, 18), (4, 19), (5, 19), (3, 19)})
        self.assertEqual(self.board.get_cell(4, 18).piece_type, PieceType.T)

    def test_drop_blocks_moves_separated_rows(self):
        fill_cells(self.board, [(0, 5), (1, 10)])
        self.board.drop_blocks()
        self.assertTrue(self.board.is_occupied(1, 19))
        self.assertTrue(self.board.is_occupied(0, 18))

    def test_drop_blocks_twice_matches_once(self):
        boards = [Board() for _ in range(3)]
        fill_cells(boards[1], [(0, 5), (1, 10), (2, 10), (4, 17)])
        fill_row(boards[2], 12, skip=(3,))
        fill_row(boards[2], 19)

        rng = np.random.default_rng(11)
        for _ in range(50):
            board = Board()
            occupied = np.argwhere(rng.random((board.BOARD_HEIGHT, board.BOARD_WIDTH)) < rng.random())
            fill_cells(board, [(int(col), int(row)) for row, col in occupied])
            boards.append(board)

        for board in boards:
            board.drop_blocks()
            once = board.board.copy()
            board.drop_blocks()
            np.testing.assert_array_equal(board.board, once)

    def test_height_map(self):
        """Test height map calculation."""
        self.board.add_piece(Piece(PieceType.I, 5, 18))
        height_map = self.board.get_height_map()
        self.assertEqual(len(height_map), 10)
        self.assertEqual(height_map[3], 2)
        self.assertEqual(height_map[0], 0)

    def test_single_column_features(self):
        fill_cells(self.board, [(0, row) for row in range(15, 20)])
        self.assertEqual(self.board.get_aggregate_height(), 5)
        self.assertEqual(self.board.get_bumpiness(), 5)
        self.assertEqual(self.board.get_hole_count(), 0)

    def test_holes_detection(self):
        """Every empty cell under a block counts as a hole."""
        fill_cells(self.board, [(3, 10)])
        self.assertEqual(self.board.get_hole_count(), 9)
        self.assertEqual(self.board.get_column_height(3), 10)
        self.assertEqual(self.board.get_bumpiness(), 20)

    def test_reset(self):
        self._fill_bottom_two_rows()
        self.board.lines = 4
        self.board.mark_completed_row()
        self.board.reset()
        self.assertTrue(self.board.is_empty())
        self.assertEqual(self.board.lines, 0)
        self.assertFalse(self.board.complete)

    def test_string_representation(self):
        self.board.add_piece(Piece(PieceType.I, 2, 19))
        rows = str(self.board).split("\n")
        self.assertEqual(len(rows), 20)
        self.assertEqual(rows[19], "████······")


if __name__ == '__main__':
    unittest.main()
