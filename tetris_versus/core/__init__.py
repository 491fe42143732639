"""
Core module for Tetris Versus.
Contains the board, pieces, timers, stats and the player state machine.
"""

from .board import Board, Cell
from .config import COLS, ROWS, Difficulty, GameMode, GameConfig, MatchConfig
from .controllers import Controller, HumanController, Intent
from .exceptions import (TetrisException, CollisionException, OutOfBoundsException,
                         InvalidPieceException, InvalidConfigException)
from .pieces import Piece, PieceType
from .player import Player, PlayerState
from .stats import Stats
from .timer import Timer

__all__ = ['Board', 'Cell', 'COLS', 'ROWS', 'Difficulty', 'GameMode', 'GameConfig', 'MatchConfig',
           'Controller', 'HumanController', 'Intent', 'TetrisException', 'CollisionException',
           'OutOfBoundsException', 'InvalidPieceException', 'InvalidConfigException',
           'Piece', 'PieceType', 'Player', 'PlayerState', 'Stats', 'Timer']
