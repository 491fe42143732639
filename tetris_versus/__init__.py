# Tetris Versus - Human and CPU Tetris engine
# __init__.py for the tetris_versus module

from .core import Board, Piece, PieceType, Player, PlayerState, MatchConfig, GameConfig, GameMode, Difficulty
from .core.controllers import HumanController, Intent
from .ai import BoardEvaluator, HeuristicWeights, PlacementSearch, CpuController
from .match import MatchController, Outcome

__version__ = "0.1.0"
