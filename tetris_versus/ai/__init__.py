"""
AI module for Tetris Versus.
Contains the board evaluators, the placement search and the Cpu controller.
"""

from .evaluation import BoardEvaluator, HeuristicWeights, LegacyEvaluator, LegacyWeights, create_evaluator
from .placement import Destination, PlacementSearch
from .cpu import CpuController

__all__ = ['BoardEvaluator', 'HeuristicWeights', 'LegacyEvaluator', 'LegacyWeights', 'create_evaluator',
           'Destination', 'PlacementSearch', 'CpuController']
