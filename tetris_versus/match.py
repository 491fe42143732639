"""
Match controller for Tetris Versus.
Owns one or two players, applies the game mode rules and the drop speed curve.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence
import numpy as np

from .ai.cpu import CpuController
from .ai.evaluation import BoardEvaluator, HeuristicWeights
from .ai.placement import PlacementSearch
from .core.config import DIFFICULTY_DROP_DELAYS, HUMAN, GameMode, MatchConfig
from .core.controllers import HumanController, Intent
from .core.player import Player
from .core.stats import Stats


class Outcome(Enum):
    """Result of the match for one player."""
    ONGOING = 0
    WIN = 1
    LOSE = 2
    DRAW = 3


class MatchController:
    """Ticks every player once per frame and decides who wins."""

    def __init__(self, config: Optional[MatchConfig] = None,
                 human_controller: Optional[HumanController] = None,
                 evaluator: Optional[BoardEvaluator] = None):
        self.config = config or MatchConfig()
        self.human_controller = human_controller
        self.evaluator = evaluator

        self.players: List[Player] = []
        self.outcomes: List[Outcome] = []
        self.frame_count = 0
        self.time_elapsed = 0.0

        # Callbacks
        self.on_piece_locked: Optional[Callable] = None
        self.on_lines_cleared: Optional[Callable] = None
        self.on_game_over: Optional[Callable] = None
        self.on_level_up: Optional[Callable] = None
        self.on_match_over: Optional[Callable] = None

        self._create_players()

    def _create_players(self):
        config = self.config
        seeds = np.random.SeedSequence(config.seed).spawn(len(config.players))
        names = self._get_player_names()

        self.players = []
        human_controller = self.human_controller
        for index, kind in enumerate(config.players):
            if kind == HUMAN:
                controller = human_controller or HumanController()
                human_controller = None
                drop_delay = config.game.drop_delay
            else:
                controller = CpuController(PlacementSearch(self._create_evaluator()))
                drop_delay = DIFFICULTY_DROP_DELAYS[config.difficulty]

            stats = Stats(config.mode, config.timed_duration,
                          config.game.lines_per_level, config.health)
            player = Player(controller, config.game, rng=np.random.default_rng(seeds[index]),
                            name=names[index], stats=stats, drop_delay=drop_delay)
            self._hook_player(index, player)
            self.players.append(player)

        self.outcomes = [Outcome.ONGOING] * len(self.players)

    def _get_player_names(self) -> List[str]:
        kinds = self.config.players
        names = []
        for kind in kinds:
            name = kind.capitalize()
            if kinds.count(kind) > 1:
                name = f"{name} {len([n for n in names if n.startswith(name)]) + 1}"
            names.append(name)
        return names

    def _create_evaluator(self) -> BoardEvaluator:
        if self.evaluator is not None:
            return self.evaluator
        if self.config.weights:
            return BoardEvaluator(HeuristicWeights.from_dict(self.config.weights))
        return BoardEvaluator()

    def _hook_player(self, index: int, player: Player):
        def piece_locked(_, piece):
            if self.on_piece_locked:
                self.on_piece_locked(index, piece)

        def lines_cleared(_, count):
            self._handle_lines_cleared(index, count)

        def game_over(_):
            if self.on_game_over:
                self.on_game_over(index)

        def level_up(_, level):
            if self.on_level_up:
                self.on_level_up(index, level)

        player.on_piece_locked = piece_locked
        player.on_lines_cleared = lines_cleared
        player.on_game_over = game_over
        player.on_level_up = level_up

    @property
    def mode(self) -> GameMode:
        return self.config.mode

    @property
    def is_over(self) -> bool:
        return any(outcome != Outcome.ONGOING for outcome in self.outcomes)

    @property
    def human(self) -> Optional[Player]:
        for player in self.players:
            if player.is_human:
                return player
        return None

    def get_winner(self) -> Optional[int]:
        """Index of the winning player, None while ongoing or on a draw."""
        for index, outcome in enumerate(self.outcomes):
            if outcome == Outcome.WIN:
                return index
        return None

    def reset(self):
        """Start the match over with fresh players."""
        self.frame_count = 0
        self.time_elapsed = 0.0
        self._create_players()

    def update(self, delta: float, intents: Optional[Sequence[Optional[Intent]]] = None):
        """Apply the mode rules, then advance every player by `delta` seconds."""
        if self.is_over:
            return

        self._apply_mode_rules()
        if self.is_over:
            return

        self.frame_count += 1
        self.time_elapsed += delta

        for index, player in enumerate(self.players):
            intent = intents[index] if intents is not None and index < len(intents) else None
            player.update(delta, intent)

        self._update_speed()

    def _apply_mode_rules(self):
        mode = self.config.mode
        crashed = [index for index, player in enumerate(self.players) if player.game_over]

        if mode == GameMode.INFINITE:
            # A crash only restarts that player's board
            for index in crashed:
                self.players[index].reset()
            return

        if mode == GameMode.TUG_OF_WAR:
            losers = [index for index, player in enumerate(self.players)
                      if player.game_over or player.stats.health <= 0]
        else:
            losers = crashed

        if losers:
            self._finish(losers)
            return

        if mode == GameMode.TIMED and any(p.stats.has_time_expired() for p in self.players):
            best = max(player.lines for player in self.players)
            leaders = [index for index, player in enumerate(self.players) if player.lines == best]
            if len(leaders) == 1:
                self._finish([i for i in range(len(self.players)) if i != leaders[0]], winners=leaders)
            else:
                self._finish([], winners=[])

    def _finish(self, losers: List[int], winners: Optional[List[int]] = None):
        if winners is None:
            winners = [i for i in range(len(self.players)) if i not in losers]

        for index in range(len(self.players)):
            if index in losers:
                self.outcomes[index] = Outcome.LOSE
            elif index in winners:
                self.outcomes[index] = Outcome.WIN
            else:
                self.outcomes[index] = Outcome.DRAW

        # Everybody crashed on the same tick
        if len(self.players) > 1 and len(losers) == len(self.players):
            self.outcomes = [Outcome.DRAW] * len(self.players)

        if self.on_match_over:
            self.on_match_over(list(self.outcomes))

    def _handle_lines_cleared(self, index: int, count: int):
        if self.config.mode == GameMode.TUG_OF_WAR:
            for other, player in enumerate(self.players):
                if other == index:
                    player.stats.update_health(self.config.tug_reward * count)
                else:
                    player.stats.update_health(-self.config.tug_penalty * count)

        if self.on_lines_cleared:
            self.on_lines_cleared(index, count)

    def _update_speed(self):
        # Humans speed up with their level, the Cpu keeps its difficulty
        for player in self.players:
            if player.is_human:
                player.set_drop_delay(self.config.game.get_level_drop_delay(player.level))

    def get_stats(self) -> List[Dict[str, Any]]:
        """Per-player statistics with the match outcome."""
        stats = []
        for player, outcome in zip(self.players, self.outcomes):
            entry = player.get_stats()
            entry['outcome'] = outcome.name
            stats.append(entry)
        return stats

    def __str__(self):
        boards = [str(player).split("\n") for player in self.players]
        width = max(len(line) for lines in boards for line in lines)
        result = []
        for row in range(max(len(lines) for lines in boards)):
            parts = [lines[row].ljust(width) if row < len(lines) else " " * width for lines in boards]
            result.append("    ".join(parts))
        return "\n".join(result)
