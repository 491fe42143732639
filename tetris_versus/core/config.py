"""
Configuration for Tetris Versus.
Board constants, difficulty tiers, game modes and the match/game settings.
"""

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .exceptions import InvalidConfigException


# The size of the board
COLS = 10
ROWS = 20

# The default place to start the piece
START_COL = COLS // 2
START_ROW = 0

# Columns either side of the start column checked for a buried spawn
START_RANGE = 2

HUMAN = 'human'
CPU = 'cpu'


class Difficulty(Enum):
    """Cpu opponent difficulty tiers."""
    VERY_EASY = 0
    EASY = 1
    MEDIUM = 2
    HARD = 3
    VERY_HARD = 4


class GameMode(Enum):
    """Win/loss rule sets for a match."""
    NORMAL = 0
    INFINITE = 1
    TIMED = 2
    TUG_OF_WAR = 3


# Seconds between piece drops for the Cpu, per difficulty
DIFFICULTY_DROP_DELAYS = {
    Difficulty.VERY_EASY: 1.0,
    Difficulty.EASY: 0.75,
    Difficulty.MEDIUM: 0.5,
    Difficulty.HARD: 0.25,
    Difficulty.VERY_HARD: 0.1,
}


def parse_enum(enum_cls, value):
    """Resolve an enum member from a member, a name (any case) or a value."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace('-', '_').replace(' ', '_')
        if key in enum_cls.__members__:
            return enum_cls[key]
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    raise InvalidConfigException(f"Unknown {enum_cls.__name__}: {value!r}")


@dataclass
class GameConfig:
    """Timing and level settings for a single player."""
    drop_delay: float = 1.0  # Seconds between piece drops
    line_clear_delay: float = 1.0  # Seconds a completed line is displayed
    ceiling_row: int = START_ROW  # Pieces anchored above this row skip collision checks
    lines_per_level: int = 10
    level_speed_ratio: float = 0.08  # Drop delay reduction per level
    max_level: int = 10  # Level where the speed-up stops

    def __post_init__(self):
        if self.drop_delay <= 0 or self.line_clear_delay <= 0:
            raise InvalidConfigException("Delays must be positive")
        if self.lines_per_level <= 0:
            raise InvalidConfigException("lines_per_level must be positive")
        if not 0 <= self.level_speed_ratio * self.max_level < 1:
            raise InvalidConfigException("Level speed-up would stop the game clock")

    def get_level_drop_delay(self, level: int) -> float:
        """Drop delay for a human at the given level."""
        level = max(0, min(level, self.max_level))
        return self.drop_delay * (1.0 - self.level_speed_ratio * level)


@dataclass
class MatchConfig:
    """Configuration for a match of one or two players."""
    mode: GameMode = GameMode.NORMAL
    difficulty: Difficulty = Difficulty.MEDIUM
    players: Tuple[str, ...] = (HUMAN, CPU)
    seed: Optional[int] = None
    timed_duration: float = 120.0  # Seconds, TIMED mode only
    health: int = 100
    tug_reward: int = 1
    tug_penalty: int = 3
    game: GameConfig = field(default_factory=GameConfig)
    weights: Optional[Dict[str, float]] = None  # Overrides for the Cpu heuristic weights

    def __post_init__(self):
        self.mode = parse_enum(GameMode, self.mode)
        self.difficulty = parse_enum(Difficulty, self.difficulty)
        self.players = tuple(str(p).lower() for p in self.players)

        if not 1 <= len(self.players) <= 2:
            raise InvalidConfigException("A match needs one or two players")
        for kind in self.players:
            if kind not in (HUMAN, CPU):
                raise InvalidConfigException(f"Unknown player kind: {kind!r}")
        if self.timed_duration <= 0:
            raise InvalidConfigException("timed_duration must be positive")
        if self.health <= 0:
            raise InvalidConfigException("health must be positive")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchConfig':
        """Build a config from plain data, e.g. a parsed JSON document."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidConfigException(f"Unknown config keys: {sorted(unknown)}")

        values = dict(data)
        if 'game' in values and not isinstance(values['game'], GameConfig):
            try:
                values['game'] = GameConfig(**values['game'])
            except TypeError as e:
                raise InvalidConfigException(f"Invalid game settings: {e}") from e
        if 'players' in values:
            values['players'] = tuple(values['players'])
        return cls(**values)

    @classmethod
    def from_json(cls, path: str) -> 'MatchConfig':
        """Load a config from a JSON file."""
        with open(path, "r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))
