"""
Per-player statistics: lines, level, health and the game clock.
"""

from typing import Any, Dict

from .config import GameMode
from .timer import Timer


class Stats:
    """Statistics shown next to a player's board."""

    MAX_HEALTH = 100

    def __init__(self, mode: GameMode, timed_duration: float = 120.0,
                 lines_per_level: int = 10, health: int = MAX_HEALTH):
        self.mode = mode
        self.lines_per_level = lines_per_level
        self.max_health = health
        self.health = health
        self.lines = 0

        if mode == GameMode.TIMED:
            self.game_timer = Timer(timed_duration)
        else:
            self.game_timer = Timer()

    @property
    def level(self) -> int:
        return self.lines // self.lines_per_level

    @property
    def time_elapsed(self) -> float:
        return self.game_timer.elapsed

    @property
    def time_remaining(self) -> float:
        return max(0.0, self.game_timer.remaining)

    def has_time_expired(self) -> bool:
        return self.game_timer.has_time_passed()

    def update_health(self, change: int):
        """Add to health; the result always stays between 0 and the maximum."""
        self.health = max(0, min(self.max_health, self.health + change))

    def update(self, lines: int, delta: float):
        self.lines = lines
        self.game_timer.update(delta)

        # Don't allow negative time for timed mode
        if self.game_timer.delay is not None and self.game_timer.remaining < 0:
            self.game_timer.set_remaining(0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lines': self.lines,
            'level': self.level,
            'health': self.health,
            'time_elapsed': self.time_elapsed,
            'time_remaining': self.time_remaining if self.mode == GameMode.TIMED else None,
        }
