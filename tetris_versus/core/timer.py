"""
Countdown timer driven by caller supplied time deltas.
"""

from typing import Optional


class Timer:
    """Tracks elapsed time and, when given a delay, the time remaining."""

    def __init__(self, delay: Optional[float] = None):
        self.delay = delay
        self.elapsed = 0.0
        self.remaining = delay if delay is not None else 0.0

    def reset(self, delay: Optional[float] = None):
        """Start over, optionally with a new delay."""
        if delay is not None:
            self.delay = delay
        self.elapsed = 0.0
        self.remaining = self.delay if self.delay is not None else 0.0

    def update(self, delta: float):
        self.elapsed += delta
        if self.delay is not None:
            self.remaining -= delta

    def set_remaining(self, remaining: float):
        self.remaining = remaining

    def has_time_passed(self) -> bool:
        return self.delay is not None and self.remaining <= 0

    def __repr__(self):
        return f"Timer(delay={self.delay}, elapsed={self.elapsed:.3f}, remaining={self.remaining:.3f})"
