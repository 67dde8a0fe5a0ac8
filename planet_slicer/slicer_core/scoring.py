"""
Scoring System
==============

Applies slice rewards and tracks the level they unlock.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from planet_slicer.slicer_core.config_loader import GameConfig, get_config


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    score: int          # Total after this event
    reached_threshold: bool  # Score landed on a positive multiple of the level threshold

    def __repr__(self) -> str:
        if self.reached_threshold:
            return f"ScoreEvent(+{self.points} -> {self.score}, threshold)"
        return f"ScoreEvent(+{self.points} -> {self.score})"


class ScoreTracker:
    """
    Tracks score and level.

    Each slice adds a fixed reward. Every time the score lands on a positive
    multiple of ``points_per_level`` the caller may advance the level.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._points_per_slice = config.rules.points_per_slice
        self._points_per_level = config.rules.points_per_level
        self._score: int = 0
        self._level: int = 1
        self._slices: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def level(self) -> int:
        """Current level (starts at 1)."""
        return self._level

    @property
    def slices(self) -> int:
        """Planets sliced this game."""
        return self._slices

    @property
    def points_per_slice(self) -> int:
        return self._points_per_slice

    def apply_slice(self) -> ScoreEvent:
        """
        Award the per-slice reward.

        Returns:
            ScoreEvent describing the points awarded.
        """
        self._score += self._points_per_slice
        self._slices += 1
        return ScoreEvent(
            points=self._points_per_slice,
            score=self._score,
            reached_threshold=self._score > 0 and self._score % self._points_per_level == 0
        )

    def advance_level(self) -> int:
        """Increment the level and return the new value."""
        self._level += 1
        return self._level

    def reset(self) -> None:
        """Reset score and level."""
        self._score = 0
        self._level = 1
        self._slices = 0
