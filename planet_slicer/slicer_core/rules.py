"""
Game Rules
==========

Handles the two ways a game ends: a bomb hit, or too many missed planets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from planet_slicer.slicer_core.config_loader import GameConfig, get_config


REASON_BOMB_HIT = "bomb_hit"
REASON_MISSED_PLANETS = "missed_planets"


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class TerminationRules:
    """
    Handles game termination conditions.

    - Missed planets: the game ends when the miss counter reaches the limit
    - Bomb hit: the game ends at once
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize termination rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._max_missed = config.rules.max_missed
        self._lives_lost: int = 0

    @property
    def lives_lost(self) -> int:
        """Planets missed this game."""
        return self._lives_lost

    @property
    def max_missed(self) -> int:
        return self._max_missed

    @property
    def lives_remaining(self) -> int:
        return self._max_missed - self._lives_lost

    def record_miss(self) -> TerminationResult:
        """
        Count one missed planet.

        Returns:
            game_over("missed_planets") when this miss reaches the limit.
        """
        if self._lives_lost >= self._max_missed:
            return TerminationResult.game_over(REASON_MISSED_PLANETS)
        self._lives_lost += 1
        if self._lives_lost >= self._max_missed:
            return TerminationResult.game_over(REASON_MISSED_PLANETS)
        return TerminationResult.none()

    @staticmethod
    def bomb_hit() -> TerminationResult:
        return TerminationResult.game_over(REASON_BOMB_HIT)

    def reset(self) -> None:
        """Reset termination state."""
        self._lives_lost = 0
