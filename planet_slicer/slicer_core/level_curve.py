"""
Level Curve
===========

Maps a level to its difficulty parameters: object speed, spawn interval and
bomb chance. Pure functions of the level and the curve config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from planet_slicer.slicer_core.config_loader import GameConfig, get_config


# Speed multiplier tiers: (last level of tier, base multiplier, per-level gain, base level)
SPEED_TIERS = (
    (2, 1.0, 0.10, 1),
    (5, 1.2, 0.15, 2),
    (None, 1.8, 0.20, 5),
)

# Spawn interval tiers: (last level of tier, offset from base interval, per-level decrease, base level)
INTERVAL_TIERS = (
    (2, 0.0, 100.0, 1),
    (5, 200.0, 150.0, 2),
    (None, 700.0, 50.0, 5),
)


@dataclass(frozen=True)
class LevelParameters:
    """Difficulty parameters for one level."""
    speed: float              # Units per frame
    spawn_interval_ms: float
    bomb_chance: float


def _check_level(level: int) -> None:
    if level < 1:
        raise ValueError(f"Level must be >= 1, got {level}")


def speed_multiplier(level: int) -> float:
    """Speed multiplier relative to the base speed."""
    _check_level(level)
    for last_level, base, gain, base_level in SPEED_TIERS:
        if last_level is None or level <= last_level:
            return base + (level - base_level) * gain
    raise AssertionError("unreachable")


def spawn_interval_ms(level: int, config: Optional[GameConfig] = None) -> float:
    """Milliseconds between spawns, clamped to the configured floor."""
    _check_level(level)
    if config is None:
        config = get_config()
    curve = config.curve

    for last_level, offset, decrease, base_level in INTERVAL_TIERS:
        if last_level is None or level <= last_level:
            interval = curve.base_spawn_interval_ms - offset - (level - base_level) * decrease
            return max(interval, curve.min_spawn_interval_ms)
    raise AssertionError("unreachable")


def bomb_chance(level: int, config: Optional[GameConfig] = None) -> float:
    """Probability that a spawn is a bomb."""
    _check_level(level)
    if config is None:
        config = get_config()
    curve = config.curve
    return min(curve.bomb_chance_start + (level - 1) * curve.bomb_chance_step, curve.bomb_chance_max)


def parameters_for(level: int, config: Optional[GameConfig] = None) -> LevelParameters:
    """
    Get the difficulty parameters for a level.

    Args:
        level: Level number, starting at 1.
        config: Game configuration. Uses default if None.

    Returns:
        LevelParameters for the level.

    Raises:
        ValueError: If level < 1.
    """
    if config is None:
        config = get_config()
    return LevelParameters(
        speed=config.curve.base_speed * speed_multiplier(level),
        spawn_interval_ms=spawn_interval_ms(level, config),
        bomb_chance=bomb_chance(level, config)
    )


def theme_index(level: int, theme_count: int) -> int:
    """Index of the decorative theme for a level (themes cycle)."""
    _check_level(level)
    return (level - 1) % theme_count
