"""
Tests for the level difficulty curve.
"""

import pytest

from planet_slicer.slicer_core.config_loader import load_config
from planet_slicer.slicer_core.level_curve import (
    bomb_chance,
    parameters_for,
    spawn_interval_ms,
    speed_multiplier,
    theme_index,
)


@pytest.fixture
def config():
    return load_config()


class TestBombChance:
    """Test bomb chance growth and cap."""

    def test_starts_at_base(self, config):
        assert bomb_chance(1, config) == pytest.approx(0.15)

    def test_grows_per_level(self, config):
        assert bomb_chance(2, config) == pytest.approx(0.17)
        assert bomb_chance(6, config) == pytest.approx(0.25)

    def test_capped(self, config):
        assert bomb_chance(11, config) == pytest.approx(0.35)
        assert bomb_chance(50, config) == pytest.approx(0.35)

    def test_bounded_and_non_decreasing(self, config):
        previous = 0.0
        for level in range(1, 200):
            chance = parameters_for(level, config).bomb_chance
            assert 0.15 - 1e-9 <= chance <= 0.35 + 1e-9
            assert chance >= previous
            previous = chance


class TestSpawnInterval:
    """Test spawn interval tiers and floor."""

    @pytest.mark.parametrize("level,expected", [
        (1, 1500),
        (2, 1400),
        (3, 1150),
        (4, 1000),
        (5, 850),
        (6, 750),
        (7, 700),
        (13, 400),
    ])
    def test_tier_values(self, config, level, expected):
        assert spawn_interval_ms(level, config) == pytest.approx(expected)

    def test_never_below_floor(self, config):
        for level in range(1, 200):
            assert parameters_for(level, config).spawn_interval_ms >= 400

    def test_non_increasing(self, config):
        intervals = [spawn_interval_ms(level, config) for level in range(1, 50)]
        assert all(b <= a for a, b in zip(intervals, intervals[1:]))


class TestSpeed:
    """Test speed multiplier tiers."""

    @pytest.mark.parametrize("level,expected", [
        (1, 1.0),
        (2, 1.1),
        (3, 1.35),
        (4, 1.5),
        (5, 1.65),
        (6, 2.0),
        (7, 2.2),
    ])
    def test_multiplier_values(self, level, expected):
        assert speed_multiplier(level) == pytest.approx(expected)

    def test_speed_scales_base(self, config):
        assert parameters_for(1, config).speed == pytest.approx(4.0)
        assert parameters_for(6, config).speed == pytest.approx(8.0)

    def test_speed_increasing(self):
        speeds = [speed_multiplier(level) for level in range(1, 30)]
        assert all(b > a for a, b in zip(speeds, speeds[1:]))


class TestLevelValidation:
    """Levels start at 1."""

    @pytest.mark.parametrize("level", [0, -1])
    def test_rejects_levels_below_one(self, config, level):
        with pytest.raises(ValueError):
            parameters_for(level, config)
        with pytest.raises(ValueError):
            speed_multiplier(level)


class TestThemeIndex:
    """Themes cycle with the level."""

    def test_cycles(self):
        assert theme_index(1, 5) == 0
        assert theme_index(5, 5) == 4
        assert theme_index(6, 5) == 0
        assert theme_index(12, 5) == 1
