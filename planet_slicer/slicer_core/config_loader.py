"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Optional

import yaml


Color = Tuple[int, int, int]

VALID_DIRECTIONS = ("left", "right", "up", "down")


@dataclass(frozen=True)
class CanvasConfig:
    """Playfield geometry."""
    width: int
    height: int
    spawn_offset: float  # Distance outside the entry edge where objects appear
    cull_margin: float   # Distance outside any edge before an object is removed


@dataclass(frozen=True)
class CurveConfig:
    """Level difficulty curve constants."""
    base_speed: float
    base_spawn_interval_ms: float
    min_spawn_interval_ms: float
    bomb_chance_start: float
    bomb_chance_step: float
    bomb_chance_max: float


@dataclass(frozen=True)
class SpawnConfig:
    """Spawn-time object attributes."""
    radius_min: float
    radius_max: float


@dataclass(frozen=True)
class MotionConfig:
    """Per-frame kinematics."""
    live_spin: float
    sliced_spin: float
    sliced_drag: float
    sliced_gravity: float
    slice_speed_boost: float
    slice_spin_impulse: float


@dataclass(frozen=True)
class RulesConfig:
    """Scoring and lives."""
    points_per_slice: int
    points_per_level: int
    max_missed: int


@dataclass(frozen=True)
class TimingConfig:
    """Overlay windows (milliseconds)."""
    splash_ms: float
    level_up_ms: float


@dataclass(frozen=True)
class InputConfig:
    """Raw key name -> direction name bindings."""
    key_bindings: Tuple[Tuple[str, str], ...]

    def as_dict(self) -> Dict[str, str]:
        return dict(self.key_bindings)


@dataclass(frozen=True)
class PlanetConfig:
    """A single planet archetype."""
    name: str
    base_color: Color
    highlight_color: Color
    atmosphere_color: Color
    has_rings: bool = False


@dataclass(frozen=True)
class BombConfig:
    """Bomb appearance."""
    base_color: Color
    highlight_color: Color


@dataclass(frozen=True)
class ObservationConfig:
    """Observation array sizes."""
    max_objects: int


@dataclass(frozen=True)
class CapsConfig:
    """Agent episode limits."""
    frame_ms: float
    max_frames: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    canvas: CanvasConfig
    curve: CurveConfig
    spawn: SpawnConfig
    motion: MotionConfig
    rules: RulesConfig
    timing: TimingConfig
    input: InputConfig
    planets: Tuple[PlanetConfig, ...]
    bomb: BombConfig
    themes: Tuple[Tuple[Color, Color, Color], ...]
    observation: ObservationConfig
    caps: CapsConfig

    @property
    def num_planet_types(self) -> int:
        """Number of planet archetypes in the palette."""
        return len(self.planets)

    @property
    def num_themes(self) -> int:
        """Number of level themes."""
        return len(self.themes)


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_planet(planet_data: dict) -> PlanetConfig:
    """Parse a single planet archetype from YAML."""
    return PlanetConfig(
        name=str(planet_data["name"]),
        base_color=_parse_color(planet_data["base_color"]),
        highlight_color=_parse_color(planet_data["highlight_color"]),
        atmosphere_color=_parse_color(
            planet_data.get("atmosphere_color", planet_data["highlight_color"])
        ),
        has_rings=bool(planet_data.get("has_rings", False))
    )


def _parse_theme(theme_data: List) -> Tuple[Color, Color, Color]:
    """Parse a three-stop background theme."""
    if len(theme_data) != 3:
        raise ValueError(f"Theme must have 3 colors [top, middle, bottom], got {theme_data}")
    return (
        _parse_color(theme_data[0]),
        _parse_color(theme_data[1]),
        _parse_color(theme_data[2])
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.canvas.width <= 0 or config.canvas.height <= 0:
        raise ValueError(
            f"Canvas size must be positive, got {config.canvas.width}x{config.canvas.height}"
        )

    # Culling must happen beyond the spawn line or objects vanish on arrival
    if config.canvas.cull_margin <= config.canvas.spawn_offset:
        raise ValueError(
            f"cull_margin ({config.canvas.cull_margin}) must exceed "
            f"spawn_offset ({config.canvas.spawn_offset})"
        )

    if config.spawn.radius_min > config.spawn.radius_max:
        raise ValueError(
            f"radius_min ({config.spawn.radius_min}) exceeds "
            f"radius_max ({config.spawn.radius_max})"
        )

    curve = config.curve
    if not 0.0 <= curve.bomb_chance_start <= curve.bomb_chance_max <= 1.0:
        raise ValueError(
            f"Bomb chance must satisfy 0 <= start ({curve.bomb_chance_start}) "
            f"<= max ({curve.bomb_chance_max}) <= 1"
        )

    if curve.min_spawn_interval_ms <= 0:
        raise ValueError(f"min_spawn_interval_ms must be positive, got {curve.min_spawn_interval_ms}")

    if config.rules.points_per_level % config.rules.points_per_slice != 0:
        raise ValueError(
            f"points_per_level ({config.rules.points_per_level}) must be a multiple of "
            f"points_per_slice ({config.rules.points_per_slice})"
        )

    if config.rules.max_missed < 1:
        raise ValueError(f"max_missed must be at least 1, got {config.rules.max_missed}")

    if not config.planets:
        raise ValueError("At least one planet archetype is required")

    ringed = [p.name for p in config.planets if p.has_rings]
    if len(ringed) != 1:
        raise ValueError(f"Exactly one planet archetype must have rings, got {ringed}")

    if not config.themes:
        raise ValueError("At least one level theme is required")

    for key, direction in config.input.key_bindings:
        if direction not in VALID_DIRECTIONS:
            raise ValueError(f"Key '{key}' bound to unknown direction '{direction}'")

    if config.observation.max_objects < 1:
        raise ValueError(f"observation.max_objects must be positive, got {config.observation.max_objects}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    canvas_data = raw["canvas"]
    canvas = CanvasConfig(
        width=int(canvas_data["width"]),
        height=int(canvas_data["height"]),
        spawn_offset=float(canvas_data.get("spawn_offset", 50.0)),
        cull_margin=float(canvas_data.get("cull_margin", 100.0))
    )

    curve_data = raw["curve"]
    curve = CurveConfig(
        base_speed=float(curve_data["base_speed"]),
        base_spawn_interval_ms=float(curve_data.get("base_spawn_interval_ms", 1500)),
        min_spawn_interval_ms=float(curve_data["min_spawn_interval_ms"]),
        bomb_chance_start=float(curve_data["bomb_chance_start"]),
        bomb_chance_step=float(curve_data["bomb_chance_step"]),
        bomb_chance_max=float(curve_data["bomb_chance_max"])
    )

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        radius_min=float(spawn_data["radius_min"]),
        radius_max=float(spawn_data["radius_max"])
    )

    motion_data = raw["motion"]
    motion = MotionConfig(
        live_spin=float(motion_data["live_spin"]),
        sliced_spin=float(motion_data["sliced_spin"]),
        sliced_drag=float(motion_data["sliced_drag"]),
        sliced_gravity=float(motion_data["sliced_gravity"]),
        slice_speed_boost=float(motion_data["slice_speed_boost"]),
        slice_spin_impulse=float(motion_data["slice_spin_impulse"])
    )

    rules_data = raw["rules"]
    rules = RulesConfig(
        points_per_slice=int(rules_data["points_per_slice"]),
        points_per_level=int(rules_data["points_per_level"]),
        max_missed=int(rules_data["max_missed"])
    )

    timing_data = raw["timing"]
    timing = TimingConfig(
        splash_ms=float(timing_data["splash_ms"]),
        level_up_ms=float(timing_data["level_up_ms"])
    )

    bindings = raw.get("input", {}).get("key_bindings", {})
    input_config = InputConfig(
        key_bindings=tuple(
            (str(key).lower(), str(direction).lower())
            for key, direction in bindings.items()
        )
    )

    planets = tuple(_parse_planet(p) for p in raw["planets"])

    bomb_data = raw["bomb"]
    bomb = BombConfig(
        base_color=_parse_color(bomb_data["base_color"]),
        highlight_color=_parse_color(bomb_data["highlight_color"])
    )

    themes = tuple(_parse_theme(t) for t in raw["themes"])

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_objects=int(obs_data.get("max_objects", 64))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        frame_ms=float(caps_data.get("frame_ms", 1000.0 / 60.0)),
        max_frames=int(caps_data.get("max_frames", 36000))
    )

    config = GameConfig(
        canvas=canvas,
        curve=curve,
        spawn=spawn,
        motion=motion,
        rules=rules,
        timing=timing,
        input=input_config,
        planets=planets,
        bomb=bomb,
        themes=themes,
        observation=observation,
        caps=caps
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
