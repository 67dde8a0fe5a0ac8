"""
Slicer Core - The game engine.

This module provides the real-time simulation, the spawn scheduler, input
resolution and the game state machine, plus a Gymnasium environment wrapper.

Main exports:
- CoreGame: Session orchestrator (start/restart, tick, on_key/on_direction)
- SlicerEnv: Gymnasium environment for agent play
- parameters_for: Level -> difficulty parameters
- GameConfig: Configuration loaded from game_config.yaml
"""

from planet_slicer.slicer_core.config_loader import GameConfig, load_config
from planet_slicer.slicer_core.events import EventKind, GameEvent
from planet_slicer.slicer_core.game import CoreGame, FrameResult
from planet_slicer.slicer_core.game_state import Phase
from planet_slicer.slicer_core.level_curve import LevelParameters, parameters_for
from planet_slicer.slicer_core.planet_catalog import PlanetArchetype, PlanetCatalog
from planet_slicer.slicer_core.sim_objects import Direction, ObjectKind, SimObject
from planet_slicer.slicer_core.state_snapshot import GameSnapshot, ObjectView
from planet_slicer.slicer_core.env_gym import SlicerEnv

__all__ = [
    "GameConfig",
    "load_config",
    "EventKind",
    "GameEvent",
    "CoreGame",
    "FrameResult",
    "Phase",
    "LevelParameters",
    "parameters_for",
    "PlanetArchetype",
    "PlanetCatalog",
    "Direction",
    "ObjectKind",
    "SimObject",
    "GameSnapshot",
    "ObjectView",
    "SlicerEnv",
]
