"""
Spawner
=======

Produces planets and bombs at the canvas edges with level-scaled parameters.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from planet_slicer.slicer_core.config_loader import GameConfig, get_config
from planet_slicer.slicer_core.level_curve import LevelParameters, parameters_for
from planet_slicer.slicer_core.planet_catalog import PlanetCatalog, get_catalog
from planet_slicer.slicer_core.sim_objects import (
    ALL_DIRECTIONS,
    Direction,
    ObjectKind,
    SimObject,
)


class Spawner:
    """
    Creates one new object per call to ``spawn``.

    Each object enters from the edge named by its direction and travels
    toward the opposite edge: a LEFT object appears past the left edge and
    moves right.

    Owns its own RNG so a seeded session spawns the same sequence.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog: PlanetCatalog = get_catalog(config)
        self._rng = random.Random(seed)
        self._next_id: int = 1

    @property
    def spawned_count(self) -> int:
        """Number of objects produced since the last reset."""
        return self._next_id - 1

    def entry_point(self, direction: Direction) -> Tuple[float, float]:
        """
        Draw a spawn position just outside the entry edge for a direction.

        Args:
            direction: Direction label of the new object.

        Returns:
            (x, y) position.
        """
        width = self._config.canvas.width
        height = self._config.canvas.height
        offset = self._config.canvas.spawn_offset

        if direction is Direction.LEFT:
            return -offset, self._rng.random() * height
        if direction is Direction.RIGHT:
            return width + offset, self._rng.random() * height
        if direction is Direction.UP:
            return self._rng.random() * width, -offset
        return self._rng.random() * width, height + offset

    @staticmethod
    def travel_velocity(direction: Direction, speed: float) -> Tuple[float, float]:
        """Velocity pointing from the entry edge toward the opposite edge."""
        if direction is Direction.LEFT:
            return speed, 0.0
        if direction is Direction.RIGHT:
            return -speed, 0.0
        if direction is Direction.UP:
            return 0.0, speed
        return 0.0, -speed

    def spawn(
        self,
        objects: List[SimObject],
        level: int,
        params: Optional[LevelParameters] = None
    ) -> SimObject:
        """
        Create one object and append it to the live object set.

        Args:
            objects: Live object set to append to.
            level: Current level.
            params: Parameters for the level. Computed from level if None.

        Returns:
            The new object.
        """
        if params is None:
            params = parameters_for(level, self._config)

        is_bomb = self._rng.random() < params.bomb_chance
        direction = self._rng.choice(ALL_DIRECTIONS)
        x, y = self.entry_point(direction)
        vx, vy = self.travel_velocity(direction, params.speed)

        if is_bomb:
            bomb = self._catalog.bomb
            kind = ObjectKind.BOMB
            color = bomb.base_color
            highlight = bomb.highlight_color
            atmosphere = bomb.highlight_color
            archetype_name = "bomb"
            has_rings = False
        else:
            archetype = self._catalog[self._rng.randrange(len(self._catalog))]
            kind = ObjectKind.PLANET
            color = archetype.base_color
            highlight = archetype.highlight_color
            atmosphere = archetype.atmosphere_color
            archetype_name = archetype.name
            has_rings = archetype.has_rings

        spawn_cfg = self._config.spawn
        obj = SimObject(
            id=self._next_id,
            kind=kind,
            required_direction=direction,
            x=x,
            y=y,
            vx=vx,
            vy=vy,
            radius=self._rng.uniform(spawn_cfg.radius_min, spawn_cfg.radius_max),
            rotation=self._rng.random() * 2.0 * math.pi,
            color=color,
            highlight_color=highlight,
            atmosphere_color=atmosphere,
            archetype=archetype_name,
            has_rings=has_rings,
        )
        self._next_id += 1

        objects.append(obj)
        return obj

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the RNG and id counter.

        Args:
            seed: New random seed. Keeps current RNG state if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._next_id = 1
