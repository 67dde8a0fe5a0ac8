"""
State Snapshot
==============

Immutable per-frame view of the game for render consumers, and fixed-size
numpy packing for agent observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

import numpy as np

from planet_slicer.slicer_core.config_loader import Color
from planet_slicer.slicer_core.game_state import Phase
from planet_slicer.slicer_core.level_curve import LevelParameters
from planet_slicer.slicer_core.sim_objects import Direction, ObjectKind, SimObject


PHASE_CODES = {
    Phase.TITLE: 0,
    Phase.PLAYING: 1,
    Phase.GAME_OVER: 2,
}

KIND_CODES = {
    ObjectKind.PLANET: 0,
    ObjectKind.BOMB: 1,
}


@dataclass(frozen=True)
class ObjectView:
    """Frozen copy of one SimObject."""
    id: int
    kind: ObjectKind
    required_direction: Direction
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    rotation: float
    sliced: bool
    color: Color
    highlight_color: Color
    atmosphere_color: Color
    archetype: str
    has_rings: bool

    @classmethod
    def of(cls, obj: SimObject) -> "ObjectView":
        return cls(
            id=obj.id,
            kind=obj.kind,
            required_direction=obj.required_direction,
            x=obj.x,
            y=obj.y,
            vx=obj.vx,
            vy=obj.vy,
            radius=obj.radius,
            rotation=obj.rotation,
            sliced=obj.sliced,
            color=obj.color,
            highlight_color=obj.highlight_color,
            atmosphere_color=obj.atmosphere_color,
            archetype=obj.archetype,
            has_rings=obj.has_rings,
        )

    @property
    def label(self) -> str:
        """Key letter drawn on live objects."""
        return self.required_direction.key_letter


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete game state at one instant.

    Objects are in spawn order, which is also draw order.
    """
    objects: Tuple[ObjectView, ...]
    score: int
    level: int
    lives_lost: int
    max_missed: int
    phase: Phase
    leveling_up: bool
    splash_active: bool
    theme_index: int
    parameters: LevelParameters
    canvas_width: int
    canvas_height: int
    frame: int
    time_ms: float

    @property
    def objects_count(self) -> int:
        return len(self.objects)

    @property
    def live_objects(self) -> Tuple[ObjectView, ...]:
        return tuple(obj for obj in self.objects if not obj.sliced)

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def to_obs_dict(self, max_objects: int) -> Dict[str, np.ndarray]:
        """
        Pack into fixed-size arrays for Gymnasium observations.

        Objects beyond ``max_objects`` are dropped (oldest first kept).
        """
        obj_x = np.zeros(max_objects, dtype=np.float32)
        obj_y = np.zeros(max_objects, dtype=np.float32)
        obj_vx = np.zeros(max_objects, dtype=np.float32)
        obj_vy = np.zeros(max_objects, dtype=np.float32)
        obj_radius = np.zeros(max_objects, dtype=np.float32)
        obj_rotation = np.zeros(max_objects, dtype=np.float32)
        obj_direction = np.full(max_objects, -1, dtype=np.int8)
        obj_kind = np.full(max_objects, -1, dtype=np.int8)
        obj_sliced = np.zeros(max_objects, dtype=bool)
        obj_mask = np.zeros(max_objects, dtype=bool)

        for i, obj in enumerate(self.objects[:max_objects]):
            obj_x[i] = obj.x
            obj_y[i] = obj.y
            obj_vx[i] = obj.vx
            obj_vy[i] = obj.vy
            obj_radius[i] = obj.radius
            obj_rotation[i] = obj.rotation
            obj_direction[i] = obj.required_direction.index
            obj_kind[i] = KIND_CODES[obj.kind]
            obj_sliced[i] = obj.sliced
            obj_mask[i] = True

        return {
            # Core state
            "score": np.array(self.score, dtype=np.int64),
            "level": np.array(self.level, dtype=np.int32),
            "lives_lost": np.array(self.lives_lost, dtype=np.int32),
            "phase": np.array(PHASE_CODES[self.phase], dtype=np.int32),
            "leveling_up": np.array(int(self.leveling_up), dtype=np.int8),
            "objects_count": np.array(min(self.objects_count, max_objects), dtype=np.int32),

            # Level parameters
            "speed": np.array(self.parameters.speed, dtype=np.float32),
            "spawn_interval_ms": np.array(self.parameters.spawn_interval_ms, dtype=np.float32),
            "bomb_chance": np.array(self.parameters.bomb_chance, dtype=np.float32),

            # Object arrays
            "obj_x": obj_x,
            "obj_y": obj_y,
            "obj_vx": obj_vx,
            "obj_vy": obj_vy,
            "obj_radius": obj_radius,
            "obj_rotation": obj_rotation,
            "obj_direction": obj_direction,
            "obj_kind": obj_kind,
            "obj_sliced": obj_sliced,
            "obj_mask": obj_mask,
        }


def freeze_objects(objects: Iterable[SimObject]) -> Tuple[ObjectView, ...]:
    """Copy a live object set into frozen views."""
    return tuple(ObjectView.of(obj) for obj in objects)
