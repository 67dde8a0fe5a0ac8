"""
Simulation Step
===============

Owns the live object set and advances it one frame at a time: kinematics,
then culling of objects that left the playfield.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from planet_slicer.slicer_core.config_loader import GameConfig, get_config
from planet_slicer.slicer_core.sim_objects import SimObject


@dataclass
class StepOutcome:
    """Result of one simulation step."""
    missed: List[SimObject] = field(default_factory=list)   # Unsliced planets culled, in set order
    culled: List[SimObject] = field(default_factory=list)   # Everything culled, in set order

    @property
    def miss_count(self) -> int:
        return len(self.missed)


class ObjectField:
    """
    The live object set plus the per-frame update.

    Velocities are units per frame, so one ``step`` is one rendered frame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize an empty field.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._objects: List[SimObject] = []

        canvas = config.canvas
        margin = canvas.cull_margin
        self._min_x = -margin
        self._max_x = canvas.width + margin
        self._min_y = -margin
        self._max_y = canvas.height + margin

    @property
    def objects(self) -> List[SimObject]:
        """The live object set (shared reference, in spawn order)."""
        return self._objects

    @property
    def count(self) -> int:
        return len(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[SimObject]:
        return iter(self._objects)

    def live_objects(self) -> List[SimObject]:
        """Objects that can still be resolved by input."""
        return [obj for obj in self._objects if not obj.sliced]

    def get(self, object_id: int) -> Optional[SimObject]:
        for obj in self._objects:
            if obj.id == object_id:
                return obj
        return None

    def clear(self) -> None:
        """Remove all objects."""
        self._objects.clear()

    def advance(self, obj: SimObject) -> None:
        """Apply one frame of motion to a single object."""
        motion = self._config.motion
        obj.x += obj.vx
        obj.y += obj.vy
        if obj.sliced:
            obj.vx *= motion.sliced_drag
            obj.vy += motion.sliced_gravity
            obj.rotation += motion.sliced_spin
        else:
            obj.rotation += motion.live_spin

    def is_out_of_bounds(self, obj: SimObject) -> bool:
        """True if the object is past the cull margin on any side."""
        return (
            obj.x < self._min_x
            or obj.x > self._max_x
            or obj.y < self._min_y
            or obj.y > self._max_y
        )

    def step(self) -> StepOutcome:
        """
        Advance every object by one frame, then cull.

        Culled planets that were never sliced are reported as missed.
        Sliced objects and bombs leave silently.

        Returns:
            StepOutcome listing missed and culled objects.
        """
        for obj in self._objects:
            self.advance(obj)

        outcome = StepOutcome()
        kept: List[SimObject] = []
        for obj in self._objects:
            if self.is_out_of_bounds(obj):
                outcome.culled.append(obj)
                if obj.is_planet and not obj.sliced:
                    outcome.missed.append(obj)
            else:
                kept.append(obj)

        # In place, so holders of the list reference see the culled set
        self._objects[:] = kept
        return outcome
