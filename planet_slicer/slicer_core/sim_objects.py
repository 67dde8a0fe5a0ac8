"""
Simulation Objects
==================

Planets and bombs travelling across the canvas, plus the direction labels
that resolve them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from planet_slicer.slicer_core.config_loader import Color


class Direction(Enum):
    """Direction label shown on an object; the key that resolves it."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def key_letter(self) -> str:
        """Letter drawn on the object (WASD layout)."""
        return _KEY_LETTERS[self]

    @property
    def index(self) -> int:
        """Stable integer code for observation arrays."""
        return _DIRECTION_ORDER.index(self)

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        """
        Convert a direction name to a Direction.

        Raises:
            ValueError: If the name is not a known direction.
        """
        if isinstance(value, Direction):
            return value
        return cls(str(value).lower())


_DIRECTION_ORDER: Tuple[Direction, ...] = (
    Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN
)

_KEY_LETTERS = {
    Direction.LEFT: "A",
    Direction.RIGHT: "D",
    Direction.UP: "W",
    Direction.DOWN: "S",
}

ALL_DIRECTIONS = _DIRECTION_ORDER


class ObjectKind(Enum):
    """Object variant."""
    PLANET = "planet"
    BOMB = "bomb"


@dataclass
class SimObject:
    """
    A spawned planet or bomb.

    Position and velocity are in canvas units (per frame for velocity).
    ``required_direction`` never changes after spawn.
    """
    id: int
    kind: ObjectKind
    required_direction: Direction
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    rotation: float
    color: Color
    highlight_color: Color
    atmosphere_color: Color
    archetype: str = ""
    has_rings: bool = False
    sliced: bool = False

    def __setattr__(self, name, value):
        if name == "required_direction" and "required_direction" in self.__dict__:
            raise AttributeError("required_direction is fixed at spawn")
        super().__setattr__(name, value)

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> Tuple[float, float]:
        return self.vx, self.vy

    @property
    def is_bomb(self) -> bool:
        return self.kind is ObjectKind.BOMB

    @property
    def is_planet(self) -> bool:
        return self.kind is ObjectKind.PLANET

    @property
    def is_live(self) -> bool:
        """True if the object can still be resolved by input."""
        return not self.sliced

    def __repr__(self) -> str:
        state = "sliced" if self.sliced else "live"
        return (
            f"SimObject({self.id}: {self.kind.value} {self.required_direction.value} "
            f"@({self.x:.1f}, {self.y:.1f}) {state})"
        )
