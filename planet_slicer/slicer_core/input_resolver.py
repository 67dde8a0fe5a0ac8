"""
Input Resolver
==============

Maps a direction key-press to every live object carrying that label.
Planets get sliced; a bomb among the matches ends the game.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from planet_slicer.slicer_core.config_loader import GameConfig, get_config
from planet_slicer.slicer_core.sim_objects import Direction, SimObject


@dataclass
class ResolveResult:
    """Outcome of one direction event."""
    direction: Optional[Direction]
    matches: List[SimObject] = field(default_factory=list)  # Planets and bombs, in set order

    @property
    def sliced(self) -> List[SimObject]:
        """Planets sliced by this event."""
        return [obj for obj in self.matches if obj.is_planet]

    @property
    def bombs(self) -> List[SimObject]:
        """Bombs hit by this event."""
        return [obj for obj in self.matches if obj.is_bomb]

    @property
    def bomb_hit(self) -> bool:
        return any(obj.is_bomb for obj in self.matches)

    @property
    def is_noop(self) -> bool:
        return not self.matches


class InputResolver:
    """
    Resolves direction events against the live object set.

    All live objects matching the direction resolve on a single press.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize resolver.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._key_bindings: Dict[str, Direction] = {
            key: Direction(direction)
            for key, direction in config.input.key_bindings
        }

    @property
    def key_bindings(self) -> Dict[str, Direction]:
        return dict(self._key_bindings)

    def direction_for_key(self, key_name: str) -> Optional[Direction]:
        """
        Look up the direction bound to a raw key name.

        Args:
            key_name: Key name such as "a" or "left" (case-insensitive).

        Returns:
            The bound Direction, or None for unbound keys.
        """
        if not key_name:
            return None
        return self._key_bindings.get(key_name.lower())

    def slice(self, obj: SimObject) -> None:
        """Put a planet on its sliced spin-out trajectory."""
        motion = self._config.motion
        obj.sliced = True
        obj.vx *= motion.slice_speed_boost
        obj.vy *= motion.slice_speed_boost
        obj.rotation += motion.slice_spin_impulse

    def resolve(self, objects: List[SimObject], direction: Direction) -> ResolveResult:
        """
        Resolve a direction press against the object set.

        Matching planets are sliced in place. Matching bombs are reported but
        left untouched.

        Args:
            objects: Live object set.
            direction: Pressed direction.

        Returns:
            ResolveResult with every match in set order.
        """
        result = ResolveResult(direction=direction)
        for obj in objects:
            if obj.sliced or obj.required_direction is not direction:
                continue
            if obj.is_planet:
                self.slice(obj)
            result.matches.append(obj)
        return result
