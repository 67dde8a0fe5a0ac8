"""
Planet Catalog
==============

Provides convenient access to the planet archetype palette loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Optional

from planet_slicer.slicer_core.config_loader import (
    GameConfig,
    PlanetConfig,
    BombConfig,
    Color,
    get_config
)


@dataclass
class PlanetArchetype:
    """
    Runtime representation of a planet archetype.

    Wraps PlanetConfig with its palette index.
    """
    index: int
    config: PlanetConfig

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def base_color(self) -> Color:
        return self.config.base_color

    @property
    def highlight_color(self) -> Color:
        return self.config.highlight_color

    @property
    def atmosphere_color(self) -> Color:
        return self.config.atmosphere_color

    @property
    def has_rings(self) -> bool:
        return self.config.has_rings

    def __repr__(self) -> str:
        return f"PlanetArchetype({self.index}: {self.name})"


class PlanetCatalog:
    """
    The fixed palette of planet archetypes plus the bomb style.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._types: Tuple[PlanetArchetype, ...] = tuple(
            PlanetArchetype(i, planet_config)
            for i, planet_config in enumerate(config.planets)
        )

    def __len__(self) -> int:
        return len(self._types)

    def __getitem__(self, index: int) -> PlanetArchetype:
        if 0 <= index < len(self._types):
            return self._types[index]
        raise IndexError(f"Planet index {index} out of range [0, {len(self._types)})")

    def __iter__(self):
        return iter(self._types)

    @property
    def all_types(self) -> Tuple[PlanetArchetype, ...]:
        return self._types

    @property
    def ringed(self) -> PlanetArchetype:
        """The one archetype drawn with rings."""
        for archetype in self._types:
            if archetype.has_rings:
                return archetype
        raise LookupError("Palette has no ringed archetype")

    @property
    def bomb(self) -> BombConfig:
        """Bomb appearance."""
        return self._config.bomb

    def get_by_name(self, name: str) -> Optional[PlanetArchetype]:
        """Get archetype by name (case-insensitive)."""
        name_lower = name.lower()
        for archetype in self._types:
            if archetype.name.lower() == name_lower:
                return archetype
        return None


# Module-level singleton
_cached_catalog: Optional[PlanetCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> PlanetCatalog:
    """
    Get the planet catalog singleton.

    Args:
        config: Optional config to use. If None, uses cached or default config.

    Returns:
        PlanetCatalog instance.
    """
    global _cached_catalog
    if _cached_catalog is None or config is not None:
        _cached_catalog = PlanetCatalog(config)
    return _cached_catalog
