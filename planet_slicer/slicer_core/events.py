"""
Game Events
===========

Discrete notifications for fire-and-forget consumers such as audio.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional


class EventKind(Enum):
    GAME_START = "game_start"
    LEVEL_UP = "level_up"
    BOMB_HIT = "bomb_hit"
    PLANET_MISSED_THRESHOLD = "planet_missed_threshold"
    GAME_OVER = "game_over"
    PLANET_SLICED = "planet_sliced"
    PLANET_MISSED = "planet_missed"


@dataclass(frozen=True)
class GameEvent:
    """A single notification with the state it was raised in."""
    kind: EventKind
    score: int
    level: int
    lives_lost: int
    object_id: Optional[int] = None
    reason: str = ""


Listener = Callable[[GameEvent], None]


class EventBus:
    """
    Synchronous publish/subscribe.

    Listeners are called in subscription order as soon as an event is
    emitted. They must return quickly and must not call back into the game.
    """

    def __init__(self):
        self._listeners: List[Listener] = []
        self._emitted: int = 0

    @property
    def emitted(self) -> int:
        """Total events emitted."""
        return self._emitted

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that unsubscribes the listener.
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: GameEvent) -> None:
        self._emitted += 1
        for listener in list(self._listeners):
            listener(event)
