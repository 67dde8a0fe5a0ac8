"""
Game State Machine
==================

Owns score, level, lives and phase, and drives the
title -> playing -> game over -> restart transitions.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional

from planet_slicer.slicer_core.config_loader import GameConfig, get_config
from planet_slicer.slicer_core.events import EventBus, EventKind, GameEvent
from planet_slicer.slicer_core.rules import (
    REASON_BOMB_HIT,
    TerminationResult,
    TerminationRules,
)
from planet_slicer.slicer_core.scheduler import TimerScheduler
from planet_slicer.slicer_core.scoring import ScoreEvent, ScoreTracker


class Phase(Enum):
    TITLE = "title"
    PLAYING = "playing"
    GAME_OVER = "game_over"


SPLASH_TIMER = "splash"
LEVEL_UP_TIMER = "level_up"


class GameStateMachine:
    """
    Coarse game state plus the two overlay flags.

    Level-up and the title splash are timed flags rather than phases: the
    simulation keeps running under both. Game over is immediate and
    idempotent; only ``restart`` leaves it.
    """

    def __init__(
        self,
        scheduler: TimerScheduler,
        events: Optional[EventBus] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize in the title phase.

        Args:
            scheduler: Clock and timers for the overlay windows.
            events: Bus to publish events on. A private bus if None.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scheduler = scheduler
        self._events = events if events is not None else EventBus()
        self._scorer = ScoreTracker(config)
        self._rules = TerminationRules(config)

        self._phase = Phase.TITLE
        self._leveling_up = False
        self._splash_active = False
        self._termination_reason = ""

        self._level_listeners: List[Callable[[int], None]] = []
        self._phase_listeners: List[Callable[[Phase], None]] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def score(self) -> int:
        return self._scorer.score

    @property
    def level(self) -> int:
        return self._scorer.level

    @property
    def lives_lost(self) -> int:
        return self._rules.lives_lost

    @property
    def lives_remaining(self) -> int:
        return self._rules.lives_remaining

    @property
    def slices(self) -> int:
        return self._scorer.slices

    @property
    def leveling_up(self) -> bool:
        """True during the level-up window."""
        return self._leveling_up

    @property
    def splash_active(self) -> bool:
        """True during the title splash window."""
        return self._splash_active

    @property
    def is_playing(self) -> bool:
        return self._phase is Phase.PLAYING

    @property
    def is_over(self) -> bool:
        return self._phase is Phase.GAME_OVER

    @property
    def termination_reason(self) -> str:
        """Reason for game over, or empty string."""
        return self._termination_reason

    @property
    def events(self) -> EventBus:
        return self._events

    def add_level_listener(self, listener: Callable[[int], None]) -> None:
        """Call ``listener(level)`` whenever the level is set, including resets to 1."""
        self._level_listeners.append(listener)

    def add_phase_listener(self, listener: Callable[[Phase], None]) -> None:
        """Call ``listener(phase)`` on every phase change."""
        self._phase_listeners.append(listener)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _emit(self, kind: EventKind, object_id: Optional[int] = None, reason: str = "") -> None:
        self._events.emit(GameEvent(
            kind=kind,
            score=self._scorer.score,
            level=self._scorer.level,
            lives_lost=self._rules.lives_lost,
            object_id=object_id,
            reason=reason
        ))

    def _set_phase(self, phase: Phase) -> None:
        self._phase = phase
        for listener in list(self._phase_listeners):
            listener(phase)

    def _notify_level(self) -> None:
        level = self._scorer.level
        for listener in list(self._level_listeners):
            listener(level)

    def _end_splash(self) -> None:
        self._splash_active = False

    def _end_level_up(self) -> None:
        self._leveling_up = False

    def show_splash(self) -> None:
        """Raise the title splash for its fixed window."""
        self._splash_active = True
        self._scheduler.schedule_once(SPLASH_TIMER, self._config.timing.splash_ms, self._end_splash)

    def _begin_play(self) -> None:
        self._set_phase(Phase.PLAYING)
        self.show_splash()
        self._emit(EventKind.GAME_START)
        self._notify_level()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Title -> Playing.

        Returns:
            True if the game started, False if not in the title phase.
        """
        if self._phase is not Phase.TITLE:
            return False
        self._begin_play()
        return True

    def restart(self) -> bool:
        """
        GameOver -> Playing with score, level and lives reset.

        Returns:
            True if the game restarted, False if the game is not over.
        """
        if self._phase is not Phase.GAME_OVER:
            return False
        self._clear_progress()
        self._begin_play()
        return True

    def _clear_progress(self) -> None:
        self._scorer.reset()
        self._rules.reset()
        self._termination_reason = ""
        self._leveling_up = False
        self._scheduler.cancel(LEVEL_UP_TIMER)

    def award_slice(self, object_id: Optional[int] = None) -> ScoreEvent:
        """
        Add the slice reward and level up on each threshold.

        Returns:
            The ScoreEvent for this slice.
        """
        event = self._scorer.apply_slice()
        self._emit(EventKind.PLANET_SLICED, object_id=object_id)
        if event.reached_threshold and self._phase is Phase.PLAYING:
            self._level_up()
        return event

    def _level_up(self) -> None:
        self._scorer.advance_level()
        self._leveling_up = True
        # A second level-up inside the window restarts it
        self._scheduler.schedule_once(LEVEL_UP_TIMER, self._config.timing.level_up_ms, self._end_level_up)
        self._emit(EventKind.LEVEL_UP)
        self._notify_level()

    def record_miss(self, object_id: Optional[int] = None) -> TerminationResult:
        """
        Count a missed planet. Ends the game when the limit is reached.

        Misses outside the playing phase are ignored.
        """
        if self._phase is not Phase.PLAYING:
            return TerminationResult.none()
        result = self._rules.record_miss()
        self._emit(EventKind.PLANET_MISSED, object_id=object_id)
        if result.terminated:
            self._emit(EventKind.PLANET_MISSED_THRESHOLD, object_id=object_id, reason=result.reason)
            self.trigger_game_over(result.reason)
        return result

    def bomb_hit(self, object_id: Optional[int] = None) -> bool:
        """
        A bomb was sliced. Ends the game.

        Returns:
            True if this call ended the game.
        """
        if self._phase is not Phase.PLAYING:
            return False
        self._emit(EventKind.BOMB_HIT, object_id=object_id, reason=REASON_BOMB_HIT)
        return self.trigger_game_over(REASON_BOMB_HIT)

    def trigger_game_over(self, reason: str) -> bool:
        """
        Playing -> GameOver. Repeated calls are no-ops.

        Returns:
            True if this call ended the game.
        """
        if self._phase is not Phase.PLAYING:
            return False
        self._termination_reason = reason
        self._set_phase(Phase.GAME_OVER)
        self._emit(EventKind.GAME_OVER, reason=reason)
        return True

    def reset(self) -> None:
        """Back to a fresh title screen."""
        self._clear_progress()
        self._scheduler.cancel(SPLASH_TIMER)
        self._phase = Phase.TITLE
        self.show_splash()
