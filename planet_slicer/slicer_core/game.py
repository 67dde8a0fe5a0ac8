"""
Core Game
=========

Session orchestrator combining spawning, simulation, input resolution,
scoring and the game state machine on one host-driven clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from planet_slicer.slicer_core.config_loader import GameConfig, get_config
from planet_slicer.slicer_core.events import EventBus, GameEvent
from planet_slicer.slicer_core.game_state import GameStateMachine, Phase
from planet_slicer.slicer_core.input_resolver import InputResolver, ResolveResult
from planet_slicer.slicer_core.level_curve import LevelParameters, parameters_for, theme_index
from planet_slicer.slicer_core.scheduler import FrameLoop, TimerScheduler
from planet_slicer.slicer_core.sim_objects import Direction, SimObject
from planet_slicer.slicer_core.simulation import ObjectField
from planet_slicer.slicer_core.spawner import Spawner
from planet_slicer.slicer_core.state_snapshot import GameSnapshot, freeze_objects


SPAWN_TIMER = "spawn"


@dataclass
class FrameResult:
    """Result of a single host tick."""
    snapshot: GameSnapshot
    stepped: bool          # False when no frame was requested (title, game over)
    spawned: int
    missed: int
    culled: int
    delta_score: int
    game_over: bool
    termination_reason: str


class CoreGame:
    """
    Main game session.

    Owns:
    - Timer scheduler and frame loop
    - Live object set (via ObjectField)
    - Spawner
    - Input resolver
    - Game state machine (score, level, lives, phase)

    The host calls ``tick(now_ms)`` once per displayed frame and forwards
    key presses to ``on_key`` / ``on_direction`` between ticks. Input is
    therefore always resolved before the next frame's culling pass.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        now_ms: float = 0.0
    ):
        """
        Initialize a session on the title screen.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for the spawner.
            now_ms: Initial clock reading.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed

        # Initialize subsystems
        self._scheduler = TimerScheduler(now_ms)
        self._frame_loop = FrameLoop()
        self._events = EventBus()
        self._state = GameStateMachine(self._scheduler, self._events, config)
        self._field = ObjectField(config)
        self._spawner = Spawner(config, seed)
        self._resolver = InputResolver(config)

        self._spawned_this_tick: int = 0

        self._state.add_phase_listener(self._on_phase_change)
        self._state.add_level_listener(self._on_level_change)
        self._state.show_splash()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def lives_lost(self) -> int:
        return self._state.lives_lost

    @property
    def leveling_up(self) -> bool:
        return self._state.leveling_up

    @property
    def splash_active(self) -> bool:
        return self._state.splash_active

    @property
    def is_over(self) -> bool:
        return self._state.is_over

    @property
    def termination_reason(self) -> str:
        return self._state.termination_reason

    @property
    def objects(self) -> List[SimObject]:
        """The live object set (shared reference)."""
        return self._field.objects

    @property
    def field(self) -> ObjectField:
        return self._field

    @property
    def state(self) -> GameStateMachine:
        return self._state

    @property
    def scheduler(self) -> TimerScheduler:
        return self._scheduler

    @property
    def now_ms(self) -> float:
        return self._scheduler.now_ms

    @property
    def frame_count(self) -> int:
        """Frames simulated since the last reset."""
        return self._frame_loop.frames

    @property
    def frame_pending(self) -> bool:
        """True while the frame loop is subscribed."""
        return self._frame_loop.active

    @property
    def spawn_timer_active(self) -> bool:
        return self._scheduler.pending(SPAWN_TIMER)

    @property
    def parameters(self) -> LevelParameters:
        """Difficulty parameters for the current level."""
        return parameters_for(self._state.level, self._config)

    def subscribe(self, listener: Callable[[GameEvent], None]) -> Callable[[], None]:
        """
        Register an event listener (audio and similar consumers).

        Returns:
            A callable that unsubscribes the listener.
        """
        return self._events.subscribe(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _on_phase_change(self, phase: Phase) -> None:
        if phase is Phase.PLAYING:
            self._field.clear()
            self._frame_loop.request_next()
        else:
            self._scheduler.cancel(SPAWN_TIMER)
            self._frame_loop.cancel()

    def _on_level_change(self, level: int) -> None:
        # The interval is a timer property, so a new level means a new timer
        if not self._state.is_playing:
            return
        interval = parameters_for(level, self._config).spawn_interval_ms
        self._scheduler.schedule_interval(SPAWN_TIMER, interval, self.spawn)

    def _sync_clock(self, now_ms: Optional[float]) -> None:
        if now_ms is not None:
            self._scheduler.advance(now_ms)

    def start(self, now_ms: Optional[float] = None) -> bool:
        """
        Leave the title screen and begin play.

        Args:
            now_ms: Clock reading at the start action. Keeps the current
                reading if None.

        Returns:
            True if play began.
        """
        self._sync_clock(now_ms)
        return self._state.start()

    def restart(self, now_ms: Optional[float] = None) -> bool:
        """
        Start a new game after game over.

        Returns:
            True if the game restarted.
        """
        self._sync_clock(now_ms)
        return self._state.restart()

    def reset(self, seed: Optional[int] = None, now_ms: float = 0.0) -> GameSnapshot:
        """
        Reset the whole session back to the title screen.

        Args:
            seed: New random seed. Uses previous if None.
            now_ms: Clock reading after reset.

        Returns:
            Initial snapshot.
        """
        if seed is not None:
            self._seed = seed

        self._scheduler.reset(now_ms)
        self._frame_loop.reset()
        self._field.clear()
        self._spawner.reset(self._seed)
        self._state.reset()
        self._spawned_this_tick = 0

        return self.snapshot()

    # ------------------------------------------------------------------
    # Frame and input
    # ------------------------------------------------------------------

    def spawn(self) -> Optional[SimObject]:
        """
        Spawn one object with the current level's parameters.

        Returns:
            The new object, or None outside the playing phase.
        """
        if not self._state.is_playing:
            return None
        self._spawned_this_tick += 1
        return self._spawner.spawn(self._field.objects, self._state.level, self.parameters)

    def tick(self, now_ms: Optional[float] = None) -> FrameResult:
        """
        Run one host frame: fire due timers, then advance the simulation.

        Args:
            now_ms: Clock reading for this frame. Defaults to one configured
                frame length after the current reading.

        Returns:
            FrameResult describing the frame.
        """
        if now_ms is None:
            now_ms = self._scheduler.now_ms + self._config.caps.frame_ms

        score_before = self._state.score
        self._spawned_this_tick = 0

        # Spawns and overlay expiries
        self._scheduler.advance(now_ms)

        if not self._frame_loop.consume():
            return self._frame_result(stepped=False, missed=0, culled=0, score_before=score_before)

        outcome = self._field.step()
        for obj in outcome.missed:
            self._state.record_miss(obj.id)

        if self._state.is_playing:
            self._frame_loop.request_next()

        return self._frame_result(
            stepped=True,
            missed=outcome.miss_count,
            culled=len(outcome.culled),
            score_before=score_before
        )

    def _frame_result(self, stepped: bool, missed: int, culled: int, score_before: int) -> FrameResult:
        return FrameResult(
            snapshot=self.snapshot(),
            stepped=stepped,
            spawned=self._spawned_this_tick,
            missed=missed,
            culled=culled,
            delta_score=self._state.score - score_before,
            game_over=self._state.is_over,
            termination_reason=self._state.termination_reason
        )

    def on_direction(self, direction: Union[Direction, str]) -> ResolveResult:
        """
        Handle a direction key-press.

        Every live object with the pressed label resolves: planets score,
        a bomb ends the game. Ignored outside the playing phase.

        Args:
            direction: Direction or direction name.

        Returns:
            ResolveResult listing the matched objects.

        Raises:
            ValueError: If ``direction`` is not a direction name.
        """
        direction = Direction.parse(direction)
        if not self._state.is_playing:
            return ResolveResult(direction=direction)

        result = self._resolver.resolve(self._field.objects, direction)
        for obj in result.matches:
            if obj.is_bomb:
                self._state.bomb_hit(obj.id)
            else:
                self._state.award_slice(obj.id)
        return result

    def on_key(self, key_name: str) -> Optional[ResolveResult]:
        """
        Handle a raw key-press by name.

        Returns:
            ResolveResult, or None if the key is not bound to a direction.
        """
        direction = self._resolver.direction_for_key(key_name)
        if direction is None:
            return None
        return self.on_direction(direction)

    # ------------------------------------------------------------------
    # Consumers
    # ------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Immutable view of the current state."""
        return GameSnapshot(
            objects=freeze_objects(self._field.objects),
            score=self._state.score,
            level=self._state.level,
            lives_lost=self._state.lives_lost,
            max_missed=self._config.rules.max_missed,
            phase=self._state.phase,
            leveling_up=self._state.leveling_up,
            splash_active=self._state.splash_active,
            theme_index=theme_index(self._state.level, self._config.num_themes),
            parameters=self.parameters,
            canvas_width=self._config.canvas.width,
            canvas_height=self._config.canvas.height,
            frame=self._frame_loop.frames,
            time_ms=self._scheduler.now_ms
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._state.score,
            "level": self._state.level,
            "lives_lost": self._state.lives_lost,
            "slices": self._state.slices,
            "phase": self._state.phase.value,
            "objects_count": self._field.count,
            "frame": self._frame_loop.frames,
            "terminated_reason": self._state.termination_reason,
        }
