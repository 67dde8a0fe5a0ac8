"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to Planet Slicer for agents.
One step is one frame; the action is the key pressed before that frame.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from planet_slicer.slicer_core.config_loader import GameConfig, load_config
from planet_slicer.slicer_core.game import CoreGame
from planet_slicer.slicer_core.sim_objects import ALL_DIRECTIONS
from planet_slicer.slicer_core.state_snapshot import GameSnapshot


# Action 0 presses nothing; 1..4 press the direction at ALL_DIRECTIONS[action - 1]
NUM_ACTIONS = 1 + len(ALL_DIRECTIONS)


class SlicerEnv(gym.Env):
    """
    Planet Slicer as a Gymnasium environment.

    Action Space:
        Discrete(5): 0 = no key, 1 = left, 2 = right, 3 = up, 4 = down.

    Observation Space:
        Dict of scalars and fixed-size per-object arrays (see
        GameSnapshot.to_obs_dict).

    Reward:
        Score gained this step.

    Episode:
        Starts in play (the title screen is skipped). Terminates on game
        over, truncates after ``caps.max_frames`` frames.
    """

    metadata = {
        "render_modes": [],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[GameConfig] = None,
        max_frames: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            config: Already-loaded configuration; takes precedence over config_path.
            max_frames: Override episode truncation length.
            debug: If True, prints verbose debug output.
        """
        super().__init__()

        self._config = config if config is not None else load_config(config_path)
        self._debug = debug
        self._frame_ms = self._config.caps.frame_ms
        self._max_frames = max_frames or self._config.caps.max_frames
        self._max_objects = self._config.observation.max_objects

        self._game = CoreGame(config=self._config)
        self._frames = 0

        self.action_space = spaces.Discrete(NUM_ACTIONS)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] SlicerEnv initialized")
            print(f"[DEBUG]   Canvas: {self._config.canvas.width}x{self._config.canvas.height}")
            print(f"[DEBUG]   Frame: {self._frame_ms:.2f} ms, max frames: {self._max_frames}")
            print(f"[DEBUG]   Max objects: {self._max_objects}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_obj = self._max_objects
        max_missed = self._config.rules.max_missed

        return spaces.Dict({
            # Core state
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "lives_lost": spaces.Box(low=0, high=max_missed, shape=(), dtype=np.int32),
            "phase": spaces.Box(low=0, high=2, shape=(), dtype=np.int32),
            "leveling_up": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "objects_count": spaces.Box(low=0, high=max_obj, shape=(), dtype=np.int32),

            # Level parameters
            "speed": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "spawn_interval_ms": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "bomb_chance": spaces.Box(low=0, high=1, shape=(), dtype=np.float32),

            # Object arrays
            "obj_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_vx": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_vy": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_radius": spaces.Box(low=0, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_rotation": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_direction": spaces.Box(low=-1, high=len(ALL_DIRECTIONS) - 1, shape=(max_obj,), dtype=np.int8),
            "obj_kind": spaces.Box(low=-1, high=1, shape=(max_obj,), dtype=np.int8),
            "obj_sliced": spaces.MultiBinary(max_obj),
            "obj_mask": spaces.MultiBinary(max_obj),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment and start a game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset(seed=seed, now_ms=0.0)
        self._game.start()
        self._frames = 0

        obs = self._snapshot_to_obs(self._game.snapshot())
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Press the chosen key (if any), then advance one frame.

        Args:
            action: Integer in [0, 4].

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = action.item()
        action = int(action)
        if not 0 <= action < NUM_ACTIONS:
            raise ValueError(f"Action must be in [0, {NUM_ACTIONS}), got {action}")

        score_before = self._game.score

        matches = 0
        if action > 0:
            result = self._game.on_direction(ALL_DIRECTIONS[action - 1])
            matches = len(result.matches)

        frame = self._game.tick(self._game.now_ms + self._frame_ms)
        self._frames += 1

        delta_score = self._game.score - score_before
        terminated = self._game.is_over
        truncated = not terminated and self._frames >= self._max_frames

        obs = self._snapshot_to_obs(frame.snapshot)
        reward = float(delta_score)

        info = self._game.get_info()
        info["delta_score"] = delta_score
        info["matches"] = matches
        info["spawned"] = frame.spawned
        info["missed"] = frame.missed

        if self._debug:
            print(f"[DEBUG] Step: action={action}, delta_score={delta_score}, "
                  f"objects={int(obs['objects_count'])}, lives_lost={self._game.lives_lost}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {info.get('terminated_reason', 'unknown')}")

        return obs, reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        return snapshot.to_obs_dict(self._max_objects)

    def close(self) -> None:
        """Nothing to release; kept for the Gymnasium API."""

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
