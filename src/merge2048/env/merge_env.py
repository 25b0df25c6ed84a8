from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from merge2048.game import Direction, GameConfig, GameRules, GameSession


def _max_tile_value(size: int) -> int:
    # Every cell merged into one tile: 2 ** (cells + 1), clipped to int64
    return min(2 ** (size * size + 1), int(np.iinfo(np.int64).max))


def _compute_action_mask(session: GameSession) -> np.ndarray:
    mask = np.zeros((len(Direction),), dtype=np.bool_)
    for direction in session.valid_directions():
        mask[int(direction)] = True
    return mask


def _rgb_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return (205, 193, 180)
    # Fade from cream to orange with the tile exponent
    t = min(np.log2(v) / 11.0, 1.0)
    return (int(238 + (246 - 238) * t), int(228 - (228 - 94) * t), int(218 - (218 - 59) * t))


class Merge2048Env(gym.Env):
    """Gymnasium environment around a single :class:`GameSession`.

    Actions are :class:`Direction` values (0=up, 1=down, 2=left, 3=right).
    The observation is the raw N x N grid of tile values, 0 for empty.
    Reward is the score gained by the move; a move that changes nothing
    earns ``invalid_action_penalty`` and leaves the board untouched.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, size: int = 4, render_mode: Optional[str] = None, rules: Optional[GameRules] = None,
                 invalid_action_penalty: float = -1.0,
                 max_steps: int = 10000) -> None:
        super().__init__()
        self.session = GameSession(GameConfig(size=size), rules)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.max_steps = int(max_steps)

        self.observation_space = spaces.Box(low=0, high=_max_tile_value(size), shape=(size, size),
                                            dtype=np.int64)
        self.action_space = spaces.Discrete(len(Direction))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.session.get_state().astype(np.int64)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "max_tile": self.session.max_tile,
            "steps": self._steps,
            "action_mask": _compute_action_mask(self.session),
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.session)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        direction = Direction(int(action))
        score_before = self.session.score
        moved, events = self.session.apply_move(direction)
        self._steps += 1

        reward = float(self.session.score - score_before) if moved else self.invalid_action_penalty
        terminated = self.session.is_game_over()
        truncated = self._steps >= self.max_steps

        info = self._get_info()
        info["moved"] = moved
        info["events"] = events
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.session.get_state()
            cell = 16
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = _rgb_for_value(int(grid[y, x]))
            return img
        # human rendering delegated to the pygame front end; noop
        return None

    def close(self) -> None:
        pass
