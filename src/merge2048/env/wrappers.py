from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If the chosen direction cannot move anything, pick a valid one instead.

    Keeps random or untrained agents from burning steps on blocked slides.
    Draws from the environment's ``np_random`` so seeded runs stay reproducible.
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.unwrapped.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        unwrapped = self.env.unwrapped
        if hasattr(unwrapped, "get_action_mask"):
            return unwrapped.get_action_mask()
        raise AttributeError("Underlying env does not provide get_action_mask")
