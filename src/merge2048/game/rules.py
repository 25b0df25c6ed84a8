from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass
class GameRules:
    base_value: int = 2
    win_threshold: int = 2048
    double_probability: float = 0.1
    initial_tiles: int = 2

    def spawn_value(self, rng: random.Random) -> int:
        if rng.random() < self.double_probability:
            return self.base_value * 2
        return self.base_value
