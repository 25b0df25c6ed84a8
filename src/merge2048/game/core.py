from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .engine import Direction, MergeEngine, MoveEvent
from .grid import Coordinate, Grid
from .rules import GameRules
from .spawner import Spawner


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    size: int = 4
    random_seed: Optional[int] = None


class GameSession:
    """One game: a grid, its score, and the spawn policy driving it.

    ``apply_move`` is the only mutating operation besides ``reset``. The
    events it returns describe the slide only; the tile spawned afterwards
    can be found via ``last_spawn`` or by reading the grid.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[GameRules] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or GameRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid: Grid
        self.engine: MergeEngine
        self.spawner: Spawner
        self.move_count = 0
        self.last_events: List[MoveEvent] = []
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid = Grid(self.config.size)
        self.engine = MergeEngine(self.grid)
        self.spawner = Spawner(self.grid, self.rules, self.rng)
        self.move_count = 0
        self.last_events = []
        for _ in range(self.rules.initial_tiles):
            self.spawner.spawn()
        logger.debug("new %dx%d game, seed=%s", self.config.size, self.config.size, seed)

    @property
    def score(self) -> int:
        return self.engine.score

    @property
    def max_tile(self) -> int:
        return self.grid.max_value()

    @property
    def last_spawn(self) -> Optional[Coordinate]:
        return self.spawner.last_spawn

    def apply_move(self, direction: Direction | int | str) -> Tuple[bool, List[MoveEvent]]:
        direction = Direction.parse(direction)
        changed, events = self.engine.slide(direction)
        self.last_events = events
        if not changed:
            return False, events
        self.move_count += 1
        self.spawner.spawn()
        if self.is_game_over():
            logger.debug("game over after %d moves, score %d", self.move_count, self.score)
        return True, events

    def is_game_over(self) -> bool:
        return not self.grid.has_any_legal_move()

    def is_won(self) -> bool:
        return self.grid.is_won(self.rules.win_threshold)

    def valid_directions(self) -> List[Direction]:
        return self.engine.valid_directions()

    def get_state(self) -> np.ndarray:
        return self.grid.values()
