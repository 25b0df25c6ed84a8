from __future__ import annotations

import logging
import random
from typing import Optional

from .grid import Coordinate, Grid, Tile
from .rules import GameRules


logger = logging.getLogger(__name__)


class Spawner:
    """Drops one new tile into a uniformly random empty cell."""

    def __init__(self, grid: Grid, rules: Optional[GameRules] = None, rng: Optional[random.Random] = None) -> None:
        self.grid = grid
        self.rules = rules or GameRules()
        self.rng = rng or random.Random()
        self.last_spawn: Optional[Coordinate] = None

    def spawn(self) -> bool:
        empties = self.grid.empty_cells()
        if not empties:
            self.last_spawn = None
            logger.debug("spawn skipped: grid is full")
            return False
        row, col = self.rng.choice(empties)
        self.grid.set(row, col, Tile(self.rules.spawn_value(self.rng)))
        self.last_spawn = (row, col)
        return True
