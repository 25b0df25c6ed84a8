"""Game module for merge2048.

Exports the board state machine:
- Grid / Tile: square board of optional tiles
- MergeEngine: directional compaction and merge, with move events
- Spawner: weighted random tile insertion
- GameRules: win threshold and spawn policy
- GameSession: orchestrates a single game
"""

from .grid import Grid, Tile, InvalidBoardSize
from .rules import GameRules
from .engine import Direction, MoveEvent, MergeEngine, merge_line
from .spawner import Spawner
from .core import GameConfig, GameSession

__all__ = [
    "Grid",
    "Tile",
    "InvalidBoardSize",
    "GameRules",
    "Direction",
    "MoveEvent",
    "MergeEngine",
    "merge_line",
    "Spawner",
    "GameConfig",
    "GameSession",
]
