from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class InvalidBoardSize(ValueError):
    """Raised when a grid is built with a side length below 2."""


@dataclass
class Tile:
    value: int
    # produced by a merge during the current slide; not part of equality
    merged: bool = field(default=False, compare=False)


class Grid:
    """Square N x N board of optional tiles, stored row-major.

    Empty cells hold ``None``. Coordinates are ``(row, col)`` with row 0 at
    the top and col 0 at the left.
    """

    def __init__(self, side_length: int) -> None:
        if isinstance(side_length, bool) or not isinstance(side_length, int) or side_length < 2:
            raise InvalidBoardSize(f"side length must be an integer >= 2, got {side_length!r}")
        self.side_length = side_length
        self.cells: List[Optional[Tile]] = [None] * (side_length * side_length)

    @classmethod
    def from_values(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from nested values where 0 marks an empty cell."""
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise InvalidBoardSize("rows must form a square matrix")
        grid = cls(size)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value:
                    grid.set(r, c, Tile(int(value)))
        return grid

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.side_length and 0 <= col < self.side_length):
            raise IndexError(f"cell ({row}, {col}) outside {self.side_length}x{self.side_length} grid")
        return row * self.side_length + col

    def get(self, row: int, col: int) -> Optional[Tile]:
        return self.cells[self._index(row, col)]

    def set(self, row: int, col: int, tile: Optional[Tile]) -> None:
        self.cells[self._index(row, col)] = tile

    def reset(self) -> None:
        self.cells = [None] * (self.side_length * self.side_length)

    def copy(self) -> "Grid":
        return copy.deepcopy(self)

    def empty_cells(self) -> List[Coordinate]:
        size = self.side_length
        return [divmod(i, size) for i, cell in enumerate(self.cells) if cell is None]

    def occupied_count(self) -> int:
        return sum(1 for cell in self.cells if cell is not None)

    def clear_merge_flags(self) -> None:
        for tile in self.cells:
            if tile is not None:
                tile.merged = False

    def has_any_legal_move(self) -> bool:
        """True if a cell is empty or two orthogonal neighbours share a value."""
        if any(cell is None for cell in self.cells):
            return True
        size = self.side_length
        for row in range(size):
            for col in range(size):
                value = self.get(row, col).value
                if col + 1 < size and self.get(row, col + 1).value == value:
                    return True
                if row + 1 < size and self.get(row + 1, col).value == value:
                    return True
        return False

    def is_won(self, threshold: int) -> bool:
        return any(tile is not None and tile.value >= threshold for tile in self.cells)

    def max_value(self) -> int:
        return max((tile.value for tile in self.cells if tile is not None), default=0)

    def values(self) -> np.ndarray:
        state = np.zeros((self.side_length, self.side_length), dtype=np.int64)
        for i, tile in enumerate(self.cells):
            if tile is not None:
                state[divmod(i, self.side_length)] = tile.value
        return state

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.side_length == other.side_length and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Grid({self.values().tolist()!r})"
