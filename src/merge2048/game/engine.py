from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

from .grid import Coordinate, Grid, Tile


logger = logging.getLogger(__name__)


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @classmethod
    def parse(cls, value: "Direction | int | str") -> "Direction":
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown direction: {value!r}") from None
        return cls(value)


@dataclass(frozen=True)
class MoveEvent:
    """One input tile's trip during a slide, for replay as animation."""

    source_row: int
    source_col: int
    dest_row: int
    dest_col: int
    value: int
    merged_into: Optional[int] = None

    @property
    def source(self) -> Coordinate:
        return self.source_row, self.source_col

    @property
    def dest(self) -> Coordinate:
        return self.dest_row, self.dest_col

    @property
    def moved(self) -> bool:
        return self.source != self.dest


@dataclass
class MergedTile:
    value: int
    sources: List[Tuple[Coordinate, int]]

    @property
    def merged(self) -> bool:
        return len(self.sources) > 1


@dataclass
class LineMerge:
    tiles: List[MergedTile] = field(default_factory=list)
    score: int = 0


def merge_line(cells: Sequence[Tuple[Coordinate, int]]) -> LineMerge:
    """Coalesce adjacent equal values of one line, already in scan order.

    Single pass: a tile produced by a merge is appended to the output and
    never compared again, so ``[v, v, v]`` yields ``[2v, v]``.
    """
    result = LineMerge()
    i = 0
    while i < len(cells):
        coord, value = cells[i]
        if i + 1 < len(cells) and cells[i + 1][1] == value:
            doubled = value * 2
            result.tiles.append(MergedTile(doubled, [(coord, value), cells[i + 1]]))
            result.score += doubled
            i += 2
        else:
            result.tiles.append(MergedTile(value, [(coord, value)]))
            i += 1
    return result


def line_coordinates(size: int, direction: Direction, index: int) -> List[Coordinate]:
    """Cells of line ``index`` ordered from the edge tiles compact toward."""
    forward = direction in (Direction.LEFT, Direction.UP)
    steps = range(size) if forward else range(size - 1, -1, -1)
    if direction in (Direction.LEFT, Direction.RIGHT):
        return [(index, c) for c in steps]
    return [(r, index) for r in steps]


class MergeEngine:
    """Applies slides to a grid and accumulates the session score."""

    def __init__(self, grid: Grid, score: int = 0) -> None:
        self.grid = grid
        self.score = score

    def slide(self, direction: Direction) -> Tuple[bool, List[MoveEvent]]:
        direction = Direction.parse(direction)
        self.grid.clear_merge_flags()
        changed = False
        events: List[MoveEvent] = []
        for index in range(self.grid.side_length):
            line_changed, line_events = self._slide_line(direction, index)
            changed |= line_changed
            events.extend(line_events)
        if not changed:
            return False, []
        logger.debug("slide %s changed grid, score now %d", direction.name, self.score)
        return True, events

    def _slide_line(self, direction: Direction, index: int) -> Tuple[bool, List[MoveEvent]]:
        coords = line_coordinates(self.grid.side_length, direction, index)
        occupied = []
        for row, col in coords:
            tile = self.grid.get(row, col)
            if tile is not None:
                occupied.append(((row, col), tile.value))
        merge = merge_line(occupied)

        events: List[MoveEvent] = []
        for (dest_row, dest_col), merged_tile in zip(coords, merge.tiles):
            merged_into = merged_tile.value if merged_tile.merged else None
            for (src_row, src_col), value in merged_tile.sources:
                events.append(MoveEvent(src_row, src_col, dest_row, dest_col, value, merged_into))

        if not any(e.moved or e.merged_into is not None for e in events):
            return False, events

        for row, col in coords:
            self.grid.set(row, col, None)
        for (row, col), merged_tile in zip(coords, merge.tiles):
            self.grid.set(row, col, Tile(merged_tile.value, merged=merged_tile.merged))
        self.score += merge.score
        return True, events

    def preview(self, direction: Direction) -> Tuple[bool, List[MoveEvent], int]:
        """Run a slide on a copy; returns (changed, events, score gained)."""
        shadow = MergeEngine(self.grid.copy())
        changed, events = shadow.slide(direction)
        return changed, events, shadow.score

    def valid_directions(self) -> List[Direction]:
        return [d for d in Direction if self.preview(d)[0]]
