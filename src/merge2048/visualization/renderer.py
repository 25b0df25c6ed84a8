from __future__ import annotations

from typing import Iterable, List, Sequence, Set, Tuple

import pygame

from merge2048.game import GameSession, MoveEvent
from merge2048.game.grid import Coordinate


# (grid_x, grid_y, value, scale); grid units, fractional while moving
Sprite = Tuple[float, float, int, float]

BACKGROUND = (250, 248, 239)
EMPTY_CELL = (187, 173, 160)
TEXT_DARK = (119, 110, 101)
TEXT_LIGHT = (249, 246, 242)

POP_START = 0.8
POP_SCALE = 0.15


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        2: (238, 228, 218),
        4: (237, 224, 200),
        8: (242, 177, 121),
        16: (245, 149, 99),
        32: (246, 124, 95),
        64: (246, 94, 59),
        128: (237, 207, 114),
        256: (237, 204, 97),
        512: (237, 200, 80),
        1024: (237, 197, 63),
        2048: (237, 194, 46),
    }
    return palette.get(v, (60, 58, 50))


def ease_out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3


def interpolate_events(events: Sequence[MoveEvent], progress: float) -> List[Sprite]:
    """Positions of the sliding tiles at ``progress`` in [0, 1].

    Merging tiles swell during the last fifth of the animation, after which
    the merged value is drawn once per destination on top of them.
    """
    p = min(max(progress, 0.0), 1.0)
    ep = ease_out_cubic(p)
    pop = 1.0 + POP_SCALE * ((p - POP_START) / (1.0 - POP_START)) if p >= POP_START else 1.0

    sprites: List[Sprite] = []
    for e in events:
        x = e.source_col + (e.dest_col - e.source_col) * ep
        y = e.source_row + (e.dest_row - e.source_row) * ep
        scale = pop if e.merged_into is not None else 1.0
        sprites.append((x, y, e.value, scale))

    if p >= POP_START:
        seen: Set[Coordinate] = set()
        for e in events:
            if e.merged_into is not None and e.dest not in seen:
                seen.add(e.dest)
                sprites.append((float(e.dest_col), float(e.dest_row), e.merged_into, pop))
    return sprites


class Renderer:
    def __init__(self, cell_size: int = 100, margin: int = 12, header: int = 40) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.header = header
        self._fonts: dict = {}

    def window_size(self, size: int) -> Tuple[int, int]:
        side = size * self.cell_size + (size + 1) * self.margin
        return side, side + self.header

    def _font(self, px: int) -> pygame.font.Font:
        if px not in self._fonts:
            self._fonts[px] = pygame.font.SysFont("arial", px, bold=True)
        return self._fonts[px]

    def _cell_origin(self, grid_x: float, grid_y: float) -> Tuple[float, float]:
        step = self.cell_size + self.margin
        return self.margin + grid_x * step, self.header + self.margin + grid_y * step

    def _draw_tile(self, screen: pygame.Surface, value: int, grid_x: float, grid_y: float, scale: float = 1.0) -> None:
        x, y = self._cell_origin(grid_x, grid_y)
        s = self.cell_size * scale
        cx = x + self.cell_size / 2
        cy = y + self.cell_size / 2
        rect = pygame.Rect(int(cx - s / 2), int(cy - s / 2), int(s), int(s))
        pygame.draw.rect(screen, _color_for_value(value), rect, border_radius=6)
        color = TEXT_DARK if value <= 4 else TEXT_LIGHT
        digits = len(str(value))
        font = self._font(max(12, int(self.cell_size * scale * (0.5 if digits < 3 else 0.38))))
        text = font.render(str(value), True, color)
        screen.blit(text, text.get_rect(center=(int(cx), int(cy))))

    def _draw_background(self, screen: pygame.Surface, session: GameSession) -> None:
        screen.fill(BACKGROUND)
        size = session.grid.side_length
        for r in range(size):
            for c in range(size):
                x, y = self._cell_origin(c, r)
                pygame.draw.rect(screen, EMPTY_CELL, pygame.Rect(int(x), int(y), self.cell_size, self.cell_size),
                                 border_radius=6)
        label = self._font(20).render(f"Score: {session.score}", True, TEXT_DARK)
        screen.blit(label, (self.margin, (self.header - label.get_height()) // 2 + self.margin // 2))

    def draw(self, screen: pygame.Surface, session: GameSession) -> None:
        self._draw_background(screen, session)
        size = session.grid.side_length
        for r in range(size):
            for c in range(size):
                tile = session.grid.get(r, c)
                if tile is not None:
                    self._draw_tile(screen, tile.value, c, r)
        pygame.display.flip()

    def draw_animated(self, screen: pygame.Surface, session: GameSession, events: Sequence[MoveEvent],
                      progress: float, hidden: Iterable[Coordinate] = ()) -> None:
        """Draw the post-move grid with ``events`` replayed at ``progress``.

        Destination cells and ``hidden`` cells (e.g. the tile spawned after
        the move) are left out of the static layer.
        """
        self._draw_background(screen, session)
        skip = {e.dest for e in events}
        skip.update(hidden)
        size = session.grid.side_length
        for r in range(size):
            for c in range(size):
                tile = session.grid.get(r, c)
                if tile is not None and (r, c) not in skip:
                    self._draw_tile(screen, tile.value, c, r)
        for x, y, value, scale in interpolate_events(events, progress):
            self._draw_tile(screen, value, x, y, scale)
        pygame.display.flip()
