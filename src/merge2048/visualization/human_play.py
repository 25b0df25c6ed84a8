from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pygame

from merge2048.game import Direction, GameConfig, GameSession, MoveEvent
from merge2048.game.grid import Coordinate
from .renderer import Renderer


logger = logging.getLogger(__name__)


KEY_TO_DIRECTION: Dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
}


@dataclass
class AnimationState:
    events: List[MoveEvent]
    start_ms: int
    duration_ms: int
    hidden: List[Coordinate] = field(default_factory=list)

    def progress(self, now_ms: int) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return min(max((now_ms - self.start_ms) / self.duration_ms, 0.0), 1.0)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play merge2048 with the keyboard")
    p.add_argument("--size", type=int, default=4)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--duration-ms", type=int, default=140, help="Slide animation length")
    p.add_argument("--cell-size", type=int, default=100)
    return p


def run(size: int = 4, seed: Optional[int] = None, duration_ms: int = 140, cell_size: int = 100) -> None:
    session = GameSession(GameConfig(size=size, random_seed=seed))
    renderer = Renderer(cell_size=cell_size)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(size))
        pygame.display.set_caption("2048")

        anim: Optional[AnimationState] = None
        announced = False
        won = False
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        session.reset()
                        anim = None
                        announced = False
                        won = False
                        pygame.display.set_caption("2048")
                    elif anim is None:
                        # Keys pressed while a slide is animating are dropped
                        direction = KEY_TO_DIRECTION.get(event.key)
                        if direction is not None:
                            changed, events = session.apply_move(direction)
                            if changed:
                                hidden = [session.last_spawn] if session.last_spawn is not None else []
                                anim = AnimationState(events, pygame.time.get_ticks(), duration_ms, hidden)

            if anim is not None:
                p = anim.progress(pygame.time.get_ticks())
                if p >= 1.0:
                    anim = None
                    renderer.draw(screen, session)
                else:
                    renderer.draw_animated(screen, session, anim.events, p, anim.hidden)
            else:
                renderer.draw(screen, session)

            if anim is None and session.is_won() and not won:
                logger.info("Reached %d after %d moves", session.rules.win_threshold, session.move_count)
                pygame.display.set_caption(f"2048 - {session.rules.win_threshold} reached!")
                won = True

            if anim is None and session.is_game_over():
                if not announced:
                    logger.info("Game over: score %d, max tile %d", session.score, session.max_tile)
                    announced = True
                font = pygame.font.SysFont(None, 32)
                text = font.render("Game Over - R to restart, ESC to quit", True, (119, 110, 101))
                rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
                screen.blit(text, rect)
                pygame.display.flip()

            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    args = build_parser().parse_args()
    run(size=args.size, seed=args.seed, duration_ms=args.duration_ms, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
