from __future__ import annotations

import os
from typing import Callable, Sequence

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from merge2048.game import GameConfig, GameSession, Grid  # noqa: E402


@pytest.fixture
def session() -> GameSession:
    return GameSession(GameConfig(size=4, random_seed=7))


@pytest.fixture
def load() -> Callable[[GameSession, Sequence[Sequence[int]]], None]:
    """Overwrite a session grid in place with ``rows`` (0 = empty)."""

    def _load(session: GameSession, rows: Sequence[Sequence[int]]) -> None:
        session.grid.cells = Grid.from_values(rows).cells

    return _load
