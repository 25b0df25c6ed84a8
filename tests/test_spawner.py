import random
from collections import Counter

from merge2048.game import GameRules, Grid, Spawner, Tile


def test_spawn_fills_one_empty_cell():
    grid = Grid(4)
    spawner = Spawner(grid, rng=random.Random(0))
    assert spawner.spawn()
    assert grid.occupied_count() == 1
    row, col = spawner.last_spawn
    assert grid.get(row, col).value in (2, 4)


def test_spawn_on_full_grid_is_noop():
    grid = Grid.from_values([[2, 4], [8, 16]])
    spawner = Spawner(grid, rng=random.Random(0))
    before = grid.copy()
    assert not spawner.spawn()
    assert spawner.last_spawn is None
    assert grid == before


def test_spawn_only_targets_empty_cells():
    grid = Grid.from_values([[2, 0], [8, 16]])
    spawner = Spawner(grid, rng=random.Random(3))
    assert spawner.spawn()
    assert spawner.last_spawn == (0, 1)


def test_value_weights_and_uniform_cells():
    rng = random.Random(1234)
    grid = Grid(4)
    spawner = Spawner(grid, GameRules(), rng)
    values = Counter()
    cells = Counter()
    for _ in range(4000):
        grid.reset()
        spawner.spawn()
        row, col = spawner.last_spawn
        values[grid.get(row, col).value] += 1
        cells[(row, col)] += 1
    assert set(values) == {2, 4}
    assert 0.07 < values[4] / 4000 < 0.13
    assert len(cells) == 16
    assert min(cells.values()) > 150


def test_spawner_respects_existing_tiles():
    grid = Grid(3)
    for r in range(3):
        for c in range(3):
            if (r, c) != (2, 2):
                grid.set(r, c, Tile(2))
    spawner = Spawner(grid, rng=random.Random(9))
    assert spawner.spawn()
    assert spawner.last_spawn == (2, 2)
    assert not spawner.spawn()
