import gymnasium as gym
import numpy as np
import pytest

import merge2048.env  # noqa: F401
from merge2048.env import Merge2048Env, ResampleInvalidActionWrapper
from merge2048.game import Direction, Tile
from merge2048.rl.random_agent import run_random


BLOCKED_LEFT = [[2, 4, 2, 4], [0] * 4, [0] * 4, [0] * 4]


@pytest.fixture
def env():
    env = gym.make("Merge2048-4x4-v0")
    yield env
    env.close()


def test_reset_contract(env):
    obs, info = env.reset(seed=3)
    assert obs.shape == (4, 4)
    assert obs.dtype == np.int64
    assert np.count_nonzero(obs) == 2
    assert info["score"] == 0
    assert info["action_mask"].dtype == np.bool_
    assert env.observation_space.contains(obs)


def test_seeded_reset_is_reproducible(env):
    first, _ = env.reset(seed=11)
    second, _ = env.reset(seed=11)
    np.testing.assert_array_equal(first, second)


def test_step_rewards_merged_value(env, load):
    env.reset(seed=0)
    load(env.unwrapped.session, [[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    obs, reward, terminated, truncated, info = env.step(int(Direction.LEFT))
    assert reward == 4.0
    assert info["moved"]
    assert info["score"] == 4
    assert obs[0, 0] == 4
    assert not terminated and not truncated
    assert len(info["events"]) == 2


def test_blocked_step_is_penalised(env, load):
    env.reset(seed=0)
    load(env.unwrapped.session, BLOCKED_LEFT)
    obs, reward, terminated, truncated, info = env.step(int(Direction.LEFT))
    assert reward == -1.0
    assert not info["moved"]
    np.testing.assert_array_equal(obs, BLOCKED_LEFT)
    assert info["action_mask"].tolist() == [False, True, False, False]


def test_truncates_after_max_steps(load):
    env = Merge2048Env(max_steps=1)
    env.reset(seed=0)
    load(env.session, BLOCKED_LEFT)
    *_, truncated, _ = env.step(int(Direction.LEFT))
    assert truncated


def test_resample_wrapper_replaces_blocked_action(load):
    env = ResampleInvalidActionWrapper(Merge2048Env())
    env.reset(seed=0)
    load(env.unwrapped.session, BLOCKED_LEFT)
    obs, reward, terminated, truncated, info = env.step(int(Direction.LEFT))
    assert info["moved"]
    # only DOWN can move this grid
    assert obs[3].tolist()[:4] != [0, 0, 0, 0]
    assert reward == 0.0


def test_rgb_render():
    env = Merge2048Env(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (64, 64, 3)
    assert frame.dtype == np.uint8


def test_random_agent_plays_episodes():
    stats = run_random(episodes=2, seed=0, max_steps=40)
    assert len(stats) == 2
    for s in stats:
        assert 0 < s.moves <= 40
        assert s.max_tile >= 2
        assert s.score >= 0


def test_step_limit_reaches_env_through_make(load):
    env = gym.make("Merge2048-4x4-v0", max_steps=2)
    try:
        assert env.unwrapped.max_steps == 2
        env.reset(seed=0)
        load(env.unwrapped.session, BLOCKED_LEFT)
        *_, truncated, _ = env.step(int(Direction.LEFT))
        assert not truncated
        *_, truncated, info = env.step(int(Direction.LEFT))
        assert truncated
        assert info["steps"] == 2
    finally:
        env.close()


@pytest.mark.parametrize("size", [4, 5, 6])
def test_observation_bound_grows_with_board(size):
    env = Merge2048Env(size=size)
    assert env.observation_space.high.max() == 2 ** (size * size + 1)
    env.reset(seed=0)
    env.session.grid.set(0, 0, Tile(2 ** 18))  # unreachable on 4x4, legal on 5x5
    obs = env.session.get_state().astype(np.int64)
    assert env.observation_space.contains(obs) == (size > 4)
