from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional

import gymnasium as gym
import numpy as np

import merge2048.env  # noqa: F401
from merge2048.env import ResampleInvalidActionWrapper


logger = logging.getLogger(__name__)


@dataclass
class EpisodeStats:
    score: int
    max_tile: int
    moves: int


def run_random(episodes: int = 10, size: int = 4, seed: Optional[int] = None,
               max_steps: int = 10000) -> List[EpisodeStats]:
    env = gym.make("Merge2048-4x4-v0", size=size, max_steps=max_steps)
    env = ResampleInvalidActionWrapper(env)
    env.action_space.seed(seed)
    stats: List[EpisodeStats] = []
    obs, info = env.reset(seed=seed)
    try:
        for episode in range(episodes):
            moves = 0
            while True:
                action = env.action_space.sample()
                obs, reward, terminated, truncated, info = env.step(action)
                if info["moved"]:
                    moves += 1
                if terminated or truncated:
                    break
            stats.append(EpisodeStats(score=int(info["score"]), max_tile=int(info["max_tile"]), moves=moves))
            logger.debug("episode %d: score %d, max tile %d", episode, info["score"], info["max_tile"])
            obs, info = env.reset()
    finally:
        env.close()
    return stats


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play merge2048 with uniformly random moves")
    p.add_argument("--episodes", type=int, default=10)
    p.add_argument("--size", type=int, default=4)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-steps", type=int, default=10000)
    return p


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    args = build_parser().parse_args()
    stats = run_random(args.episodes, args.size, args.seed, args.max_steps)
    scores = np.array([s.score for s in stats])
    tiles = np.array([s.max_tile for s in stats])
    logger.info(f"Random agent over {len(stats)} episodes: mean score {scores.mean():.1f}, "
                f"best score {scores.max()}, best tile {tiles.max()}")


if __name__ == "__main__":  # pragma: no cover
    main()
