"""Gymnasium environments for merge2048."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .merge_env import Merge2048Env
from .wrappers import ResampleInvalidActionWrapper

register(
    id="Merge2048-4x4-v0",
    entry_point="merge2048.env.merge_env:Merge2048Env",
)

__all__ = ["Merge2048Env", "ResampleInvalidActionWrapper"]
