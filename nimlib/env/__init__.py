"""Gymnasium environment for rule-set Nim."""

from .gym_env import NimEnv

__all__ = ["NimEnv"]
