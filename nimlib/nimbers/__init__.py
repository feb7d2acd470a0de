"""Nimber calculation for generalized Nim games."""

from .cache import NimberCache
from .engine import (
    calculate_nimber_for_height,
    calculate_nimber_for_position,
    calculate_nimbers,
    is_winning_position,
    mex,
)

__all__ = [
    "NimberCache",
    "calculate_nimber_for_height",
    "calculate_nimber_for_position",
    "calculate_nimbers",
    "is_winning_position",
    "mex",
]
