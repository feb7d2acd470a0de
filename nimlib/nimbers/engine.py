"""Sprague-Grundy values of single stacks and whole positions.

The nimber of a stack is the mex (minimum excluded value) of the values of
every position reachable in one legal move; a position made of several
stacks is worth the XOR of its stacks. Results are memoized per rule set in
its ``NimberCache``.
"""

from __future__ import annotations

import logging
from functools import reduce
from operator import xor
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from nimlib.core.moves import apply_move_unchecked, calculate_legal_moves
from nimlib.core.state import Nimber, RuleSet, Stack, require_height

from .cache import NimberCache

logger = logging.getLogger(__name__)


def mex(values: Iterable[int]) -> Nimber:
    """Smallest non-negative integer not in ``values``."""
    seen = set(values)
    nimber = 0
    while nimber in seen:
        nimber += 1
    return Nimber(nimber)


def calculate_nimber_for_height(
    rules: RuleSet,
    height: int,
    cache: Optional[NimberCache] = None,
) -> Nimber:
    """Nimber of a single stack of ``height`` coins under ``rules``.

    Every move removes at least one coin, so each resulting stack is lower
    than its parent and the evaluation below always terminates. Heights are
    resolved depth-first with an explicit work stack rather than Python
    recursion, which keeps tall stacks clear of the recursion limit.
    """
    height = require_height(height)
    if cache is None:
        cache = rules.cache

    cached = cache.get(height)
    if cached is not None:
        return cached

    with cache.lock:
        outcomes: Dict[int, List[Tuple[Stack, ...]]] = {}
        pending = [height]
        while pending:
            current = pending[-1]
            if current in cache:
                pending.pop()
                continue

            if current not in outcomes:
                outcomes[current] = _outcomes(rules, current)
            missing = {h for stacks in outcomes[current] for h in stacks if h not in cache}
            if missing:
                # Lowest height on top, so base cases fill first.
                pending.extend(sorted(missing, reverse=True))
                continue

            reachable: Set[int] = {
                reduce(xor, (cache[h] for h in stacks), 0) for stacks in outcomes.pop(current)
            }
            nimber = cache.insert(current, mex(reachable))
            logger.debug("nimber(%d) = %d from %d reachable values", current, nimber, len(reachable))
            pending.pop()

    return cache[height]


def calculate_nimber_for_position(
    rules: RuleSet,
    position: Sequence[int],
    cache: Optional[NimberCache] = None,
) -> Nimber:
    """XOR of the stack nimbers; nonzero means the player to move wins."""
    return Nimber(
        reduce(xor, (calculate_nimber_for_height(rules, h, cache) for h in position), 0)
    )


def is_winning_position(
    rules: RuleSet,
    position: Sequence[int],
    cache: Optional[NimberCache] = None,
) -> bool:
    return calculate_nimber_for_position(rules, position, cache) != 0


def calculate_nimbers(
    rules: RuleSet,
    max_height: int,
    cache: Optional[NimberCache] = None,
) -> np.ndarray:
    """Nimbers for every height in ``0..max_height`` as an int64 array."""
    max_height = require_height(max_height)
    table = np.zeros(max_height + 1, dtype=np.int64)
    for height in range(max_height + 1):
        table[height] = calculate_nimber_for_height(rules, height, cache)
    return table


def _outcomes(rules: RuleSet, height: int) -> List[Tuple[Stack, ...]]:
    return [apply_move_unchecked(height, action) for action in calculate_legal_moves(rules, height)]
