from __future__ import annotations

from typing import List, Tuple

from .state import Stack, require_height


def calculate_splits(remainder: int) -> List[Tuple[Stack, Stack]]:
    """All ways to split ``remainder`` coins into two non-empty stacks.

    Pairs are canonical (``left <= right``) and ordered by ``left``, so
    ``(a, b)`` and ``(b, a)`` appear once::

        calculate_splits(4) == [(1, 3), (2, 2)]
    """
    remainder = require_height(remainder)
    # Stacks of height 0 and 1 can't be split.
    if remainder <= 1:
        return []
    return [(Stack(left), Stack(remainder - left)) for left in range(1, remainder // 2 + 1)]
