from __future__ import annotations

import threading
from typing import Optional

import numpy as np

from nimlib.core.state import Nimber

_MISSING = -1


class NimberCache:
    """Write-once memo table of nimbers, indexed by stack height.

    Owned by exactly one ``RuleSet``. Filled entries are read without locking;
    first-time computations run under ``lock`` so every height is computed
    at most once.
    """

    def __init__(self, capacity: int = 64) -> None:
        self._values = np.full(max(int(capacity), 1), _MISSING, dtype=np.int64)
        self._filled = 0
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return self._filled

    def __contains__(self, height: int) -> bool:
        return self.get(height) is not None

    def get(self, height: int) -> Optional[Nimber]:
        values = self._values
        if height < 0 or height >= len(values):
            return None
        value = int(values[height])
        if value == _MISSING:
            return None
        return Nimber(value)

    def __getitem__(self, height: int) -> Nimber:
        nimber = self.get(height)
        if nimber is None:
            raise KeyError(height)
        return nimber

    def insert(self, height: int, nimber: int) -> Nimber:
        if height < 0 or nimber < 0:
            raise ValueError("Heights and nimbers must be non-negative.")
        with self.lock:
            existing = self.get(height)
            if existing is not None:
                if existing != nimber:
                    raise ValueError(
                        f"Nimber for height {height} already cached as {existing}, refusing {nimber}."
                    )
                return existing
            self._reserve(height + 1)
            self._values[height] = nimber
            self._filled += 1
        return Nimber(int(nimber))

    def as_array(self) -> np.ndarray:
        """Copy of the table; uncomputed heights hold -1."""
        values = self._values
        filled = np.flatnonzero(values != _MISSING)
        size = int(filled[-1]) + 1 if filled.size else 0
        return values[:size].copy()

    def _reserve(self, size: int) -> None:
        if size <= len(self._values):
            return
        new_size = len(self._values)
        while new_size < size:
            new_size *= 2
        grown = np.full(new_size, _MISSING, dtype=np.int64)
        grown[: len(self._values)] = self._values
        # Lock-free readers may still hold the previous array.
        self._values = grown
