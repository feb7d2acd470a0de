from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from nimlib.core import (
    NO_SPLIT,
    GameMove,
    NimGame,
    NimSplit,
    RuleSet,
    Split,
    TakeAction,
    TakeKind,
    apply_game_move,
    enumerate_moves,
    new_game,
)
from nimlib.core.state import require_height

logger = logging.getLogger(__name__)


class NimEnv(gym.Env):
    """Two-player Nim under an arbitrary rule set, normal play convention.

    Actions are flat indices over ``(stack_index, amount, split_left)`` where
    ``split_left == 0`` means no split. Rewards are from player 0's view:
    +1 when player 0 makes the last move, -1 when player 1 does.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        rules: RuleSet,
        stacks: Sequence[int],
        *,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
        max_actions: int = 2_000_000,
    ) -> None:
        super().__init__()
        self.rules = rules
        self._initial_stacks = [require_height(h) for h in stacks]
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        # Stacks never grow; a split costs at least ``_split_take`` coins and leaves two.
        self._split_take = _smallest_split_take(rules)
        self.max_height = max(max(self._initial_stacks, default=0), 1)
        self.max_stacks = max(self._stack_bound(self._initial_stacks), 1)
        self._split_slots = 1
        if self._split_take is not None:
            self._split_slots = max(self.max_height - self._split_take, 0) // 2 + 1

        size = self.max_stacks * self.max_height * self._split_slots
        if size > max_actions:
            raise ValueError(
                f"Action space of {size} actions exceeds max_actions={max_actions}; "
                "use lower stacks or raise the limit."
            )

        self.observation_space = spaces.Dict(
            {
                "stacks": spaces.Box(low=0, high=self.max_height, shape=(self.max_stacks,), dtype=np.int64),
                "to_play": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(size)

        self._game = new_game(rules, self._initial_stacks)
        self._to_play = 0
        self._mask: Optional[np.ndarray] = None

    @property
    def game(self) -> NimGame:
        return self._game

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        stacks = options.get("stacks", self._initial_stacks) if options else self._initial_stacks
        if max(stacks, default=0) > self.max_height or self._stack_bound(stacks) > self.max_stacks:
            raise ValueError("Reset stacks do not fit the environment's observation space.")
        self._game = new_game(self.rules, stacks)
        self._to_play = 0
        self._mask = None
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        move = self.decode_move(int(action_index))
        if self._enforce_legal and not self._current_mask()[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        mover = self._to_play
        self._game = apply_game_move(self._game, move)
        self._mask = None
        terminated = not self._current_mask().any()
        reward = 0.0
        if terminated:
            reward = 1.0 if mover == 0 else -1.0
            logger.debug("game over after player %d moved: %r", mover, self._game)
        else:
            self._to_play = 1 - mover

        return self._build_observation(), reward, terminated, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        return self._current_mask().copy()

    def encode_move(self, move: GameMove) -> int:
        action = move.action
        if not isinstance(action, TakeAction):
            raise NotImplementedError("Place actions are not supported yet.")
        left = action.split.parts[0] if action.split.parts is not None else 0
        if not 0 <= move.stack_index < self.max_stacks or not 1 <= action.amount <= self.max_height:
            raise ValueError(f"Move {move!r} cannot be encoded in this environment.")
        if left >= self._split_slots:
            raise ValueError(f"Split of move {move!r} is not canonical.")
        index = move.stack_index * self.max_height + (action.amount - 1)
        return index * self._split_slots + left

    def decode_move(self, index: int) -> GameMove:
        if not 0 <= index < self.action_space.n:
            raise ValueError("Action index out of range.")
        left = index % self._split_slots
        index //= self._split_slots
        amount = (index % self.max_height) + 1
        stack_index = index // self.max_height
        if left == 0:
            return GameMove(stack_index, TakeAction(amount, NO_SPLIT))
        height = self._game.stacks[stack_index] if stack_index < len(self._game.stacks) else 0
        return GameMove(stack_index, TakeAction(amount, NimSplit.of(left, height - amount - left)))

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._render_ascii()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, object]:
        stacks = np.zeros(self.max_stacks, dtype=np.int64)
        stacks[: len(self._game.stacks)] = self._game.stacks
        return {"stacks": stacks, "to_play": self._to_play}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "nimber": int(self._game.calculate_nimber()),
        }

    def _current_mask(self) -> np.ndarray:
        if self._mask is None:
            mask = np.zeros(self.action_space.n, dtype=np.int8)
            for move in enumerate_moves(self._game):
                mask[self.encode_move(move)] = 1
            self._mask = mask
        return self._mask

    def _stack_bound(self, stacks: Sequence[int]) -> int:
        if self._split_take is None:
            return len(stacks)
        return len(stacks) + sum(max(h - 2, 0) // self._split_take for h in stacks)

    def _render_ascii(self) -> str:
        rows = [f"{i:>3}: {'|' * height} ({height})" for i, height in enumerate(self._game.stacks)]
        rows.append(f"Player {self._to_play} to move")
        return "\n".join(rows)


def _smallest_split_take(rules: RuleSet) -> Optional[int]:
    takes = [
        1 if rule.take.kind == TakeKind.ANY else rule.take.amount
        for rule in rules
        if rule.split != Split.NEVER and rule.take.kind != TakeKind.PLACE
    ]
    return min((take for take in takes if take is not None), default=None)
