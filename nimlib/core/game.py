from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from nimlib.nimbers import calculate_nimber_for_position

from .moves import apply_move, calculate_legal_moves
from .state import Nimber, NimAction, RuleSet, Stack, StackIndexError, as_position


@dataclass(frozen=True)
class GameMove:
    stack_index: int
    action: NimAction


@dataclass
class NimGame:
    rules: RuleSet
    stacks: List[Stack] = field(default_factory=list)
    # Pool coins for Poker-Nim; carried for completeness, must stay 0.
    coins_a: int = 0
    coins_b: int = 0

    def __post_init__(self) -> None:
        self.stacks = list(as_position(self.stacks))
        if self.coins_a or self.coins_b:
            raise NotImplementedError("Pool coins (Poker-Nim) are not supported yet.")

    def copy(self) -> "NimGame":
        # Copies share the rule set and therefore its nimber cache.
        return NimGame(
            rules=self.rules,
            stacks=list(self.stacks),
            coins_a=self.coins_a,
            coins_b=self.coins_b,
        )

    def calculate_nimber(self) -> Nimber:
        return calculate_nimber_for_position(self.rules, self.stacks)

    @property
    def total_coins(self) -> int:
        return sum(self.stacks)

    @property
    def is_terminal(self) -> bool:
        return not enumerate_moves(self)

    def __repr__(self) -> str:
        heights = " ".join(str(h) for h in self.stacks)
        return f"NimGame(rules={len(self.rules)}, stacks=[{heights}])"


def enumerate_moves(game: NimGame) -> List[GameMove]:
    legal: List[GameMove] = []
    for index, height in enumerate(game.stacks):
        for action in calculate_legal_moves(game.rules, height):
            legal.append(GameMove(index, action))
    return legal


def apply_game_move(game: NimGame, move: GameMove, *, in_place: bool = False) -> NimGame:
    """Apply ``move`` after validating it.

    A split replaces the stack with its left part and inserts the right part
    directly after it.
    """
    target = game if in_place else game.copy()
    if not 0 <= move.stack_index < len(target.stacks):
        raise StackIndexError(
            f"Stack index {move.stack_index} out of range for {len(target.stacks)} stacks."
        )

    resulting = apply_move(target.rules, target.stacks[move.stack_index], move.action)
    target.stacks[move.stack_index : move.stack_index + 1] = list(resulting)
    return target


def new_game(rules: RuleSet, stacks: Sequence[int]) -> NimGame:
    return NimGame(rules=rules, stacks=list(stacks))
