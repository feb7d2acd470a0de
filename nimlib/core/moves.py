from __future__ import annotations

import numbers
from typing import List, Tuple

from .splits import calculate_splits
from .state import (
    NO_SPLIT,
    AmountExceedsStackError,
    InvalidAmountError,
    InvalidSplitError,
    NimAction,
    NimRule,
    NimSplit,
    NoMatchingRuleError,
    PlaceAction,
    RuleSet,
    Split,
    SplitNotPermittedError,
    SplitRequiredError,
    Stack,
    TakeAction,
    ZeroAmountError,
    require_height,
)


def calculate_legal_moves(rules: RuleSet, stack: int) -> List[TakeAction]:
    """Every legal action on a single stack.

    Ordered by rule, then amount, then split. Identical actions allowed by
    several rules are listed once per rule.
    """
    height = require_height(stack)

    legal: List[TakeAction] = []
    for rule in rules:
        for amount in rule.take.amounts(height):
            remainder = height - amount
            if rule.split != Split.ALWAYS:
                legal.append(TakeAction(amount, NO_SPLIT))
            if rule.split != Split.NEVER:
                for left, right in calculate_splits(remainder):
                    legal.append(TakeAction(amount, NimSplit.of(left, right)))
    return legal


def check_move(rules: RuleSet, stack: int, action: NimAction) -> None:
    """Raise the matching ``MoveError`` if ``action`` is illegal on ``stack``."""
    height = require_height(stack)
    if isinstance(action, PlaceAction):
        raise NotImplementedError("Place actions are not supported yet.")

    amount = action.amount
    if not _is_integer(amount):
        raise InvalidAmountError(f"Take amounts must be integers, got {amount!r}.")
    if amount == 0:
        raise ZeroAmountError("Cannot take zero coins.")
    if amount < 0:
        raise ZeroAmountError(f"Cannot take a negative amount ({amount}).")
    if amount > height:
        raise AmountExceedsStackError(f"Cannot take {amount} coins from a stack of height {height}.")

    candidates = [rule for rule in rules if rule.take.matches(amount, height)]
    if not candidates:
        raise NoMatchingRuleError(f"No rule allows taking {amount} coins.")

    if not any(_split_allowed(rule, action.split) for rule in candidates):
        if action.split.is_split:
            raise SplitNotPermittedError(f"Taking {amount} coins does not allow a split.")
        raise SplitRequiredError(f"Taking {amount} coins requires a split.")

    if action.split.parts is not None:
        left, right = action.split.parts
        remainder = height - amount
        if not (_is_integer(left) and _is_integer(right)):
            raise InvalidSplitError(f"Split parts must be integers, got ({left!r}, {right!r}).")
        if left < 1 or right < 1 or left + right != remainder:
            raise InvalidSplitError(
                f"Split ({left}, {right}) does not divide the remaining {remainder} coins "
                "into two non-empty stacks."
            )


def apply_move_unchecked(stack: int, action: NimAction) -> Tuple[Stack, ...]:
    """Stacks resulting from ``action``; only defined for legal actions."""
    if isinstance(action, PlaceAction):
        raise NotImplementedError("Place actions are not supported yet.")
    if action.split.parts is not None:
        return action.split.parts
    return (Stack(stack - action.amount),)


def apply_move(rules: RuleSet, stack: int, action: NimAction) -> Tuple[Stack, ...]:
    check_move(rules, stack, action)
    return apply_move_unchecked(stack, action)


def _split_allowed(rule: NimRule, split: NimSplit) -> bool:
    if rule.split == Split.NEVER:
        return not split.is_split
    if rule.split == Split.ALWAYS:
        return split.is_split
    return True


def _is_integer(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)
