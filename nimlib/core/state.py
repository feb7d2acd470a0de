from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, NewType, Optional, Sequence, Tuple, Union

if TYPE_CHECKING:
    from nimlib.nimbers.cache import NimberCache

Stack = NewType("Stack", int)
Nimber = NewType("Nimber", int)

# Convenient tuple alias used across modules
Position = Tuple[Stack, ...]


class Split(Enum):
    """Whether the remainder of a stack may/must be split after taking coins."""

    NEVER = "never"
    OPTIONAL = "optional"
    ALWAYS = "always"


class TakeKind(Enum):
    EXACT = "exact"
    ANY = "any"
    PLACE = "place"


@dataclass(frozen=True)
class TakeSize:
    kind: TakeKind
    amount: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind == TakeKind.EXACT:
            if self.amount is None or require_int(self.amount, "Take amount") < 1:
                raise ValueError("Exact take sizes must be at least 1.")
        elif self.amount is not None:
            raise ValueError(f"{self.kind.value} take sizes carry no amount.")

    @staticmethod
    def exact(amount: int) -> "TakeSize":
        return TakeSize(TakeKind.EXACT, require_int(amount, "Take amount"))

    @staticmethod
    def any() -> "TakeSize":
        return TakeSize(TakeKind.ANY)

    @staticmethod
    def place() -> "TakeSize":
        """Placing coins from a pool (Poker-Nim); reserved, never yields moves."""
        return TakeSize(TakeKind.PLACE)

    def amounts(self, height: int) -> range:
        """Amounts this take size allows on a stack of ``height`` coins."""
        if self.kind == TakeKind.ANY:
            return range(1, height + 1)
        if self.amount is not None and self.amount <= height:
            return range(self.amount, self.amount + 1)
        return range(0)

    def matches(self, amount: int, height: int) -> bool:
        if self.kind == TakeKind.EXACT:
            return amount == self.amount
        if self.kind == TakeKind.ANY:
            return 1 <= amount <= height
        return False


@dataclass(frozen=True)
class NimRule:
    take: TakeSize
    split: Split = Split.NEVER


def take_list(amounts: Iterable[int], split: Split = Split.NEVER) -> Tuple[NimRule, ...]:
    """Expand a list of take sizes (e.g. ``[1, 2, 3]``) into one exact rule per size."""
    return tuple(NimRule(TakeSize.exact(amount), split) for amount in amounts)


@dataclass(frozen=True)
class RuleSet:
    """An ordered rule set; a move is legal iff at least one rule allows it.

    Each instance owns its own nimber cache, since nimbers depend on the rules.
    """

    rules: Tuple[NimRule, ...]
    cache: "NimberCache" = field(init=False, repr=False, compare=False)

    def __init__(self, rules: Iterable[NimRule] = ()) -> None:
        from nimlib.nimbers.cache import NimberCache

        object.__setattr__(self, "rules", tuple(rules))
        object.__setattr__(self, "cache", NimberCache())

    def __iter__(self) -> Iterator[NimRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __getitem__(self, index: int) -> NimRule:
        return self.rules[index]

    @property
    def has_place_rules(self) -> bool:
        return any(rule.take.kind == TakeKind.PLACE for rule in self.rules)


@dataclass(frozen=True)
class NimSplit:
    parts: Optional[Tuple[Stack, Stack]] = None

    @staticmethod
    def of(left: int, right: int) -> "NimSplit":
        return NimSplit((Stack(require_int(left, "Split part")), Stack(require_int(right, "Split part"))))

    @property
    def is_split(self) -> bool:
        return self.parts is not None

    def __repr__(self) -> str:
        if self.parts is None:
            return "NimSplit.No"
        return f"NimSplit.Yes({self.parts[0]}, {self.parts[1]})"


NO_SPLIT = NimSplit()


@dataclass(frozen=True)
class TakeAction:
    amount: int
    split: NimSplit = NO_SPLIT


@dataclass(frozen=True)
class PlaceAction:
    amount: int


NimAction = Union[TakeAction, PlaceAction]


class MoveError(ValueError):
    """Base class for illegal moves reported by ``check_move``/``apply_move``."""


class InvalidAmountError(MoveError):
    pass


class ZeroAmountError(MoveError):
    pass


class AmountExceedsStackError(MoveError):
    pass


class SplitNotPermittedError(MoveError):
    pass


class SplitRequiredError(MoveError):
    pass


class InvalidSplitError(MoveError):
    pass


class NoMatchingRuleError(MoveError):
    pass


class StackIndexError(MoveError):
    pass


def require_int(value: int, what: str) -> int:
    """``value`` as a plain int; floats, strings and bools are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"{what} must be an integer, got {value!r}.")
    try:
        return operator.index(value)
    except TypeError:
        raise ValueError(f"{what} must be an integer, got {value!r}.") from None


def require_height(height: int) -> Stack:
    height = require_int(height, "Stack height")
    if height < 0:
        raise ValueError(f"Stack height must be non-negative, got {height}.")
    return Stack(height)


def as_position(stacks: Sequence[int]) -> Position:
    return tuple(require_height(h) for h in stacks)
