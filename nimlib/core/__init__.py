"""Core game logic: rules, moves and splits."""

from .state import (
    NO_SPLIT,
    AmountExceedsStackError,
    InvalidAmountError,
    InvalidSplitError,
    MoveError,
    NimAction,
    Nimber,
    NimRule,
    NimSplit,
    NoMatchingRuleError,
    PlaceAction,
    Position,
    RuleSet,
    Split,
    SplitNotPermittedError,
    SplitRequiredError,
    Stack,
    StackIndexError,
    TakeAction,
    TakeKind,
    TakeSize,
    ZeroAmountError,
    take_list,
)
from .splits import calculate_splits
from .moves import apply_move, apply_move_unchecked, calculate_legal_moves, check_move
from .game import GameMove, NimGame, apply_game_move, enumerate_moves, new_game

__all__ = [
    "Stack",
    "Nimber",
    "Position",
    "Split",
    "TakeKind",
    "TakeSize",
    "NimRule",
    "RuleSet",
    "take_list",
    "NimSplit",
    "NO_SPLIT",
    "TakeAction",
    "PlaceAction",
    "NimAction",
    "MoveError",
    "InvalidAmountError",
    "ZeroAmountError",
    "AmountExceedsStackError",
    "SplitNotPermittedError",
    "SplitRequiredError",
    "InvalidSplitError",
    "NoMatchingRuleError",
    "StackIndexError",
    "calculate_splits",
    "calculate_legal_moves",
    "check_move",
    "apply_move",
    "apply_move_unchecked",
    "GameMove",
    "NimGame",
    "new_game",
    "enumerate_moves",
    "apply_game_move",
]
