"""nimlib: nimbers and legal moves for generalized Nim games."""

from . import core, env, nimbers, serialization
from .core import (
    NO_SPLIT,
    GameMove,
    InvalidAmountError,
    MoveError,
    NimAction,
    Nimber,
    NimGame,
    NimRule,
    NimSplit,
    PlaceAction,
    Position,
    RuleSet,
    Split,
    Stack,
    TakeAction,
    TakeKind,
    TakeSize,
    apply_game_move,
    apply_move,
    apply_move_unchecked,
    calculate_legal_moves,
    calculate_splits,
    check_move,
    enumerate_moves,
    take_list,
)
from .env import NimEnv
from .nimbers import (
    NimberCache,
    calculate_nimber_for_height,
    calculate_nimber_for_position,
    calculate_nimbers,
    is_winning_position,
)
from .serialization import RuleSetFormatError, dumps_ruleset, load_ruleset, loads_ruleset

__all__ = [
    "core",
    "env",
    "nimbers",
    "serialization",
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
    "GameMove",
    "NimGame",
    "calculate_splits",
    "calculate_legal_moves",
    "check_move",
    "apply_move",
    "apply_move_unchecked",
    "enumerate_moves",
    "apply_game_move",
    "NimberCache",
    "calculate_nimber_for_height",
    "calculate_nimber_for_position",
    "calculate_nimbers",
    "is_winning_position",
    "NimEnv",
    "RuleSetFormatError",
    "dumps_ruleset",
    "load_ruleset",
    "loads_ruleset",
]
