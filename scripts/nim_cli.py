#!/usr/bin/env python3
"""Nim-game CLI: nimbers, splits, legal moves and rule-set files."""

import argparse
import csv
import io
import json
import logging
import sys
from typing import Dict, List, Optional, Sequence

from nimlib.core import (
    NimRule,
    RuleSet,
    Split,
    TakeAction,
    TakeSize,
    calculate_legal_moves,
    calculate_splits,
    take_list,
)
from nimlib.nimbers import calculate_nimber_for_height, calculate_nimber_for_position, calculate_nimbers
from nimlib.serialization import dumps_ruleset, load_ruleset

logger = logging.getLogger("nimlib.cli")


def configure_logging(verbose: int, quiet: int) -> None:
    level = logging.WARNING - 10 * verbose + 10 * quiet
    logging.basicConfig(
        level=max(logging.DEBUG, min(level, logging.CRITICAL)),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def format_splits(height: int, *, as_csv: bool = False) -> str:
    splits = calculate_splits(height)
    if as_csv:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["left", "right"])
        writer.writerows(splits)
        return buffer.getvalue().rstrip("\n")

    if not splits:
        return f"No splits for height {height}"

    width_left = len(str(splits[-1][0]))
    width_right = len(str(splits[0][1]))
    lines = [f"Splits for height {height}:"]
    for left, right in splits:
        lines.append(f"{left:>{width_left}} + {right:>{width_right}}")
    return "\n".join(lines)


def format_nimber_table(rules: RuleSet, max_height: int, fmt: str) -> str:
    table = calculate_nimbers(rules, max_height)
    if fmt == "json":
        return json.dumps({"nimbers": [int(n) for n in table]}, indent=2)
    if fmt == "csv":
        rows = ["height,nimber"] + [f"{height},{int(n)}" for height, n in enumerate(table)]
        return "\n".join(rows)
    width = len(str(max_height))
    return "\n".join(f"{height:>{width}}: {int(n)}" for height, n in enumerate(table))


def format_position(rules: RuleSet, position: Sequence[int], fmt: str) -> str:
    nimber = int(calculate_nimber_for_position(rules, position))
    stack_nimbers = [int(calculate_nimber_for_height(rules, h)) for h in position]
    winner = "first" if nimber else "second"
    if fmt == "json":
        return json.dumps(
            {"position": list(position), "stack_nimbers": stack_nimbers, "nimber": nimber, "winner": winner},
            indent=2,
        )
    if fmt == "csv":
        rows = ["height,nimber"] + [f"{h},{n}" for h, n in zip(position, stack_nimbers)]
        rows.append(f"total,{nimber}")
        return "\n".join(rows)
    stacks = " ".join(str(h) for h in position)
    return f"Position [{stacks}] has nimber {nimber}; the {winner} player wins."


def describe_move(action: TakeAction) -> str:
    if action.split.parts is None:
        return f"take {action.amount}"
    left, right = action.split.parts
    return f"take {action.amount}, split {left} + {right}"


def format_moves(rules: RuleSet, height: int, fmt: str) -> str:
    moves = calculate_legal_moves(rules, height)
    if fmt == "json":
        payload: List[Dict[str, object]] = [
            {"amount": move.amount, "split": list(move.split.parts) if move.split.parts else None}
            for move in moves
        ]
        return json.dumps(payload, indent=2)
    if not moves:
        return f"No legal moves for height {height}"
    return "\n".join(describe_move(move) for move in moves)


def make_rule_set(args: argparse.Namespace) -> RuleSet:
    rules: List[NimRule] = []
    rules.extend(take_list(args.take_split_never or [], Split.NEVER))
    rules.extend(take_list(args.take_split_optional or [], Split.OPTIONAL))
    rules.extend(take_list(args.take_split_always or [], Split.ALWAYS))
    if args.allow_any_take is not None:
        rules.append(NimRule(TakeSize.any(), Split(args.allow_any_take)))
    if args.allow_place:
        rules.append(NimRule(TakeSize.place(), Split.NEVER))
    return RuleSet(rules)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="A Nim-game CLI")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("-q", "--quiet", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    nimber = sub.add_parser("nimber", help="Calculate nimbers for a stack height or a position")
    nimber.add_argument("--rules", required=True, help="Rule set file (JSON or YAML)")
    target = nimber.add_mutually_exclusive_group(required=True)
    target.add_argument("--height", type=int)
    target.add_argument("--max-height", type=int, help="List nimbers for heights 0..MAX_HEIGHT")
    target.add_argument("--position", type=int, nargs="+", help="Stack heights of a full position")
    nimber.add_argument("--format", choices=["text", "csv", "json"], default="text")

    splits = sub.add_parser("splits", help="Calculate all possible splits for a given height")
    splits.add_argument("height", type=int, help="Height of the stack to calculate splits for")
    splits.add_argument("-c", "--csv", action="store_true", help="Output as CSV")

    moves = sub.add_parser("moves", help="List the legal moves on a single stack")
    moves.add_argument("--rules", required=True, help="Rule set file (JSON or YAML)")
    moves.add_argument("--height", type=int, required=True)
    moves.add_argument("--format", choices=["text", "json"], default="text")

    make = sub.add_parser("make-rule-set", help="Create a rule set from CLI parameters")
    make.add_argument("-n", "--take-split-never", type=int, nargs="+", action="extend",
                      help="Take sizes whose remainder cannot be split")
    make.add_argument("-o", "--take-split-optional", type=int, nargs="+", action="extend",
                      help="Take sizes whose remainder may be split")
    make.add_argument("-a", "--take-split-always", type=int, nargs="+", action="extend",
                      help="Take sizes whose remainder must be split")
    make.add_argument("-s", "--allow-any-take", choices=[s.value for s in Split],
                      help="Allow taking arbitrary amounts with the given split requirement")
    make.add_argument("-p", "--allow-place", action="store_true",
                      help="Allow placing coins from the pool (not implemented by the engine)")
    make.add_argument("--yaml", action="store_true", help="Emit YAML instead of JSON")
    make.add_argument("-P", "--pretty-print", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        if args.command == "splits":
            print(format_splits(args.height, as_csv=args.csv))
        elif args.command == "make-rule-set":
            rules = make_rule_set(args)
            logger.info("made rule set with %d rules", len(rules))
            print(dumps_ruleset(rules, "yaml" if args.yaml else "json", pretty=args.pretty_print))
        else:
            rules = load_ruleset(args.rules)
            logger.info("loaded %d rules from %s", len(rules), args.rules)
            if args.command == "moves":
                print(format_moves(rules, args.height, args.format))
            elif args.position is not None:
                print(format_position(rules, args.position, args.format))
            elif args.max_height is not None:
                print(format_nimber_table(rules, args.max_height, args.format))
            else:
                print(format_position(rules, [args.height], args.format))
    except (ValueError, OSError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())
