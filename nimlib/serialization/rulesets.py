from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from nimlib.core.state import NimRule, RuleSet, Split, TakeKind, TakeSize


class RuleSetFormatError(ValueError):
    pass


_FORMATS = ("json", "yaml")


def rule_to_dict(rule: NimRule) -> Dict[str, Any]:
    take: Union[int, str] = rule.take.kind.value
    if rule.take.amount is not None:
        take = rule.take.amount
    return {"take": take, "split": rule.split.value}


def rules_from_dict(data: Dict[str, Any]) -> List[NimRule]:
    """Parse one rule entry; a list ``take`` expands to one exact rule per amount."""
    if not isinstance(data, dict) or "take" not in data:
        raise RuleSetFormatError(f"Rule entries need a 'take' key, got {data!r}.")

    raw_split = data.get("split", Split.NEVER.value)
    try:
        split = Split(str(raw_split).lower())
    except ValueError:
        raise RuleSetFormatError(f"Unknown split requirement {raw_split!r}.") from None

    raw_take = data["take"]
    if isinstance(raw_take, bool):
        raise RuleSetFormatError(f"Invalid take size {raw_take!r}.")
    if isinstance(raw_take, int):
        amounts = [raw_take]
    elif isinstance(raw_take, list):
        amounts = raw_take
    elif isinstance(raw_take, str) and raw_take.lower() == TakeKind.ANY.value:
        return [NimRule(TakeSize.any(), split)]
    elif isinstance(raw_take, str) and raw_take.lower() == TakeKind.PLACE.value:
        return [NimRule(TakeSize.place(), split)]
    else:
        raise RuleSetFormatError(f"Invalid take size {raw_take!r}.")

    rules: List[NimRule] = []
    for amount in amounts:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            raise RuleSetFormatError(f"Take amounts must be positive integers, got {amount!r}.")
        rules.append(NimRule(TakeSize.exact(amount), split))
    return rules


def ruleset_to_list(rules: RuleSet) -> List[Dict[str, Any]]:
    return [rule_to_dict(rule) for rule in rules]


def ruleset_from_list(data: Any) -> RuleSet:
    if isinstance(data, dict) and "rules" in data:
        data = data["rules"]
    if not isinstance(data, list):
        raise RuleSetFormatError("A rule set must be a list of rules.")
    rules: List[NimRule] = []
    for entry in data:
        rules.extend(rules_from_dict(entry))
    return RuleSet(rules)


def dumps_ruleset(rules: RuleSet, fmt: str = "json", *, pretty: bool = False) -> str:
    payload = ruleset_to_list(rules)
    if fmt == "json":
        return json.dumps(payload, indent=2 if pretty else None)
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, default_flow_style=not pretty)
    raise ValueError(f"Unknown rule set format {fmt!r}; expected one of {_FORMATS}.")


def loads_ruleset(text: str, fmt: str = "json") -> RuleSet:
    try:
        if fmt == "json":
            data = json.loads(text)
        elif fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            raise ValueError(f"Unknown rule set format {fmt!r}; expected one of {_FORMATS}.")
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RuleSetFormatError(f"Could not parse rule set: {exc}") from exc
    return ruleset_from_list(data)


def load_ruleset(path: Union[str, Path]) -> RuleSet:
    path = Path(path)
    fmt = "yaml" if path.suffix.lower() in {".yaml", ".yml"} else "json"
    return loads_ruleset(path.read_text(), fmt)
