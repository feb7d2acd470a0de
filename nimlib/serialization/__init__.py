"""Rule set (de)serialization helpers."""

from .rulesets import (
    RuleSetFormatError,
    dumps_ruleset,
    load_ruleset,
    loads_ruleset,
    rule_to_dict,
    rules_from_dict,
    ruleset_from_list,
    ruleset_to_list,
)

__all__ = [
    "RuleSetFormatError",
    "dumps_ruleset",
    "load_ruleset",
    "loads_ruleset",
    "rule_to_dict",
    "rules_from_dict",
    "ruleset_from_list",
    "ruleset_to_list",
]
