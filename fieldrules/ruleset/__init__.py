"""Declarative rulesets (rules as data, predicates as code)."""

from .engine import evaluate_rule, fill_placeholders, run_ruleset
from .load import load_ruleset, parse_ruleset
from .schema import RuleDef, RuleResult, RulesetDef

__all__ = [
    "RuleDef",
    "RuleResult",
    "RulesetDef",
    "evaluate_rule",
    "fill_placeholders",
    "load_ruleset",
    "parse_ruleset",
    "run_ruleset",
]
