"""Field validation predicates."""

from .cross_field import differs, matches, required_with, required_without
from .persistence import DB_GROUP_KEY, is_not_unique, is_unique
from .registry import PREDICATES, RuleContext, check, describe, get_predicate
from .scalar import (
    equals,
    exact_length,
    greater_than,
    greater_than_equal_to,
    in_list,
    less_than,
    less_than_equal_to,
    max_length,
    min_length,
    not_equals,
    not_in_list,
    required,
)

__all__ = [
    "DB_GROUP_KEY",
    "PREDICATES",
    "RuleContext",
    "check",
    "describe",
    "differs",
    "equals",
    "exact_length",
    "get_predicate",
    "greater_than",
    "greater_than_equal_to",
    "in_list",
    "is_not_unique",
    "is_unique",
    "less_than",
    "less_than_equal_to",
    "matches",
    "max_length",
    "min_length",
    "not_equals",
    "not_in_list",
    "required",
    "required_with",
    "required_without",
]
