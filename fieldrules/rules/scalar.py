"""
Rules that look only at the value and a static parameter.

Numeric rules never raise on bad input: a value or bound that does not
parse as a number makes the rule fail.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..params import char_length, parse_lengths, parse_number, parse_value_list


def equals(value: str | None, expected: str) -> bool:
    """Equals the static value provided."""
    return isinstance(value, str) and value == expected


def not_equals(value: str | None, expected: str) -> bool:
    """Does not equal the static value provided."""
    return not equals(value, expected)


def exact_length(value: str | None, lengths: str) -> bool:
    """Length matches any entry of "5" or "5,8,12"; non-numeric entries are ignored."""
    return parse_lengths(lengths).accepts(char_length(value))


def greater_than(value: str | None, minimum: str) -> bool:
    """Numerically greater than the bound."""
    number, bound = parse_number(value), parse_number(minimum)
    return number is not None and bound is not None and number > bound


def greater_than_equal_to(value: str | None, minimum: str) -> bool:
    """Numerically greater than or equal to the bound."""
    number, bound = parse_number(value), parse_number(minimum)
    return number is not None and bound is not None and number >= bound


def less_than(value: str | None, maximum: str) -> bool:
    """Numerically less than the bound."""
    number, bound = parse_number(value), parse_number(maximum)
    return number is not None and bound is not None and number < bound


def less_than_equal_to(value: str | None, maximum: str) -> bool:
    """Numerically less than or equal to the bound."""
    number, bound = parse_number(value), parse_number(maximum)
    return number is not None and bound is not None and number <= bound


def max_length(value: str | None, limit: str) -> bool:
    """At most ``limit`` characters long."""
    bound = parse_number(limit)
    return bound is not None and char_length(value) <= bound


def min_length(value: str | None, limit: str) -> bool:
    """At least ``limit`` characters long."""
    bound = parse_number(limit)
    return bound is not None and char_length(value) >= bound


def in_list(value: str | None, allowed: str) -> bool:
    """Exact string membership in a comma list; entries are trimmed first."""
    return parse_value_list(allowed).contains(value)


def not_in_list(value: str | None, allowed: str) -> bool:
    """Not one of the comma-separated values."""
    return not in_list(value, allowed)


def required(value: Any = None) -> bool:
    """
    Presence check.

    Collections count as present when non-empty, strings when non-blank.
    Any other non-None object is present.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (bytes, bytearray)):
        return value.strip() != b""
    if isinstance(value, (Mapping, Sequence, set, frozenset)):
        return len(value) > 0
    return True
