"""
Hard errors raised by rule predicates.

A predicate returning False is an ordinary validation outcome. The
exceptions here signal that the rule itself could not be evaluated:
its parameters were missing or malformed, or the store it needs is not
configured. Store read failures are not wrapped; they reach the caller
as the store raised them.
"""

from __future__ import annotations


class RuleError(Exception):
    """Base class for errors that prevent a rule from being evaluated."""


class InvalidRuleArgument(RuleError, ValueError):
    """A required rule argument (field list, submission) was not supplied."""


class MalformedRuleSpec(RuleError, ValueError):
    """A rule parameter string cannot be parsed into the shape the rule needs."""

    def __init__(self, rule: str, param: str | None, reason: str) -> None:
        super().__init__(f"{rule}: {reason} (param={param!r})")
        self.rule = rule
        self.param = param
        self.reason = reason


class UnknownPredicate(RuleError, KeyError):
    """No predicate is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown predicate {self.name!r}"


class StoreNotConfigured(RuleError, LookupError):
    """A connection group was requested that the registry does not know."""

    def __init__(self, group: str, available: list[str]) -> None:
        listed = ", ".join(available) if available else "none"
        super().__init__(f"no store configured for group {group!r} (available: {listed})")
        self.group = group
        self.available = available
