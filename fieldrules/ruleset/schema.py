from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


Severity = Literal["error", "warning", "info"]


@dataclass(frozen=True)
class RuleDef:
    id: str
    field: str
    predicate: str
    param: str | None = None
    severity: Severity = "error"
    message: str | None = None


@dataclass(frozen=True)
class RulesetDef:
    ruleset_id: str
    version: int
    description: str | None = None
    bail: bool = True
    rules: list[RuleDef] = field(default_factory=list)

    def fields(self) -> list[str]:
        """Field names in first-seen order."""
        seen: dict[str, None] = {}
        for rule in self.rules:
            seen.setdefault(rule.field, None)
        return list(seen)


@dataclass
class RuleResult:
    """Outcome of one rule against one field."""

    rule: str
    field: str
    predicate: str
    passed: bool
    level: Severity = "error"
    message: str | None = None
    param: str | None = None

    def __str__(self) -> str:
        status = "PASS" if self.passed else self.level.upper()
        text = f"{status}: [{self.rule}] {self.field}"
        if self.message and not self.passed:
            text += f" - {self.message}"
        return text

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule,
            "field": self.field,
            "predicate": self.predicate,
            "param": self.param,
            "passed": self.passed,
            "level": self.level,
            "message": self.message,
        }
