"""
Typed parsing of rule parameter strings.

Every rule takes a single parameter string whose shape the rule defines
("5,8,12", "users.email,id,5", "password,email"). The parsers here turn
those strings into small frozen values once, so predicates work with
typed data instead of splitting strings themselves.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import InvalidRuleArgument, MalformedRuleSpec

# Accepts what a form field would submit as a number: optional surrounding
# whitespace, sign, decimal point and exponent. No hex, nan or inf.
_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")

_PLACEHOLDER_RE = re.compile(r"^\{(\w+)\}$")


def parse_number(raw: Any) -> Decimal | None:
    """Parse a submitted value as a number, or return None if it is not numeric."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        return Decimal(repr(raw)) if math.isfinite(raw) else None
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if not isinstance(raw, str) or not _NUMERIC_RE.match(raw):
        return None
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        return None


def is_placeholder(value: str | None) -> bool:
    """True for an unresolved ``{name}`` placeholder left in a parameter."""
    return value is not None and _PLACEHOLDER_RE.match(value) is not None


def char_length(value: Any) -> int:
    """Length in code points; None counts as empty."""
    if value is None:
        return 0
    return len(value if isinstance(value, str) else str(value))


def _split(param: str) -> list[str]:
    return param.split(",")


@dataclass(frozen=True)
class LengthSet:
    """Acceptable lengths from a list such as "5,8,12"."""

    lengths: tuple[Decimal, ...] = ()

    def accepts(self, length: int) -> bool:
        return any(n == length for n in self.lengths)


def parse_lengths(param: str | None) -> LengthSet:
    if not param:
        return LengthSet()
    parsed = (parse_number(part) for part in _split(param))
    return LengthSet(tuple(n for n in parsed if n is not None))


@dataclass(frozen=True)
class ValueList:
    """Allowed values from a comma list, each entry trimmed."""

    items: tuple[str, ...] = ()

    def contains(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.items


def parse_value_list(param: str | None) -> ValueList:
    if param is None:
        return ValueList()
    return ValueList(tuple(part.strip() for part in _split(param)))


@dataclass(frozen=True)
class FieldList:
    """Names of sibling fields a conditional rule depends on."""

    fields: tuple[str, ...]


def parse_field_list(param: str | None, *, rule: str) -> FieldList:
    fields = tuple(f.strip() for f in _split(param or "") if f.strip())
    if not fields:
        raise InvalidRuleArgument(f"{rule}: you must supply the parameters: fields, data")
    return FieldList(fields)


def parse_field_ref(param: str | None, *, rule: str) -> str:
    """Name of the single sibling field a comparison rule reads."""
    if param is None or not param.strip():
        raise MalformedRuleSpec(rule, param, "expected a field name")
    return param.strip()


@dataclass(frozen=True)
class Exclude:
    """Ignore rows where ``column == value``."""

    column: str
    value: str


@dataclass(frozen=True)
class Where:
    """Only consider rows where ``column == value``."""

    column: str
    value: str


RowFilter = Exclude | Where | None


@dataclass(frozen=True)
class TableSpec:
    """Target of a store-backed rule: ``table.column`` plus an optional row filter."""

    table: str
    column: str
    row_filter: RowFilter = None


def parse_table_spec(param: str | None, *, rule: str, filter_type: type[Exclude] | type[Where]) -> TableSpec:
    """
    Parse ``table.column[,filter_column,filter_value]``.

    The filter is dropped when either half is empty or the value is still an
    unresolved ``{placeholder}``; the caller was expected to substitute it.
    """
    if param is None or not param.strip():
        raise MalformedRuleSpec(rule, param, "expected table.column")

    parts = _split(param)
    target = parts[0].strip()
    filter_column = parts[1].strip() if len(parts) > 1 else ""
    filter_value = parts[2].strip() if len(parts) > 2 else ""

    table, _, rest = target.partition(".")
    column = rest.split(".", 1)[0]
    if not table or not column:
        raise MalformedRuleSpec(rule, param, "expected table.column")

    row_filter: RowFilter = None
    if filter_column and filter_value and not is_placeholder(filter_value):
        row_filter = filter_type(filter_column, filter_value)

    return TableSpec(table=table, column=column, row_filter=row_filter)
