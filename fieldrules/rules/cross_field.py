"""
Rules that compare a value with other fields of the same submission.

Field references containing a dot are resolved with ``dot_search``;
plain references must exist as keys in the submission.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import InvalidRuleArgument
from ..lookup import NOT_FOUND, dot_search, has_dots
from ..params import parse_field_list, parse_field_ref
from .scalar import required


def differs(value: str | None, field: str | None, data: Mapping[str, Any]) -> bool:
    """
    The value does not match another field in the submission.

    A dotted reference that resolves nowhere differs from every value, while
    a missing plain field never differs.
    """
    field = parse_field_ref(field, rule="differs")
    if has_dots(field):
        return value != dot_search(field, data)
    return field in data and value != data[field]


def matches(value: str | None, field: str | None, data: Mapping[str, Any]) -> bool:
    """The value equals another field in the submission."""
    field = parse_field_ref(field, rule="matches")
    if has_dots(field):
        return value == dot_search(field, data)
    return field in data and value == data[field]


def _filled(value: Any) -> bool:
    if value is None or value is NOT_FOUND:
        return False
    return required(value)


def _field_filled(field: str, data: Mapping[str, Any]) -> bool:
    if has_dots(field):
        return _filled(dot_search(field, data))
    return field in data and _filled(data[field])


def _check_arguments(rule: str, fields: str | None, data: Mapping[str, Any] | None) -> tuple[str, ...]:
    if not data:
        raise InvalidRuleArgument(f"{rule}: you must supply the parameters: fields, data")
    return parse_field_list(fields, rule=rule).fields


def required_with(value: Any = None, fields: str | None = None, data: Mapping[str, Any] | None = None) -> bool:
    """
    Required when any of the listed fields is filled in.

    Example, required when a password was submitted::

        required_with(value, "password", data)
    """
    names = _check_arguments("required_with", fields, data)

    if required(value):
        return True

    return not any(_field_filled(name, data) for name in names)


def required_without(value: Any = None, fields: str | None = None, data: Mapping[str, Any] | None = None) -> bool:
    """
    Required when any of the listed fields is missing or empty.

    Example, required unless both id and email were submitted::

        required_without(value, "id,email", data)
    """
    names = _check_arguments("required_without", fields, data)

    if required(value):
        return True

    return all(_field_filled(name, data) for name in names)
