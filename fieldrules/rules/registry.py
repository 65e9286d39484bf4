from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from ..errors import RuleError, UnknownPredicate
from ..store.registry import StoreRegistry
from . import cross_field, persistence, scalar


@dataclass(frozen=True)
class RuleContext:
    """What a predicate may consult besides its value and parameter."""

    data: Mapping[str, Any] = field(default_factory=dict)
    stores: StoreRegistry | None = None


PredicateFn = Callable[[Any, str | None, RuleContext], bool]


def _value_only(fn: Callable[[Any], bool]) -> PredicateFn:
    def call(value: Any, param: str | None, ctx: RuleContext) -> bool:
        return fn(value)

    call.__doc__ = fn.__doc__
    return call


def _with_param(fn: Callable[[Any, str], bool]) -> PredicateFn:
    def call(value: Any, param: str | None, ctx: RuleContext) -> bool:
        return fn(value, param or "")

    call.__doc__ = fn.__doc__
    return call


def _with_data(fn: Callable[[Any, Any, Mapping[str, Any]], bool]) -> PredicateFn:
    def call(value: Any, param: str | None, ctx: RuleContext) -> bool:
        return fn(value, param, ctx.data)

    call.__doc__ = fn.__doc__
    return call


def _with_store(fn: Callable[..., bool]) -> PredicateFn:
    def call(value: Any, param: str | None, ctx: RuleContext) -> bool:
        if ctx.stores is None:
            raise RuleError(f"{fn.__name__}: no record store available")
        return fn(value, param, ctx.data, ctx.stores)

    call.__doc__ = fn.__doc__
    return call


PREDICATES: dict[str, PredicateFn] = {
    "differs": _with_data(cross_field.differs),
    "equals": _with_param(scalar.equals),
    "exact_length": _with_param(scalar.exact_length),
    "greater_than": _with_param(scalar.greater_than),
    "greater_than_equal_to": _with_param(scalar.greater_than_equal_to),
    "in_list": _with_param(scalar.in_list),
    "is_not_unique": _with_store(persistence.is_not_unique),
    "is_unique": _with_store(persistence.is_unique),
    "less_than": _with_param(scalar.less_than),
    "less_than_equal_to": _with_param(scalar.less_than_equal_to),
    "matches": _with_data(cross_field.matches),
    "max_length": _with_param(scalar.max_length),
    "min_length": _with_param(scalar.min_length),
    "not_equals": _with_param(scalar.not_equals),
    "not_in_list": _with_param(scalar.not_in_list),
    "required": _value_only(scalar.required),
    "required_with": _with_data(cross_field.required_with),
    "required_without": _with_data(cross_field.required_without),
}

# Rules that need sibling fields or a store rather than the value alone.
CROSS_FIELD = frozenset({"differs", "matches", "required_with", "required_without"})
STORE_BACKED = frozenset({"is_unique", "is_not_unique"})


def get_predicate(name: str) -> PredicateFn:
    fn = PREDICATES.get(name)
    if fn is None:
        raise UnknownPredicate(name)
    return fn


def check(
    name: str,
    value: Any,
    param: str | None = None,
    *,
    data: Mapping[str, Any] | None = None,
    stores: StoreRegistry | None = None,
) -> bool:
    """Run the predicate registered as ``name``."""
    ctx = RuleContext(data=data if data is not None else {}, stores=stores)
    return get_predicate(name)(value, param, ctx)


def describe(name: str) -> str:
    """First docstring line of a predicate, for listings."""
    doc = (get_predicate(name).__doc__ or "").strip()
    return doc.splitlines()[0] if doc else ""
