from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..lookup import NOT_FOUND, field_value
from ..rules.registry import PREDICATES, RuleContext
from ..store.registry import StoreRegistry
from .schema import RuleDef, RuleResult, RulesetDef

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def fill_placeholders(param: str | None, data: Mapping[str, Any]) -> str | None:
    """
    Substitute ``{field}`` in a parameter with the submitted value.

    Only scalar values are substituted. Placeholders naming a missing field
    are left as they are; store-backed rules then skip their row filter.
    """
    if not param or "{" not in param:
        return param

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        value = data.get(name)
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return match.group(0)
        return str(value)

    return _PLACEHOLDER_RE.sub(replace, param)


def _message(rule: RuleDef) -> str:
    if rule.message:
        return rule.message
    if rule.param is not None:
        return f"{rule.field} failed {rule.predicate}[{rule.param}]"
    return f"{rule.field} failed {rule.predicate}"


def evaluate_rule(rule: RuleDef, ctx: RuleContext) -> RuleResult:
    """Evaluate a single rule. Hard rule errors propagate."""
    fn = PREDICATES.get(rule.predicate)
    if fn is None:
        logger.warning("rule %s: unknown predicate %r", rule.id, rule.predicate)
        return RuleResult(
            rule=rule.id,
            field=rule.field,
            predicate=rule.predicate,
            passed=False,
            level="error",
            message=f"unknown predicate {rule.predicate!r}",
            param=rule.param,
        )

    value = field_value(rule.field, ctx.data)
    if value is NOT_FOUND:
        value = None
    param = fill_placeholders(rule.param, ctx.data)

    passed = fn(value, param, ctx)
    logger.debug("rule %s on %s -> %s", rule.id, rule.field, "pass" if passed else "fail")

    return RuleResult(
        rule=rule.id,
        field=rule.field,
        predicate=rule.predicate,
        passed=passed,
        level=rule.severity,
        message=None if passed else _message(rule),
        param=param,
    )


def run_ruleset(
    data: Mapping[str, Any],
    ruleset: RulesetDef,
    *,
    stores: StoreRegistry | None = None,
    bail: bool | None = None,
    allowed_rule_ids: set[str] | None = None,
) -> list[RuleResult]:
    """
    Evaluate a ruleset against one submission.

    Rules run in declaration order. With bail (the ruleset default unless
    overridden), a field stops being checked after its first failure.

    Args:
        data: Submitted field values
        ruleset: Ruleset to evaluate
        stores: Registry for store-backed rules
        bail: Override the ruleset's per-field short-circuit setting
        allowed_rule_ids: Optional set of rule IDs to filter
    """
    ctx = RuleContext(data=data, stores=stores)
    stop_on_failure = ruleset.bail if bail is None else bail

    results: list[RuleResult] = []
    failed_fields: set[str] = set()

    for rule in ruleset.rules:
        if allowed_rule_ids is not None and rule.id not in allowed_rule_ids:
            continue
        if stop_on_failure and rule.field in failed_fields:
            continue

        result = evaluate_rule(rule, ctx)
        results.append(result)
        if not result.passed:
            failed_fields.add(rule.field)

    return results
