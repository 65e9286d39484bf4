from __future__ import annotations

from pathlib import Path
from typing import Any

from .schema import RuleDef, RulesetDef

_SEVERITIES = {"error", "warning", "info"}


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_ruleset(data: dict[str, Any]) -> RulesetDef:
    ruleset_id = str(data.get("ruleset_id", "")).strip()
    if not ruleset_id:
        raise ValueError("ruleset_id is required")

    version = int(data.get("version", 0))
    if version <= 0:
        raise ValueError("version must be a positive integer")

    defaults = _coerce_dict(data.get("defaults"))
    default_severity = str(defaults.get("severity", "error")).strip() or "error"
    if default_severity not in _SEVERITIES:
        raise ValueError(f"defaults.severity must be one of {sorted(_SEVERITIES)}")
    bail = bool(defaults.get("bail", True))

    rules: list[RuleDef] = []
    for raw in data.get("rules", []):
        if not isinstance(raw, dict):
            continue

        field_name = str(raw.get("field", "")).strip()
        predicate = str(raw.get("predicate", "")).strip()
        if not field_name or not predicate:
            continue

        rule_id = str(raw.get("id", "")).strip() or f"{field_name}.{predicate}"

        severity = str(raw.get("severity", default_severity)).strip() or default_severity
        if severity not in _SEVERITIES:
            raise ValueError(f"rule {rule_id}: severity must be one of {sorted(_SEVERITIES)}")

        param = raw.get("param")
        # TOML lets authors write numeric params bare: max_length = 5
        param_str = str(param) if isinstance(param, (str, int, float)) and not isinstance(param, bool) else None

        message = raw.get("message")
        message_str = str(message) if isinstance(message, str) else None

        rules.append(
            RuleDef(
                id=rule_id,
                field=field_name,
                predicate=predicate,
                param=param_str,
                severity=severity,  # type: ignore[arg-type]
                message=message_str,
            )
        )

    return RulesetDef(
        ruleset_id=ruleset_id,
        version=version,
        description=(str(data.get("description")) if isinstance(data.get("description"), str) else None),
        bail=bail,
        rules=rules,
    )


def load_ruleset(path: Path) -> RulesetDef:
    """
    Load a ruleset from TOML.

    Each rule names a field, a predicate and that predicate's parameter
    string as separate keys.
    """
    import tomllib

    return parse_ruleset(tomllib.loads(path.read_text(encoding="utf-8")))
