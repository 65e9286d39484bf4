"""Check, validate and list command implementations."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from ..errors import RuleError
from ..rules.registry import CROSS_FIELD, PREDICATES, STORE_BACKED, check, describe
from ..ruleset import RuleResult, load_ruleset, run_ruleset
from ..store.config import load_store_config
from ..store.registry import StoreRegistry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def load_submission(path: Path) -> dict[str, Any]:
    """Read a JSON object of submitted field values."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: submission must be a JSON object")
    return data


def load_stores(path: Path | None) -> StoreRegistry | None:
    if path is None:
        return None
    config = load_store_config(path)
    logger.debug("store groups from %s: %s", path, ", ".join(config.groups))
    return StoreRegistry.from_config(config)


def run_list() -> int:
    """Print every registered predicate."""
    console = Console()

    table = Table(title="Predicates")
    table.add_column("Name", style="bold")
    table.add_column("Needs")
    table.add_column("Description", style="dim")

    for name in sorted(PREDICATES):
        if name in STORE_BACKED:
            needs = "store"
        elif name in CROSS_FIELD:
            needs = "data"
        else:
            needs = "-"
        table.add_row(name, needs, describe(name))

    console.print(table)
    return EXIT_OK


def run_check(
    predicate: str,
    value: str | None,
    param: str | None,
    data_path: Path | None = None,
    stores_path: Path | None = None,
) -> int:
    """Run one predicate and report pass/fail.

    Returns:
        Exit code (0 = pass, 1 = fail, 2 = the rule could not be evaluated)
    """
    console = Console(stderr=True)

    try:
        data = load_submission(data_path) if data_path else {}
        stores = load_stores(stores_path)
        passed = check(predicate, value, param, data=data, stores=stores)
    except (RuleError, SQLAlchemyError, ValueError, OSError) as e:
        console.print(f"✗ {predicate}: {e}", style="bold red", markup=False)
        return EXIT_ERROR

    shown = f"{predicate}[{param}]" if param is not None else predicate
    if passed:
        console.print(f"✓ {shown} passed for {value!r}", style="bold green", markup=False)
        return EXIT_OK
    console.print(f"✗ {shown} failed for {value!r}", style="bold red", markup=False)
    return EXIT_FAILED


def run_validate(
    data_path: Path,
    rules_path: Path,
    stores_path: Path | None = None,
    output_json: bool = False,
    bail: bool | None = None,
) -> int:
    """Validate a submission against a ruleset.

    Returns:
        Exit code (0 = all rules passed, 1 = failures found, 2 = evaluation error)
    """
    console = Console(stderr=True)

    try:
        data = load_submission(data_path)
        ruleset = load_ruleset(rules_path)
        stores = load_stores(stores_path)
        console.print(f"Validating {data_path.name} against {ruleset.ruleset_id} v{ruleset.version}...", style="dim")
        results = run_ruleset(data, ruleset, stores=stores, bail=bail)
    except (RuleError, SQLAlchemyError, ValueError, OSError) as e:
        console.print(f"✗ {e}", style="bold red", markup=False)
        return EXIT_ERROR

    failures = [r for r in results if not r.passed]

    if output_json:
        _output_json(ruleset.ruleset_id, results)
    else:
        _print_human_output(console, results)

    if any(r.level == "error" for r in failures):
        return EXIT_FAILED
    return EXIT_OK


def _output_json(ruleset_id: str, results: list[RuleResult]) -> None:
    by_field: dict[str, list[dict[str, object]]] = defaultdict(list)
    for r in results:
        if not r.passed:
            by_field[r.field].append(r.to_dict())

    output = {
        "ruleset": ruleset_id,
        "valid": not any(not r.passed and r.level == "error" for r in results),
        "errors": dict(by_field),
        "summary": {
            "checked": len(results),
            "passed": sum(1 for r in results if r.passed),
            "failed": sum(1 for r in results if not r.passed),
        },
    }
    print(json.dumps(output, indent=2, default=str))


def _print_human_output(console: Console, results: list[RuleResult]) -> None:
    by_field: dict[str, list[RuleResult]] = defaultdict(list)
    for r in results:
        by_field[r.field].append(r)

    for field_name, field_results in by_field.items():
        failed = [r for r in field_results if not r.passed]
        if not failed:
            console.print(f"✓ {field_name}", style="bold green")
            continue

        if any(r.level == "error" for r in failed):
            console.print(f"✗ {field_name}", style="bold red")
        else:
            console.print(f"⚠ {field_name}", style="yellow")
        for r in failed:
            style = {"error": "red", "warning": "yellow"}.get(r.level, "dim")
            console.print(f"    {r.level.upper()}: [{r.rule}] {r.message}", style=style, markup=False)

    failed_count = sum(1 for r in results if not r.passed)
    console.print()
    if failed_count:
        console.print(f"{failed_count} rule(s) failed out of {len(results)} checked", style="bold red")
    else:
        console.print(f"All {len(results)} rule(s) passed", style="bold green")
