from __future__ import annotations

from pathlib import Path

import pytest

from fieldrules.errors import InvalidRuleArgument, MalformedRuleSpec
from fieldrules.ruleset import fill_placeholders, load_ruleset, parse_ruleset, run_ruleset
from fieldrules.store import StoreRegistry


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


SIGNUP_RULES = """
ruleset_id = "ruleset/signup"
version = 1

[defaults]
severity = "error"

[[rules]]
field = "email"
predicate = "required"

[[rules]]
field = "email"
predicate = "is_unique"
param = "users.email,id,{id}"
message = "That email is already registered."

[[rules]]
field = "username"
predicate = "min_length"
param = 3

[[rules]]
field = "username"
predicate = "max_length"
param = 12

[[rules]]
id = "confirm"
field = "password_confirm"
predicate = "matches"
param = "password"

[[rules]]
field = "profile.country"
predicate = "in_list"
param = "NO, SE, DK"
severity = "warning"
"""


def test_load_ruleset(tmp_path: Path):
    path = tmp_path / "signup.toml"
    _write(path, SIGNUP_RULES)

    ruleset = load_ruleset(path)
    assert ruleset.ruleset_id == "ruleset/signup"
    assert ruleset.bail is True
    assert [r.id for r in ruleset.rules] == [
        "email.required",
        "email.is_unique",
        "username.min_length",
        "username.max_length",
        "confirm",
        "profile.country.in_list",
    ]
    assert ruleset.rules[2].param == "3"
    assert ruleset.rules[5].severity == "warning"
    assert ruleset.fields() == ["email", "username", "password_confirm", "profile.country"]


@pytest.mark.parametrize(
    "data",
    [
        {"version": 1},
        {"ruleset_id": "x", "version": 0},
        {"ruleset_id": "x", "version": 1, "defaults": {"severity": "fatal"}},
        {"ruleset_id": "x", "version": 1, "rules": [{"field": "a", "predicate": "required", "severity": "loud"}]},
    ],
)
def test_parse_ruleset_rejects_invalid(data):
    with pytest.raises(ValueError):
        parse_ruleset(data)


def test_rules_without_field_or_predicate_are_skipped():
    ruleset = parse_ruleset(
        {
            "ruleset_id": "x",
            "version": 1,
            "rules": [{"field": "a"}, {"predicate": "required"}, "junk", {"field": "a", "predicate": "required"}],
        }
    )
    assert len(ruleset.rules) == 1


def test_fill_placeholders():
    data = {"id": 5, "name": "ada", "tags": ["x"], "flag": True}
    assert fill_placeholders("users.email,id,{id}", data) == "users.email,id,5"
    assert fill_placeholders("users.email,id,{missing}", data) == "users.email,id,{missing}"
    assert fill_placeholders("{tags},{flag},{name}", data) == "{tags},{flag},ada"
    assert fill_placeholders(None, data) is None


def test_run_ruleset_all_pass(users_registry: StoreRegistry):
    ruleset = parse_ruleset(_as_dict(SIGNUP_RULES))
    data = {
        "id": 5,
        "email": "a@b.com",
        "username": "ada",
        "password": "pw",
        "password_confirm": "pw",
        "profile": {"country": "NO"},
    }

    results = run_ruleset(data, ruleset, stores=users_registry)
    assert all(r.passed for r in results)
    assert len(results) == 6


def test_run_ruleset_reports_failures(users_registry: StoreRegistry):
    ruleset = parse_ruleset(_as_dict(SIGNUP_RULES))
    data = {
        "email": "a@b.com",
        "username": "a-very-long-username",
        "password": "pw",
        "password_confirm": "nope",
        "profile": {"country": "FI"},
    }

    results = run_ruleset(data, ruleset, stores=users_registry)
    failed = {r.rule: r for r in results if not r.passed}

    assert set(failed) == {"email.is_unique", "username.max_length", "confirm", "profile.country.in_list"}
    assert failed["email.is_unique"].message == "That email is already registered."
    # Unresolved {id} is left in place, so no row is excluded.
    assert failed["email.is_unique"].param == "users.email,id,{id}"
    assert failed["profile.country.in_list"].level == "warning"
    assert "max_length[12]" in (failed["username.max_length"].message or "")


def test_bail_stops_field_after_first_failure(users_registry: StoreRegistry):
    ruleset = parse_ruleset(_as_dict(SIGNUP_RULES))
    data = {"email": "", "username": "ada", "password": "a", "password_confirm": "a", "profile": {"country": "NO"}}

    results = run_ruleset(data, ruleset, stores=users_registry)
    email_rules = [r.rule for r in results if r.field == "email"]
    assert email_rules == ["email.required"]

    results = run_ruleset(data, ruleset, stores=users_registry, bail=False)
    email_rules = [r.rule for r in results if r.field == "email"]
    assert email_rules == ["email.required", "email.is_unique"]


def test_allowed_rule_ids_filter(users_registry: StoreRegistry):
    ruleset = parse_ruleset(_as_dict(SIGNUP_RULES))
    results = run_ruleset({"username": "ab"}, ruleset, stores=users_registry, allowed_rule_ids={"username.min_length"})
    assert [(r.rule, r.passed) for r in results] == [("username.min_length", False)]


def test_missing_field_evaluates_as_none():
    ruleset = parse_ruleset(
        {"ruleset_id": "x", "version": 1, "rules": [{"field": "address.city", "predicate": "required"}]}
    )
    results = run_ruleset({"address": {}}, ruleset)
    assert results[0].passed is False


def test_unknown_predicate_is_reported_not_raised():
    ruleset = parse_ruleset(
        {"ruleset_id": "x", "version": 1, "rules": [{"field": "a", "predicate": "is_purple"}]}
    )
    results = run_ruleset({"a": "x"}, ruleset)
    assert results[0].passed is False
    assert "is_purple" in (results[0].message or "")


def test_hard_rule_errors_propagate():
    ruleset = parse_ruleset(
        {"ruleset_id": "x", "version": 1, "rules": [{"field": "a", "predicate": "required_with"}]}
    )
    with pytest.raises(InvalidRuleArgument):
        run_ruleset({"a": ""}, ruleset)


def test_comparison_rule_without_param_propagates():
    ruleset = parse_ruleset(
        {"ruleset_id": "x", "version": 1, "rules": [{"field": "a", "predicate": "matches"}]}
    )
    with pytest.raises(MalformedRuleSpec):
        run_ruleset({"a": "b"}, ruleset)


def _as_dict(text: str) -> dict:
    import tomllib

    return tomllib.loads(text)
