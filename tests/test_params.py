"""Tests for rule parameter parsing."""

from decimal import Decimal

import pytest

from fieldrules.errors import InvalidRuleArgument, MalformedRuleSpec
from fieldrules.params import (
    Exclude,
    Where,
    char_length,
    is_placeholder,
    parse_field_list,
    parse_field_ref,
    parse_lengths,
    parse_number,
    parse_table_spec,
    parse_value_list,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5", Decimal(5)),
        (" 5 ", Decimal(5)),
        ("-2.5", Decimal("-2.5")),
        (".5", Decimal("0.5")),
        ("1e3", Decimal(1000)),
        ("+7", Decimal(7)),
        (3, Decimal(3)),
        (2.5, Decimal("2.5")),
    ],
)
def test_parse_number_accepts(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "", " ", "5a", "0x1A", "nan", "inf", "1,000", None, True, float("inf"), [1]])
def test_parse_number_rejects(raw):
    assert parse_number(raw) is None


def test_char_length_counts_code_points():
    assert char_length("héllo") == 5
    assert char_length("日本") == 2
    assert char_length(None) == 0


def test_parse_lengths_ignores_non_numeric_entries():
    lengths = parse_lengths("5,abc, 8")
    assert lengths.lengths == (Decimal(5), Decimal(8))
    assert lengths.accepts(8)
    assert not lengths.accepts(6)


def test_parse_value_list_trims():
    assert parse_value_list(" a , b ,c").items == ("a", "b", "c")


def test_parse_field_list():
    assert parse_field_list("id, email", rule="required_without").fields == ("id", "email")


@pytest.mark.parametrize("raw", [None, "", "   ", ",", " , ,"])
def test_parse_field_list_requires_fields(raw):
    with pytest.raises(InvalidRuleArgument):
        parse_field_list(raw, rule="required_with")


def test_parse_field_ref_strips_name():
    assert parse_field_ref(" password ", rule="matches") == "password"


@pytest.mark.parametrize("raw", [None, "", "  "])
def test_parse_field_ref_requires_a_name(raw):
    with pytest.raises(MalformedRuleSpec, match="expected a field name"):
        parse_field_ref(raw, rule="differs")


def test_placeholder_detection():
    assert is_placeholder("{id}")
    assert not is_placeholder("5")
    assert not is_placeholder("{a b}")
    assert not is_placeholder(None)


def test_table_spec_without_filter():
    spec = parse_table_spec("users.email", rule="is_unique", filter_type=Exclude)
    assert (spec.table, spec.column, spec.row_filter) == ("users", "email", None)


def test_table_spec_exclude_pair():
    spec = parse_table_spec("users.email,id,5", rule="is_unique", filter_type=Exclude)
    assert spec.row_filter == Exclude("id", "5")


def test_table_spec_where_pair():
    spec = parse_table_spec("menu.id,active,1", rule="is_not_unique", filter_type=Where)
    assert spec.row_filter == Where("active", "1")


@pytest.mark.parametrize("param", ["users.email,id,{id}", "users.email,id", "users.email,,5", "users.email,id,"])
def test_table_spec_drops_incomplete_or_placeholder_filter(param):
    spec = parse_table_spec(param, rule="is_unique", filter_type=Exclude)
    assert spec.row_filter is None


@pytest.mark.parametrize("param", [None, "", "users", ".email", "users.", ",id,5"])
def test_table_spec_malformed(param):
    with pytest.raises(MalformedRuleSpec) as exc:
        parse_table_spec(param, rule="is_unique", filter_type=Exclude)
    assert exc.value.rule == "is_unique"
