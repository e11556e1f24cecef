"""Tests for variable resolution, argument parsing and value handling."""

from view_engine.core.arguments import parse_args, split_quoted
from view_engine.core.resolver import resolve
from view_engine.core.values import (
    UNDEFINED,
    is_truthy,
    loose_equals,
    strict_equals,
    stringify,
)


def test_resolve_simple_and_dotted_paths():
    """Test direct and nested lookups."""
    context = {"name": "Ada", "user": {"address": {"city": "London"}}}

    assert resolve("name", context) == "Ada"
    assert resolve("user.address.city", context) == "London"
    assert resolve("user.phone", context) is UNDEFINED
    assert resolve("missing", context) is UNDEFINED


def test_resolve_stops_at_non_mapping():
    """A scalar in the middle of a path ends resolution."""
    context = {"a": {"b": 5}, "none": None}

    assert resolve("a.b.c", context) is UNDEFINED
    assert resolve("none.x", context) is UNDEFINED


def test_resolve_has_no_index_syntax():
    assert resolve("items.0", {"items": ["x", "y"]}) is UNDEFINED


def test_resolve_distinguishes_null_from_missing():
    assert resolve("value", {"value": None}) is None
    assert resolve("value", {}) is UNDEFINED


def test_parse_args_respects_quotes():
    """Commas inside quotes do not split arguments."""
    assert parse_args('a, "b, c", d') == ["a", "b, c", "d"]
    assert parse_args("'x', \"y\"") == ["x", "y"]
    assert parse_args("10") == ["10"]
    assert parse_args("") == []


def test_parse_args_single_quote_state():
    """Only the opening quote character closes a quoted span."""
    assert parse_args("'it\"s, fine', x") == ['it"s, fine', "x"]


def test_parse_args_unterminated_quote():
    """An unterminated quote runs to the end without raising."""
    assert parse_args('"open, never closed') == ['"open, never closed']


def test_split_quoted_on_pipes():
    assert split_quoted('greet("a|b")|upper', "|") == ['greet("a|b")', "upper"]


def test_truthiness():
    """Empty string, zero, null, undefined and False are falsy."""
    for value in ("", 0, 0.0, None, UNDEFINED, False, float("nan")):
        assert not is_truthy(value)
    for value in ("0", "false", 1, -1, True, [], {}, [0]):
        assert is_truthy(value)


def test_loose_equality():
    assert loose_equals(1, "1")
    assert loose_equals("1.0", 1)
    assert loose_equals(True, 1)
    assert loose_equals(None, UNDEFINED)
    assert not loose_equals(None, 0)
    assert not loose_equals("a", "b")
    assert not loose_equals(2, "two")


def test_strict_equality():
    assert strict_equals(1, 1.0)
    assert strict_equals("a", "a")
    assert not strict_equals(1, "1")
    assert not strict_equals(True, 1)
    assert not strict_equals(None, UNDEFINED)


def test_stringify():
    assert stringify("text") == "text"
    assert stringify(None) == ""
    assert stringify(True) == "true"
    assert stringify(2.0) == "2"
    assert stringify(2.5) == "2.5"
    assert stringify(["a", "b"]) == '["a","b"]'
    assert stringify({"k": 1}) == '{"k":1}'
