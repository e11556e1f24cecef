"""Tests for built-in filters, filter pipelines and helpers."""

import logging
from datetime import datetime

import pytest

from view_engine import UnknownFilterError, UnknownHelperError, ViewEngine
from view_engine.core import filters


def test_escape():
    assert filters.escape("<a href='x'>\"&\"</a>") == (
        "&lt;a href=&#x27;x&#x27;&gt;&quot;&amp;&quot;&lt;/a&gt;"
    )
    assert filters.escape(5) == 5


def test_escape_twice_is_not_idempotent():
    """Escaping already escaped text encodes the entities again."""
    once = filters.escape("Tom & Jerry")
    twice = filters.escape(once)

    assert once == "Tom &amp; Jerry"
    assert twice == "Tom &amp;amp; Jerry"
    assert once != twice


def test_case_filters():
    assert filters.upper("ada") == "ADA"
    assert filters.lower("ADA") == "ada"
    assert filters.capitalize("hELLO wORLD") == "Hello world"
    assert filters.capitalize("") == ""
    assert filters.upper(3) == 3


def test_truncate():
    assert filters.truncate("abcdef", "3") == "abc..."
    assert filters.truncate("abcdef", "3", "!") == "abc!"
    assert filters.truncate("ab", "3") == "ab"
    assert filters.truncate("abcdef", "not-a-number") == "abcdef"
    assert filters.truncate("x" * 120) == "x" * 100 + "..."


def test_date():
    assert filters.date("2024-03-05T14:07:09", "DD/MM/YYYY HH:mm:ss") == "05/03/2024 14:07:09"
    assert filters.date(datetime(2023, 1, 2, 3, 4, 5)) == "2023-01-02 03:04:05"
    assert filters.date("not a date") == "not a date"
    assert filters.date("") == ""


def test_filter_pipeline(engine: ViewEngine):
    """Filters apply left to right with their own arguments."""
    data = {"name": "aDA", "bio": "abcdefgh"}

    assert engine.render_string("{{name|lower|capitalize}}", data) == "Ada"
    assert engine.render_string('{{bio|truncate:5,"--"}}', data) == "abcde--"
    assert engine.render_string("{{ name | upper }}", data) == "ADA"


def test_unknown_filter_passes_value_through(engine: ViewEngine):
    assert engine.render_string("{{name|nope|upper}}", {"name": "ada"}) == "ADA"


def test_unknown_filter_warn_policy(views_dir, caplog):
    engine = ViewEngine(views_path=views_dir, unknown_filter_policy="warn")

    with caplog.at_level(logging.WARNING):
        result = engine.render_string("{{name|nope}}", {"name": "ada"})

    assert result == "ada"
    assert "Unknown filter: nope" in caplog.text


def test_unknown_filter_strict_policy(views_dir):
    engine = ViewEngine(views_path=views_dir, unknown_filter_policy="strict")

    with pytest.raises(UnknownFilterError):
        engine.render_string("{{name|nope}}", {"name": "ada"})


def test_custom_filter_last_registration_wins(engine: ViewEngine):
    engine.add_filter("shout", lambda value: f"{value}!")
    engine.add_filter("shout", lambda value: f"{value}!!")

    assert engine.render_string("{{word|shout}}", {"word": "hey"}) == "hey!!"
    assert engine.apply_filter("hey", "shout") == "hey!!"


def test_builtin_filter_can_be_replaced(engine: ViewEngine):
    engine.add_filter("upper", lambda value: "replaced")

    assert engine.render_string("{{x|upper}}", {"x": "a"}) == "replaced"


def test_helper_with_literal_and_variable(engine: ViewEngine):
    """Quoted arguments are literals, bare ones are variables."""
    engine.add_helper("greet", lambda name: "Hi " + name)

    assert engine.render_string('{{greet("Alice")}}', {}) == "Hi Alice"
    assert engine.render_string("{{greet('Alice')}}", {}) == "Hi Alice"
    assert engine.render_string("{{greet(username)}}", {"username": "Bob"}) == "Hi Bob"


def test_helper_unresolved_argument_is_literal(engine: ViewEngine):
    engine.add_helper("greet", lambda name: "Hi " + name)

    assert engine.render_string("{{greet(stranger)}}", {}) == "Hi stranger"


def test_helper_arguments_and_filters(engine: ViewEngine):
    engine.add_helper("join", lambda *parts: "-".join(str(part) for part in parts))
    engine.add_helper("greet", lambda name: "Hi " + name)

    assert engine.render_string('{{join(a, "b, c", 3)}}', {"a": "x"}) == "x-b, c-3"
    assert engine.render_string('{{greet("a|b")}}', {}) == "Hi a|b"
    assert engine.render_string("{{greet(user.name)|upper}}", {"user": {"name": "ada"}}) == "HI ADA"


def test_unknown_helper_renders_empty(engine: ViewEngine):
    assert engine.render_string("[{{missing(1)}}]", {}) == "[]"
    assert engine.execute_helper("missing") == ""


def test_unknown_helper_strict_policy(views_dir):
    engine = ViewEngine(views_path=views_dir, unknown_helper_policy="strict")

    with pytest.raises(UnknownHelperError):
        engine.render_string("{{missing()}}", {})


def test_builtin_helpers(engine: ViewEngine):
    data = {"items": [1, 2, 3], "created": "2024-03-05T10:00:00"}

    assert engine.render_string("{{count(items)}}", data) == "3"
    assert engine.render_string("{{count(nothing)}}", data) == "0"
    assert engine.render_string("{{isEven(4)}}", data) == "true"
    assert engine.render_string("{{isEven(7)}}", data) == "false"
    assert engine.render_string('{{formatDate(created, "DD.MM.YYYY")}}', data) == "05.03.2024"
