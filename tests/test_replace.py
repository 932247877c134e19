"""Tests for pattern replacement."""

from __future__ import annotations

import re

from richtext import Format, Record, Selection, Value, replace


def test_replace_with_string_inherits_slot(one_two_three: Value, em: Format) -> None:
    result = replace(one_two_three, "two", "2")

    assert result == Value("one 2 three", [None] * 4 + [[em]] + [None] * 6)


def test_replace_with_value(one_two_three: Value) -> None:
    strong = Format("strong")

    result = replace(one_two_three, "two", Value("2", [[strong]]))

    assert result == Value("one 2 three", [None] * 4 + [[strong]] + [None] * 6)


def test_replace_with_callable_and_regex(one_two_three: Value) -> None:
    result = replace(one_two_three, re.compile(r"(\w+)"), lambda match: match.group(1).upper(), count=0)

    assert result == Value("ONE TWO THREE", one_two_three.formats)


def test_replace_defaults_to_first_match() -> None:
    assert replace(Value.plain("a a a"), "a", "b") == Value.plain("b a a")


def test_replace_all_matches() -> None:
    assert replace(Value.plain("a a a"), "a", "b", count=0) == Value.plain("b b b")


def test_replace_escapes_literal_patterns() -> None:
    assert replace(Value.plain("1+1"), "+", "-") == Value.plain("1-1")


def test_replace_without_match_keeps_value(one_two_three: Value) -> None:
    assert replace(one_two_three, "four", "4") == one_two_three


def test_replace_on_record_clears_selection(one_two_three: Value) -> None:
    record = Record(one_two_three, Selection(0, 3))

    result = replace(record, "one", "1")

    assert result.value.text == "1 two three"
    assert result.selection == Selection()
