"""Tests for inserting and removing ranges."""

from __future__ import annotations

import pytest

from richtext import Format, InvalidRangeError, Record, Selection, Value, insert, remove


def test_insert_value(one_two_three: Value, em: Format) -> None:
    strong = Format("strong")

    result = insert(one_two_three, Value("a", [[strong]]), 2, 6)

    assert result == Value("onao three", [None, None, [strong], [em]] + [None] * 6)


def test_insert_into_record_moves_caret(one_two_three: Value, em: Format) -> None:
    strong = Format("strong")
    record = Record(one_two_three, Selection(2, 6))

    result = insert(record, Record(Value("a", [[strong]])))

    assert result == Record(Value("onao three", [None, None, [strong], [em]] + [None] * 6), Selection(3, 3))


def test_insert_line_break() -> None:
    result = insert(Value.plain("test"), "\n", 2, 2)

    assert result == Value("te\nst", [None] * 5)


def test_insert_plain_text_does_not_inherit_formats() -> None:
    em = Format("em")

    result = insert(Value("ab", [[em], [em]]), "x", 1, 1)

    assert result == Value("axb", [[em], None, [em]])


def test_insert_rejects_out_of_bounds(one_two_three: Value) -> None:
    with pytest.raises(InvalidRangeError):
        insert(one_two_three, "x", 14, 14)


def test_remove_value(one_two_three: Value, em: Format) -> None:
    result = remove(one_two_three, 2, 6)

    assert result == Value("ono three", [None, None, [em]] + [None] * 6)


def test_remove_record_collapses_selection(one_two_three: Value, em: Format) -> None:
    record = Record(one_two_three, Selection(2, 6))

    result = remove(record)

    assert result == Record(Value("ono three", [None, None, [em]] + [None] * 6), Selection(2, 2))
