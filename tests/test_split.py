"""Tests for splitting and joining values."""

from __future__ import annotations

import pytest

from richtext import Format, InvalidRangeError, Record, Selection, Value, join, split


def test_split_record_at_offsets(one_two_three: Value, em: Format) -> None:
    record = Record(one_two_three, Selection(5, 10))

    result = split(record, 6, 6)

    assert result == [
        Record(Value("one tw", [None, None, None, None, [em], [em]]), Selection()),
        Record(Value("o three", [[em]] + [None] * 6), Selection(0, 0)),
    ]


def test_split_record_cuts_out_selection(one_two_three: Value) -> None:
    record = Record(one_two_three, Selection(4, 7))

    before, after = split(record)

    assert before == Record(Value("one ", [None] * 4), Selection())
    assert after == Record(Value(" three", [None] * 6), Selection(0, 0))


def test_split_value_at_offsets(one_two_three: Value) -> None:
    before, after = split(one_two_three, 4, 7)

    assert before == Value("one ", [None] * 4)
    assert after == Value(" three", [None] * 6)


def test_split_by_separator_remaps_selection(one_two_three: Value, em: Format) -> None:
    record = Record(one_two_three, Selection(6, 11))

    result = split(record, " ")

    assert result == [
        Record(Value("one", [None] * 3), Selection()),
        Record(Value("two", [[em]] * 3), Selection(2, 3)),
        Record(Value("three", [None] * 5), Selection(0, 3)),
    ]


def test_split_value_by_separator_shares_formats(one_two_three: Value, em: Format) -> None:
    pieces = split(one_two_three, " ")

    assert [piece.text for piece in pieces] == ["one", "two", "three"]
    assert pieces[1].formats == [[em]] * 3
    assert pieces[1].formats[0][0] is em


def test_split_by_missing_separator_returns_whole_value(one_two_three: Value) -> None:
    assert split(one_two_three, "|") == [one_two_three]


def test_split_rejects_empty_separator(one_two_three: Value) -> None:
    with pytest.raises(InvalidRangeError) as excinfo:
        split(one_two_three, "")

    assert excinfo.value.reason == "empty_separator"


def test_split_rejects_out_of_bounds(one_two_three: Value) -> None:
    with pytest.raises(InvalidRangeError):
        split(one_two_three, 2, 30)


def test_join_reverses_split(one_two_three: Value) -> None:
    assert join(split(one_two_three, " "), " ") == one_two_three


def test_join_with_formatted_separator() -> None:
    strong = Format("strong")
    separator = Value("|", [[strong]])

    result = join([Value.plain("a"), Record(Value.plain("b"))], separator)

    assert result == Value("a|b", [None, [strong], None])


def test_join_empty_list() -> None:
    assert join([]) == Value()
    assert join([], ", ") == Value()


def test_split_by_separator_across_many_pieces() -> None:
    record = Record(Value.plain("one two three four five"), Selection(6, 16))

    pieces = split(record, " ")

    assert [piece.selection for piece in pieces] == [
        Selection(),
        Selection(2, 3),
        Selection(0, 5),
        Selection(0, 2),
        Selection(),
    ]
    assert join(pieces, " ").text == "one two three four five"
