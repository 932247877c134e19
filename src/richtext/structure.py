"""Structural operators: slicing, splitting, joining and splicing values.

Every operator takes either a bare :class:`Value` or a :class:`Record` and
returns the same shape. Results get fresh slot lists; slot lists and format
instances that are not modified are shared with the input.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Union

from .core.formats import FormatSlot
from .core.selection import Selection
from .core.value import Record, Value, as_value, check_range, require_single
from .errors import InvalidRangeError

__all__ = ["concat", "join", "slice", "split", "insert", "remove", "replace"]

Replacement = Union[str, Value, Record, Callable[["re.Match[str]"], Union[str, Value, Record]]]


def concat(first: Value | Record, *others: Value | Record) -> Value | Record:
    """Concatenate values in argument order.

    When ``first`` is a record its selection is carried over untouched; it is
    not adjusted to the combined text.
    """

    require_single(first, "concat")
    head = as_value(first)
    text = head.text
    formats: List[FormatSlot] = list(head.formats)
    for item in others:
        value = as_value(item)
        text += value.text
        formats.extend(value.formats)
    combined = Value(text=text, formats=formats)
    if isinstance(first, Record):
        return Record(combined, Selection(first.selection.start, first.selection.end))
    return combined


def join(values: Iterable[Value | Record], separator: Value | str = "") -> Value:
    """Join ``values`` with ``separator`` between each adjacent pair."""

    items = list(values)
    if not items:
        return Value()
    glue = Value.plain(separator) if isinstance(separator, str) else as_value(separator)
    head = as_value(items[0])
    text = head.text
    formats: List[FormatSlot] = list(head.formats)
    for item in items[1:]:
        value = as_value(item)
        text += glue.text + value.text
        formats.extend(glue.formats)
        formats.extend(value.formats)
    return Value(text=text, formats=formats)


def slice(target: Value | Record, start: int | None = None, end: int | None = None) -> Value | Record:
    """Return the part of ``target`` between ``start`` and ``end``.

    A record defaults to its selection and is returned as is when the selection
    has no bounds; otherwise the slice comes back with an empty selection.
    """

    require_single(target, "slice")
    if isinstance(target, Record):
        start = target.selection.start if start is None else start
        end = target.selection.end if end is None else end
        if start is None or end is None:
            return target
        return Record(_slice_value(target.value, start, end), Selection())
    value = target
    return _slice_value(value, 0 if start is None else start, value.length if end is None else end)


def split(
    target: Value | Record,
    separator_or_start: str | int | None = None,
    end: int | None = None,
) -> List[Value] | List[Record]:
    """Split ``target`` either on a literal separator or around ``[start, end)``.

    With offsets the span between them is cut out and two halves are returned;
    a record's second half gets a caret at its start. With a separator every
    piece is returned and a record's selection is remapped onto the pieces it
    touches.
    """

    require_single(target, "split")
    if isinstance(separator_or_start, str):
        return _split_by_separator(target, separator_or_start)

    start = separator_or_start
    if isinstance(target, Record):
        start = target.selection.start if start is None else start
        end = target.selection.end if end is None else end
        before, after = _split_value_at(target.value, start, end)
        return [Record(before, Selection()), Record(after, Selection.caret(0))]
    before, after = _split_value_at(target, start, end)
    return [before, after]


def insert(
    target: Value | Record,
    to_insert: Value | Record | str,
    start: int | None = None,
    end: int | None = None,
) -> Value | Record:
    """Replace ``[start, end)`` of ``target`` with ``to_insert``.

    A record defaults to its selection and ends with a caret after the inserted
    text.
    """

    require_single(target, "insert")
    insertion = as_value(to_insert)
    if isinstance(target, Record):
        start = target.selection.start if start is None else start
        end = target.selection.end if end is None else end
        value = _insert_value(target.value, insertion, start, end)
        return Record(value, Selection.caret(start + len(insertion.text)))
    return _insert_value(target, insertion, start, end)


def remove(target: Value | Record, start: int | None = None, end: int | None = None) -> Value | Record:
    """Delete ``[start, end)`` from ``target``."""

    return insert(target, Value(), start, end)


def replace(
    target: Value | Record,
    pattern: str | re.Pattern[str],
    replacement: Replacement,
    count: int = 1,
) -> Value | Record:
    """Substitute matches of ``pattern`` from left to right.

    ``pattern`` is a literal string or a compiled regular expression. A string
    replacement inherits the slot found at the start of the match; a value
    replacement brings its own formats. ``replacement`` may also be a callable
    receiving the :class:`re.Match`. ``count`` caps the substitutions and
    ``0`` replaces every match. A record comes back with an empty selection.
    """

    require_single(target, "replace")
    if isinstance(target, Record):
        return Record(_replace_value(target.value, pattern, replacement, count), Selection())
    return _replace_value(target, pattern, replacement, count)


def _slice_value(value: Value, start: int, end: int) -> Value:
    start, end = check_range(value, start, end, "slice")
    return Value(text=value.text[start:end], formats=value.formats[start:end])


def _split_value_at(value: Value, start: int | None, end: int | None) -> tuple[Value, Value]:
    start, end = check_range(value, start, end, "split")
    return (
        Value(text=value.text[:start], formats=value.formats[:start]),
        Value(text=value.text[end:], formats=value.formats[end:]),
    )


def _split_value_by(value: Value, separator: str) -> List[Value]:
    if not separator:
        raise InvalidRangeError("split separator must not be empty", reason="empty_separator")
    pieces: List[Value] = []
    next_start = 0
    for substring in value.text.split(separator):
        start = next_start
        next_start += len(substring) + len(separator)
        pieces.append(Value(text=substring, formats=value.formats[start : start + len(substring)]))
    return pieces


def _split_by_separator(target: Value | Record, separator: str) -> List[Value] | List[Record]:
    if isinstance(target, Value):
        return _split_value_by(target, separator)

    selection = target.selection
    records: List[Record] = []
    next_start = 0
    for piece in _split_value_by(target.value, separator):
        start = next_start
        next_start += len(piece.text) + len(separator)
        records.append(Record(piece, _remap_selection(selection, start, next_start, len(piece.text))))
    return records


def _remap_selection(selection: Selection, start: int, next_start: int, length: int) -> Selection:
    """Project ``selection`` onto the piece spanning ``[start, next_start)``."""

    local = Selection()
    sel_start, sel_end = selection.start, selection.end
    spans = sel_start is not None and sel_end is not None

    if sel_start is not None and start < sel_start < next_start:
        local.start = sel_start - start
    elif spans and sel_start < start < sel_end:
        local.start = 0

    if sel_end is not None and start < sel_end < next_start:
        local.end = sel_end - start
    elif spans and sel_start < next_start < sel_end:
        local.end = length

    return local


def _insert_value(value: Value, insertion: Value, start: int | None, end: int | None) -> Value:
    start, end = check_range(value, start, end, "insert")
    formats = list(value.formats)
    formats[start:end] = insertion.formats
    return Value(text=value.text[:start] + insertion.text + value.text[end:], formats=formats)


def _replace_value(value: Value, pattern: str | re.Pattern[str], replacement: Replacement, count: int) -> Value:
    regex = re.compile(re.escape(pattern)) if isinstance(pattern, str) else pattern
    source_text = value.text
    source_formats = value.formats
    text_parts: List[str] = []
    formats: List[FormatSlot] = []
    cursor = 0

    for number, match in enumerate(regex.finditer(source_text)):
        if count and number >= count:
            break
        offset = match.start()
        produced = replacement(match) if callable(replacement) else replacement
        if isinstance(produced, (Value, Record)):
            produced_value = as_value(produced)
            new_text = produced_value.text
            new_formats = list(produced_value.formats)
        else:
            new_text = str(produced)
            inherited = source_formats[offset] if offset < len(source_formats) else None
            new_formats = [inherited] * len(new_text)
        text_parts.append(source_text[cursor:offset])
        text_parts.append(new_text)
        formats.extend(source_formats[cursor:offset])
        formats.extend(new_formats)
        cursor = match.end()

    text_parts.append(source_text[cursor:])
    formats.extend(source_formats[cursor:])
    return Value(text="".join(text_parts), formats=formats)
