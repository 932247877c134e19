"""Applying and removing formats over a range of a value."""

from __future__ import annotations

from typing import List

from .core.formats import Format, FormatSlot, find_format, has_instance, strip_format_type
from .core.selection import Selection
from .core.value import Record, Value, check_range, holes, require_single

__all__ = ["apply_format", "remove_format"]


def apply_format(
    target: Value | Record,
    format: Format,
    start: int | None = None,
    end: int | None = None,
) -> Value | Record:
    """Apply ``format`` to every position in ``[start, end)``.

    An existing entry of the same type is replaced, and ``format`` becomes the
    innermost entry of each touched slot. On a record the bounds default to the
    selection, which is carried through unchanged.
    """

    require_single(target, "apply_format")
    if isinstance(target, Record):
        selection = target.selection
        start = selection.start if start is None else start
        end = selection.end if end is None else end
        return Record(_apply_to_value(target.value, format, start, end), Selection(selection.start, selection.end))
    return _apply_to_value(target, format, start, end)


def remove_format(
    target: Value | Record,
    format_type: str,
    start: int | None = None,
    end: int | None = None,
) -> Value | Record:
    """Remove entries of ``format_type`` between ``start`` and ``end``.

    When ``start == end`` the whole run sharing the format instance found at
    ``start`` is removed, so a caret inside a link unlinks the entire link.
    """

    require_single(target, "remove_format")
    if isinstance(target, Record):
        selection = target.selection
        start = selection.start if start is None else start
        end = selection.end if end is None else end
        return Record(
            _remove_from_value(target.value, format_type, start, end),
            Selection(selection.start, selection.end),
        )
    return _remove_from_value(target, format_type, start, end)


def _apply_to_value(value: Value, format: Format, start: int | None, end: int | None) -> Value:
    start, end = check_range(value, start, end, "apply_format")
    formats = _padded(value.formats, end)
    for index in range(start, end):
        slot = formats[index]
        if slot:
            updated = [entry for entry in slot if entry.type != format.type]
            updated.append(format)
            formats[index] = updated
        else:
            formats[index] = [format]
    return Value(text=value.text, formats=formats)


def _remove_from_value(value: Value, format_type: str, start: int | None, end: int | None) -> Value:
    start, end = check_range(value, start, end, "remove_format")
    formats = list(value.formats)

    if start != end:
        for index in range(start, min(end, len(formats))):
            if formats[index]:
                formats[index] = strip_format_type(formats[index], format_type)
        return Value(text=value.text, formats=formats)

    target = find_format(formats[start], format_type) if start < len(formats) else None
    if target is None:
        return Value(text=value.text, formats=formats)

    index = start
    while index >= 0 and has_instance(formats[index], target):
        formats[index] = strip_format_type(formats[index], format_type)
        index -= 1
    index = start + 1
    while index < len(formats) and has_instance(formats[index], target):
        formats[index] = strip_format_type(formats[index], format_type)
        index += 1
    return Value(text=value.text, formats=formats)


def _padded(formats: List[FormatSlot], length: int) -> List[FormatSlot]:
    padded = list(formats)
    if len(padded) < length:
        padded.extend(holes(length - len(padded)))
    return padded
