"""Read-only questions asked of values and records."""

from __future__ import annotations

from typing import List, Union

from .core.formats import Format, find_format
from .core.value import MultilineRecord, Record, Value

__all__ = ["get_active_format", "get_selected_text", "is_empty"]


def get_active_format(record: Record | MultilineRecord, format_type: str) -> Format | None:
    """Return the ``format_type`` entry at the selection start, if any."""

    if not isinstance(record, Record):
        return None
    start = record.selection.start if record.selection is not None else None
    if start is None:
        return None
    formats = record.value.formats
    if start < 0 or start >= len(formats):
        return None
    return find_format(formats[start], format_type)


def get_selected_text(record: Record | MultilineRecord) -> str:
    """Return the selected text; multiline records have no flat selection and yield ``""``."""

    if isinstance(record, MultilineRecord):
        return ""
    selection = record.selection
    return record.value.text[selection.start : selection.end]


def is_empty(target: Union[Value, Record, MultilineRecord, List[Value]]) -> bool:
    """Return ``True`` when there is neither text nor any format slot.

    A lone object (an image, say) has no text but one slot, so it is not empty.
    """

    if isinstance(target, MultilineRecord):
        return not target.value
    if isinstance(target, list):
        return not target
    value = target.value if isinstance(target, Record) else target
    return not value.text and not value.formats
