"""Core rich-text types: formats, values, records and selections."""

from .formats import Format, FormatSlot, find_format
from .selection import PathSelection, Selection
from .value import MultilineRecord, Record, Value

__all__ = [
    "Format",
    "FormatSlot",
    "find_format",
    "Selection",
    "PathSelection",
    "Value",
    "Record",
    "MultilineRecord",
]
