"""Values and records: text paired with aligned sparse format slots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from ..errors import InvalidRangeError, UnsupportedValueError
from .formats import FormatSlot
from .selection import PathSelection, Selection

__all__ = [
    "Value",
    "Record",
    "MultilineRecord",
    "AnyRecord",
    "ValueLike",
    "holes",
    "as_value",
    "require_single",
    "check_range",
]


@dataclass(slots=True)
class Value:
    """Styled text: ``text`` plus one format slot per position.

    A slot is ``None`` (a hole) when no format applies. Object formats occupy a
    slot without contributing a character, so ``formats`` may run longer than
    ``text``.
    """

    text: str = ""
    formats: List[FormatSlot] = field(default_factory=list)

    @classmethod
    def plain(cls, text: str) -> Value:
        """Return an unformatted value for ``text``."""

        return cls(text=text, formats=holes(len(text)))

    @property
    def length(self) -> int:
        """Return the addressable length (text or slots, whichever is longer)."""

        return max(len(self.text), len(self.formats))

    def copy(self) -> Value:
        """Return a shallow copy with a fresh slot list; slots and formats are shared."""

        return Value(text=self.text, formats=list(self.formats))


@dataclass(slots=True)
class Record:
    """A single-block value together with its selection."""

    value: Value = field(default_factory=Value)
    selection: Selection = field(default_factory=Selection)


@dataclass(slots=True)
class MultilineRecord:
    """A sequence of block values with path-addressed selection."""

    value: List[Value] = field(default_factory=list)
    selection: PathSelection = field(default_factory=PathSelection)


AnyRecord = Union[Record, MultilineRecord]
ValueLike = Union[Value, Record]


def holes(count: int) -> List[FormatSlot]:
    return [None] * count


def as_value(item: Value | Record | str) -> Value:
    """Return the single-block value carried by ``item``."""

    if isinstance(item, Value):
        return item
    if isinstance(item, Record):
        return item.value
    if isinstance(item, str):
        return Value.plain(item)
    if isinstance(item, MultilineRecord):
        raise UnsupportedValueError("Multiline records are not supported here", reason="multiline_value")
    raise UnsupportedValueError(f"Expected a Value or Record, got {type(item).__name__}")


def require_single(target: object, operation: str) -> None:
    if isinstance(target, MultilineRecord) or isinstance(target, list):
        raise UnsupportedValueError(
            f"{operation} only supports single-block values", reason="multiline_value"
        )
    if not isinstance(target, (Value, Record)):
        raise UnsupportedValueError(f"{operation} expects a Value or Record, got {type(target).__name__}")


def check_range(value: Value, start: int | None, end: int | None, operation: str) -> tuple[int, int]:
    """Validate ``start``/``end`` against ``value`` and return them."""

    if start is None or end is None:
        raise InvalidRangeError(
            f"{operation} requires start and end offsets",
            reason="missing_bounds",
            start=start,
            end=end,
            length=value.length,
        )
    if start > end:
        raise InvalidRangeError(
            f"{operation} start ({start}) is after end ({end})",
            reason="inverted_range",
            start=start,
            end=end,
            length=value.length,
        )
    if start < 0 or end > value.length:
        raise InvalidRangeError(
            f"{operation} range {start}..{end} is outside 0..{value.length}",
            reason="out_of_bounds",
            start=start,
            end=end,
            length=value.length,
        )
    return start, end
