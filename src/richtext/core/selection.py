"""Selection addressing for single-block and multiline records."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Tuple

__all__ = ["Selection", "PathSelection", "Path"]

Path = Tuple[int, ...]


@dataclass(slots=True)
class Selection:
    """Character offsets into a single block; ``None`` means no known boundary."""

    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def is_set(self) -> bool:
        """Return ``True`` when both boundaries are known."""

        return self.start is not None and self.end is not None

    @property
    def is_collapsed(self) -> bool:
        """Return ``True`` when the selection is a caret."""

        return self.is_set and self.start == self.end

    def to_dict(self) -> dict[str, int]:
        """Return the known boundaries as a mapping."""

        payload: dict[str, int] = {}
        if self.start is not None:
            payload["start"] = self.start
        if self.end is not None:
            payload["end"] = self.end
        return payload

    @classmethod
    def caret(cls, offset: int) -> Selection:
        """Return a collapsed selection at ``offset``."""

        return cls(offset, offset)

    @classmethod
    def from_value(cls, value: Any) -> Selection:
        """Coerce a mapping, pair or selection-like object into a :class:`Selection`."""

        if isinstance(value, Selection):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls(_coerce_offset(value.get("start"), "start"), _coerce_offset(value.get("end"), "end"))
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Selection sequences must have exactly two entries")
            return cls(_coerce_offset(seq[0], "start"), _coerce_offset(seq[1], "end"))
        start = getattr(value, "start", None)
        end = getattr(value, "end", None)
        if start is not None or end is not None:
            return cls(_coerce_offset(start, "start"), _coerce_offset(end, "end"))
        raise TypeError("Unsupported Selection input")


@dataclass(slots=True)
class PathSelection:
    """Boundaries inside a multiline record.

    A path is ``(block_index,)`` for a boundary on a block edge, or
    ``(block_index, offset)`` for a boundary inside that block's text.
    """

    start: Optional[Path] = None
    end: Optional[Path] = None

    def to_dict(self) -> dict[str, list[int]]:
        payload: dict[str, list[int]] = {}
        if self.start is not None:
            payload["start"] = list(self.start)
        if self.end is not None:
            payload["end"] = list(self.end)
        return payload

    @classmethod
    def from_value(cls, value: Any) -> PathSelection:
        if isinstance(value, PathSelection):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls(_coerce_path(value.get("start")), _coerce_path(value.get("end")))
        raise TypeError("Unsupported PathSelection input")


def _coerce_offset(value: Any, label: str) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Selection {label} must be an integer") from exc
    if number < 0:
        raise ValueError(f"Selection {label} must not be negative")
    return number


def _coerce_path(value: Any) -> Path | None:
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError("Selection paths must be sequences of integers")
    path = tuple(int(part) for part in value)
    if len(path) not in (1, 2):
        raise ValueError("Selection paths hold a block index and an optional offset")
    return path
