"""Format descriptors and helpers for the sparse per-character format slots."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Optional

__all__ = ["Format", "FormatSlot", "find_format", "strip_format_type", "has_instance"]


@dataclass(frozen=True, slots=True)
class Format:
    """One markup element's tag and attributes.

    Instances are compared by value with ``==``, but every slot spanned by the
    same source element holds the *same* instance, so ``is`` tells format runs
    apart. Instances are never mutated once built.
    """

    type: str
    attributes: Optional[Mapping[str, str]] = None
    object: bool = False

    def __post_init__(self) -> None:
        if self.attributes is not None:
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __hash__(self) -> int:
        attributes = tuple(sorted(self.attributes.items())) if self.attributes is not None else None
        return hash((self.type, attributes, self.object))

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly mapping, omitting unset fields."""

        payload: dict[str, object] = {"type": self.type}
        if self.attributes is not None:
            payload["attributes"] = dict(self.attributes)
        if self.object:
            payload["object"] = True
        return payload


# ``None`` is a hole: no format applies at that position.
FormatSlot = Optional[List[Format]]


def find_format(slot: Sequence[Format] | None, format_type: str) -> Format | None:
    """Return the first entry of ``format_type`` inside ``slot``."""

    if not slot:
        return None
    for entry in slot:
        if entry.type == format_type:
            return entry
    return None


def strip_format_type(slot: Sequence[Format] | None, format_type: str) -> FormatSlot:
    """Return ``slot`` without entries of ``format_type``; an emptied slot becomes a hole."""

    if not slot:
        return None
    remaining = [entry for entry in slot if entry.type != format_type]
    return remaining or None


def has_instance(slot: Sequence[Format] | None, target: Format) -> bool:
    return bool(slot) and any(entry is target for entry in slot)
