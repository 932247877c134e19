"""Exceptions raised when callers break an operator's preconditions."""

from __future__ import annotations

from typing import Any, Sequence

__all__ = ["RichTextError", "InvalidRangeError", "UnsupportedValueError", "PayloadError"]


class RichTextError(RuntimeError):
    """Base class for rich-text contract violations."""

    def __init__(self, message: str, *, reason: str = "invalid") -> None:
        super().__init__(message)
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"reason": self.reason, "message": str(self)}


class InvalidRangeError(RichTextError, ValueError):
    """Raised for inverted, out-of-bounds or missing ``start``/``end`` offsets."""

    def __init__(
        self,
        message: str,
        *,
        reason: str = "out_of_bounds",
        start: int | None = None,
        end: int | None = None,
        length: int | None = None,
    ) -> None:
        super().__init__(message, reason=reason)
        self.start = start
        self.end = end
        self.length = length

    def details(self) -> dict[str, Any]:
        return {
            "reason": self.reason,
            "start": self.start,
            "end": self.end,
            "length": self.length,
        }


class UnsupportedValueError(RichTextError, TypeError):
    """Raised when an operator receives a shape it cannot handle, e.g. a multiline record."""

    def __init__(self, message: str, *, reason: str = "unsupported_type") -> None:
        super().__init__(message, reason=reason)


class PayloadError(RichTextError, ValueError):
    """Raised when a serialized payload fails schema validation or is inconsistent."""

    def __init__(self, message: str, *, errors: Sequence[str] = ()) -> None:
        super().__init__(message, reason="invalid_payload")
        self.errors = tuple(errors)

    def details(self) -> dict[str, Any]:
        return {"reason": self.reason, "errors": list(self.errors)}
