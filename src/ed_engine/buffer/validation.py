"""Bounds checks shared by buffer operations."""

from __future__ import annotations

from typing import Optional, Tuple


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer a line number it does not hold."""

    def __init__(
        self, message: str, *, span: Optional[Tuple[int, int]] = None
    ) -> None:
        super().__init__(message)
        self.span = span


def ensure_line(line_count: int, number: int) -> int:
    if number < 1 or number > line_count:
        raise BufferValidationError("Line out of range", span=(number, number))
    return number


def ensure_span(line_count: int, start: int, end: int) -> Tuple[int, int]:
    if start < 1 or end > line_count or start > end:
        raise BufferValidationError("Span out of range", span=(start, end))
    return start, end


def ensure_insert_point(line_count: int, after: int) -> int:
    # 0 addresses the gap before the first line.
    if after < 0 or after > line_count:
        raise BufferValidationError("Insert point out of range", span=(after, after))
    return after


__all__ = [
    "BufferValidationError",
    "ensure_line",
    "ensure_span",
    "ensure_insert_point",
]
