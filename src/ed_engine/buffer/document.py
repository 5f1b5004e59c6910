"""Line storage for ed_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .validation import ensure_insert_point, ensure_line, ensure_span


def split_lines(text: str) -> List[str]:
    """Split ``text`` into lines that keep their ``\\n`` terminator.

    A trailing fragment without a terminator becomes its own line.
    """

    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def encoded_length(lines: Iterable[str], encoding: str = "utf-8") -> int:
    """Number of bytes ``lines`` occupy once written out in ``encoding``."""

    return sum(len(line.encode(encoding, errors="surrogateescape")) for line in lines)


@dataclass(slots=True)
class BufferDocument:
    """Ordered list of lines plus a running byte total.

    Lines are stored with their terminators and never edited in place;
    ``character_count`` counts encoded bytes and is adjusted on every splice
    instead of recomputed.
    """

    _lines: List[str] = field(default_factory=list)
    character_count: int = 0
    version: int = 0
    encoding: str = "utf-8"

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, encoding: str = "utf-8"
    ) -> "BufferDocument":
        stored = list(lines)
        return cls(
            _lines=stored,
            character_count=encoded_length(stored, encoding),
            encoding=encoding,
        )

    @classmethod
    def from_text(cls, text: str, *, encoding: str = "utf-8") -> "BufferDocument":
        return cls.from_lines(split_lines(text), encoding=encoding)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def get_line(self, number: int) -> str:
        """Return line ``number`` (1-based)."""

        ensure_line(self.line_count, number)
        return self._lines[number - 1]

    def get_lines(self, start: int, end: int) -> Sequence[str]:
        """Return the inclusive 1-based span ``[start, end]``."""

        ensure_span(self.line_count, start, end)
        return tuple(self._lines[start - 1 : end])

    def insert_lines(self, after: int, new_lines: Iterable[str]) -> int:
        """Place ``new_lines`` after line ``after``; returns how many were added."""

        ensure_insert_point(self.line_count, after)
        block = list(new_lines)
        if not block:
            return 0
        self._lines[after:after] = block
        self.character_count += encoded_length(block, self.encoding)
        self.version += 1
        return len(block)

    def delete_lines(self, start: int, end: int) -> Sequence[str]:
        """Remove ``[start, end]`` and return the removed lines."""

        ensure_span(self.line_count, start, end)
        removed = tuple(self._lines[start - 1 : end])
        del self._lines[start - 1 : end]
        self.character_count -= encoded_length(removed, self.encoding)
        self.version += 1
        return removed

    def to_text(self) -> str:
        return "".join(self._lines)


__all__ = ["BufferDocument", "encoded_length", "split_lines"]
