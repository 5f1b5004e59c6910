"""Buffer façade: 1-based line access and transactional splices."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, Iterator, Optional, Sequence, Tuple

from ed_engine.runtime import telemetry

from .document import BufferDocument


@dataclass(slots=True)
class BufferDelta:
    version: int
    label: str
    start: int
    count: int
    line_count: int
    character_count: int


class Buffer:
    def __init__(
        self,
        *,
        name: str = "main",
        document: Optional[BufferDocument] = None,
        encoding: str = "utf-8",
    ) -> None:
        self.name = name
        self.document = document or BufferDocument(encoding=encoding)

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, name: str = "main", encoding: str = "utf-8"
    ) -> "Buffer":
        return cls(name=name, document=BufferDocument.from_lines(lines, encoding=encoding))

    @classmethod
    def from_text(
        cls, text: str, *, name: str = "main", encoding: str = "utf-8"
    ) -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text, encoding=encoding))

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def character_count(self) -> int:
        return self.document.character_count

    def snapshot(self) -> Sequence[str]:
        return self.document.snapshot()

    def line_at(self, number: int) -> str:
        return self.document.get_line(number)

    def iter_range(self, start: int, end: int) -> Iterator[Tuple[int, str]]:
        """Yield ``(number, line)`` pairs for the inclusive span."""

        for offset, line in enumerate(self.document.get_lines(start, end)):
            yield start + offset, line

    def splice_insert(self, after: int, lines: Iterable[str]) -> BufferDelta:
        block = list(lines)
        with Transaction(self, "splice_insert"):
            added = self.document.insert_lines(after, block)
        return self._delta("splice_insert", after + 1, added)

    def splice_delete(self, start: int, end: int) -> BufferDelta:
        with Transaction(self, "splice_delete"):
            removed = self.document.delete_lines(start, end)
        return self._delta("splice_delete", start, len(removed))

    def to_text(self) -> str:
        return self.document.to_text()

    def to_bytes(self, encoding: Optional[str] = None) -> bytes:
        return self.to_text().encode(
            encoding or self.document.encoding, errors="surrogateescape"
        )

    def _delta(self, label: str, start: int, count: int) -> BufferDelta:
        return BufferDelta(
            version=self.document.version,
            label=label,
            start=start,
            count=count,
            line_count=self.line_count,
            character_count=self.character_count,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Profiles one buffer mutation.

    Document splices validate before touching storage, so a failed splice
    leaves ``line_count`` and ``character_count`` as they were.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_version = 0

    def __enter__(self) -> "Transaction":
        self._before_version = self.buffer.document.version
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self.buffer.document.version != self._before_version:
            telemetry.record_event(
                "buffer.changed",
                level="debug",
                data={
                    "buffer": self.buffer.name,
                    "label": self.label,
                    "lines": self.buffer.line_count,
                },
            )
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
