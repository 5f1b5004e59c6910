"""Base classes and shared plumbing for interpreter modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, TextIO

from ed_engine.buffer import Buffer, EditorState
from ed_engine.errors import ErrorKind
from ed_engine.runtime.settings import EditorSettings


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_line``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    error: Optional[ErrorKind] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    state: EditorState
    bus: "ModeBus"
    output: TextIO
    diagnostics: TextIO
    settings: EditorSettings = field(default_factory=EditorSettings)
    extras: Dict[str, object] = field(default_factory=dict)

    def emit_line(self, text: str) -> None:
        """Write ``text`` to the output, adding a terminator only if it lacks one."""

        self.output.write(text if text.endswith("\n") else f"{text}\n")


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all interpreter modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_line(
        self, line: str
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_eof(self) -> ModeResult:
        """Invoked by the manager when the input stream runs dry."""

        return ModeResult(consumed=False, status="eof")
