"""Error kinds surfaced by the interpreter."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Every condition a command can end in, valued by its user message."""

    INVALID_ADDRESS = "Invalid address"
    UNEXPECTED_ADDRESS = "Unexpected address"
    INVALID_COMMAND_SUFFIX = "Invalid command suffix"
    UNKNOWN_COMMAND = "Unknown command"
    NO_CURRENT_FILENAME = "No current filename"
    CANNOT_OPEN_INPUT_FILE = "Cannot open input file"
    CANNOT_OPEN_OUTPUT_FILE = "Cannot open output file"
    MODIFIED_BUFFER_WARNING = "Warning: buffer modified"

    @property
    def message(self) -> str:
        return self.value


class EditorError(RuntimeError):
    """Raised by validators and collaborators; aborts the current command only."""

    def __init__(self, kind: ErrorKind, *, detail: Optional[str] = None) -> None:
        super().__init__(kind.message if detail is None else f"{kind.message}: {detail}")
        self.kind = kind
        self.detail = detail


__all__ = ["ErrorKind", "EditorError"]
