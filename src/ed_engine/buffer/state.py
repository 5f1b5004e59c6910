"""Session state threaded through every command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ed_engine.errors import ErrorKind


@dataclass(slots=True)
class EditorState:
    """Current line, error bookkeeping, and save/quit tracking for one session."""

    current_line: int = 0
    verbose: bool = False
    last_error: Optional[ErrorKind] = None
    modified: bool = False
    quit_pending: bool = False
    filename: Optional[str] = None

    def record_error(self, kind: ErrorKind) -> None:
        self.last_error = kind

    def mark_modified(self) -> None:
        self.modified = True

    def mark_saved(self) -> None:
        self.modified = False

    def toggle_verbose(self) -> bool:
        self.verbose = not self.verbose
        return self.verbose
