"""Read-dispatch loop owning one editing session."""

from __future__ import annotations

import os
import sys
from typing import Iterable, Optional, TextIO, Union

from ed_engine.buffer import Buffer, EditorState, load_buffer
from ed_engine.errors import EditorError
from ed_engine.modes import CommandMode, InsertMode, ModeBus, ModeContext, ModeResult
from ed_engine.modes.mode_manager import ModeManager
from ed_engine.runtime import telemetry
from ed_engine.runtime.settings import EditorSettings, load_settings


class Interpreter:
    """Feeds raw input lines through the command/insert state machine.

    The session ends on a successful ``q`` or when the input runs out.
    ``exit_status`` is 1 if the last command processed ended in an error.
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        state: Optional[EditorState] = None,
        output: Optional[TextIO] = None,
        diagnostics: Optional[TextIO] = None,
        settings: Optional[EditorSettings] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        self.settings = settings or load_settings()
        if buffer is None:
            buffer = Buffer(encoding=self.settings.encoding)
        if state is None:
            state = EditorState(
                current_line=buffer.line_count, verbose=self.settings.verbose
            )
        self.context = ModeContext(
            buffer=buffer,
            state=state,
            bus=bus or ModeBus(),
            output=output if output is not None else sys.stdout,
            diagnostics=diagnostics if diagnostics is not None else sys.stderr,
            settings=self.settings,
        )
        self.manager = ModeManager(self.context)
        self.manager.register_mode(CommandMode)
        self.manager.register_mode(InsertMode)
        self.finished = False
        self.last_command: Optional[ModeResult] = None

    @classmethod
    def open(
        cls,
        path: Union[str, "os.PathLike[str]"],
        *,
        output: Optional[TextIO] = None,
        diagnostics: Optional[TextIO] = None,
        settings: Optional[EditorSettings] = None,
        bus: Optional[ModeBus] = None,
    ) -> "Interpreter":
        """Start a session on ``path``.

        The file's character count is printed on success. On failure the
        session starts empty with ``Cannot open input file`` recorded as the
        last error. Either way ``path`` becomes the stored filename.
        """

        settings = settings or load_settings()
        out = output if output is not None else sys.stdout
        err = diagnostics if diagnostics is not None else sys.stderr
        try:
            buffer = load_buffer(path, encoding=settings.encoding)
        except EditorError as exc:
            err.write(f"{os.fspath(path)}: {exc.detail}\n")
            session = cls(
                Buffer(encoding=settings.encoding),
                output=out,
                diagnostics=err,
                settings=settings,
                bus=bus,
            )
            session.state.record_error(exc.kind)
        else:
            out.write(f"{buffer.character_count}\n")
            session = cls(
                buffer, output=out, diagnostics=err, settings=settings, bus=bus
            )
        session.state.filename = os.fspath(path)
        return session

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    @property
    def state(self) -> EditorState:
        return self.context.state

    @property
    def mode(self) -> str:
        active = self.manager.active_mode
        return active.name if active else ""

    @property
    def exit_status(self) -> int:
        if self.last_command is not None and self.last_command.error is not None:
            return 1
        return 0

    def feed(self, line: str) -> ModeResult:
        """Process one raw input line in whatever mode is active."""

        in_command_mode = self.mode == CommandMode.name
        result = self.manager.handle_line(line)
        if in_command_mode:
            self.last_command = result
            if result.status == "quit":
                self.finished = True
        return result

    def finish(self) -> ModeResult:
        """Signal end of input; flushes a pending insert."""

        result = self.manager.handle_eof()
        self.finished = True
        return result

    def run(self, source: Iterable[str]) -> int:
        telemetry.record_event(
            "session.start",
            data={"lines": self.buffer.line_count, "filename": self.state.filename or ""},
        )
        for line in source:
            self.feed(line)
            self.context.output.flush()
            if self.finished:
                break
        else:
            self.finish()
            self.context.output.flush()
        telemetry.record_event(
            "session.end",
            data={"exit_status": self.exit_status, "modified": self.state.modified},
        )
        return self.exit_status


__all__ = ["Interpreter"]
