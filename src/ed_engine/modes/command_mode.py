"""Command mode: one input line is one command attempt."""

from __future__ import annotations

from ed_engine.actions import command as command_actions
from ed_engine.errors import EditorError
from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class CommandMode(Mode):
    name = "command"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("ed_engine.modes.command")

    def handle_line(self, line: str) -> ModeResult:
        try:
            result = command_actions.execute_command_line(self.context, line)
        except EditorError as exc:
            return self._report(exc)

        if result.status != "quit":
            self.context.state.quit_pending = False
        self.context.bus.emit("command.done", result.status)
        return result

    def _report(self, exc: EditorError) -> ModeResult:
        state = self.context.state
        state.record_error(exc.kind)
        self.context.emit_line("?")
        if state.verbose:
            self.context.emit_line(exc.kind.message)
        self.context.bus.emit("command.error", exc.kind)
        telemetry.record_event(
            "command.error",
            level="warning",
            data={"kind": exc.kind.name, "detail": exc.detail or ""},
            logger_name="ed_engine.modes.command",
        )
        return ModeResult(
            consumed=True,
            status="error",
            message=exc.kind.message,
            error=exc.kind,
        )
