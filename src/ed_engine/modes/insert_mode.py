"""Insert mode: collect raw lines until a lone ``.``."""

from __future__ import annotations

from typing import List

from ed_engine.addressing import strip_terminator
from ed_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult

INSERT_TARGET = "insert_target"
END_OF_INPUT = "."


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("ed_engine.modes.insert")
        self._collected: List[str] = []
        self._target = 0

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._collected.clear()
        target = self.context.extras.pop(INSERT_TARGET, self.context.state.current_line)
        self._target = int(target)  # type: ignore[call-overload]

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._collected.clear()

    def handle_line(self, line: str) -> ModeResult:
        if strip_terminator(line) == END_OF_INPUT:
            added = self._commit()
            return ModeResult(
                consumed=True,
                switch_to="command",
                status="insert_done",
                message=str(added),
            )
        self._collected.append(line)
        return ModeResult(consumed=True, status="collecting")

    def handle_eof(self) -> ModeResult:
        # Running out of input ends collection like a terminator would.
        added = self._commit()
        return ModeResult(
            consumed=True, switch_to="command", status="eof", message=str(added)
        )

    def _commit(self) -> int:
        lines, self._collected = self._collected, []
        state = self.context.state
        # Address 0 and address 1 both insert at the head of the buffer.
        before = self._target if self._target > 0 else 1
        if not lines:
            state.current_line = self._target
            return 0
        self.context.buffer.splice_insert(before - 1, lines)
        state.mark_modified()
        state.current_line = before + len(lines) - 1
        self.context.bus.emit("insert.commit", {"line": before, "count": len(lines)})
        return len(lines)
