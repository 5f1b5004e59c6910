"""Parse one command line and dispatch it to the matching handler."""

from __future__ import annotations

from typing import Callable, Dict

from ed_engine.addressing import LineRange, ParsedCommand, parse_command, resolve_range
from ed_engine.modes.base_mode import ModeContext, ModeResult
from ed_engine.runtime import telemetry

from .core import begin_insert, delete_lines, print_lines, print_numbered
from .session import quit_session, show_help, toggle_help, unknown_command, write_file

CommandHandler = Callable[[ModeContext, ParsedCommand, LineRange], ModeResult]


def execute_command_line(context: ModeContext, raw: str) -> ModeResult:
    """Run ``raw`` as one command; ``EditorError`` escapes on failure."""

    command = parse_command(raw)
    line_range = resolve_range(
        command,
        current_line=context.state.current_line,
        line_count=context.buffer.line_count,
    )
    handler = _COMMAND_HANDLERS.get(command.letter, unknown_command)
    with telemetry.span(
        f"command::{_label(command.letter)}",
        component="commands",
        metadata={
            "start": line_range.start,
            "end": line_range.end,
            "explicit": line_range.explicit,
        },
    ):
        return handler(context, command, line_range)


def _label(letter: str) -> str:
    if not letter:
        return "newline"
    return letter if letter.isprintable() else repr(letter)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "": print_lines,
    "p": print_lines,
    "n": print_numbered,
    "i": begin_insert,
    "d": delete_lines,
    "w": write_file,
    "q": quit_session,
    "h": show_help,
    "H": toggle_help,
}


__all__ = ["CommandHandler", "execute_command_line"]
