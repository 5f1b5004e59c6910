"""Session-level commands: write, quit, help, and the unknown-command fallback."""

from __future__ import annotations

from ed_engine.addressing import (
    LineRange,
    ParsedCommand,
    ensure_addressless,
    ensure_filename_suffix,
    ensure_no_range_set,
    ensure_range_valid,
)
from ed_engine.buffer import write_buffer
from ed_engine.errors import EditorError, ErrorKind
from ed_engine.modes.base_mode import ModeContext, ModeResult


def write_file(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    """Persist the buffer to the named file, or to the stored filename.

    The first name ever written to becomes the stored filename.
    """

    filename = ensure_filename_suffix(command)
    if line_range.explicit:
        ensure_range_valid(line_range, context.buffer.line_count)
        ensure_no_range_set(line_range)

    state = context.state
    target = filename or state.filename
    if target is None:
        raise EditorError(ErrorKind.NO_CURRENT_FILENAME)

    try:
        written = write_buffer(context.buffer, target, encoding=context.settings.encoding)
    except EditorError as exc:
        context.diagnostics.write(f"{target}: {exc.detail}\n")
        raise

    context.emit_line(str(written))
    state.mark_saved()
    if state.filename is None:
        state.filename = target
    context.bus.emit("command.write", {"filename": target, "bytes": written})
    return ModeResult(consumed=True, status="write", message=target)


def quit_session(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    ensure_addressless(command, line_range, context.buffer.line_count)

    state = context.state
    if state.modified and not state.quit_pending:
        state.quit_pending = True
        raise EditorError(ErrorKind.MODIFIED_BUFFER_WARNING)

    context.bus.emit("command.quit", {"modified": state.modified})
    return ModeResult(consumed=True, status="quit", message="quit")


def show_help(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    ensure_addressless(command, line_range, context.buffer.line_count)

    last_error = context.state.last_error
    if last_error is not None:
        context.emit_line(last_error.message)
    return ModeResult(consumed=True, status="help")


def toggle_help(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    ensure_addressless(command, line_range, context.buffer.line_count)

    state = context.state
    verbose = state.toggle_verbose()
    if verbose and state.last_error is not None:
        context.emit_line(state.last_error.message)
    return ModeResult(
        consumed=True, status="help_mode", message="on" if verbose else "off"
    )


def unknown_command(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    del command
    if line_range.explicit:
        ensure_range_valid(line_range, context.buffer.line_count)
    raise EditorError(ErrorKind.UNKNOWN_COMMAND)


__all__ = [
    "quit_session",
    "show_help",
    "toggle_help",
    "unknown_command",
    "write_file",
]
