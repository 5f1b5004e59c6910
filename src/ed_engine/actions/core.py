"""Line operations: print, numbered print, insert, delete."""

from __future__ import annotations

from ed_engine.addressing import (
    LineRange,
    ParsedCommand,
    ensure_no_suffix,
    ensure_range_valid,
)
from ed_engine.modes.base_mode import ModeContext, ModeResult
from ed_engine.modes.insert_mode import INSERT_TARGET


def print_lines(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    # A bare terminator with no address steps to the next line.
    if not command.letter and not line_range.explicit:
        line_range = LineRange(line_range.start + 1, line_range.end + 1)
    ensure_no_suffix(command)
    ensure_range_valid(line_range, context.buffer.line_count)

    for _, line in context.buffer.iter_range(line_range.start, line_range.end):
        context.output.write(line)
    context.state.current_line = line_range.end
    return ModeResult(consumed=True, status="print")


def print_numbered(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    ensure_no_suffix(command)
    ensure_range_valid(line_range, context.buffer.line_count)

    for number, line in context.buffer.iter_range(line_range.start, line_range.end):
        context.output.write(f"{number}\t{line}")
    context.state.current_line = line_range.end
    return ModeResult(consumed=True, status="print_numbered")


def begin_insert(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    """Validate the insertion point and hand over to insert mode.

    With a range, the second address is the one that counts.
    """

    ensure_no_suffix(command)
    ensure_range_valid(line_range, context.buffer.line_count, allow_zero=True)
    context.extras[INSERT_TARGET] = line_range.end
    return ModeResult(
        consumed=True, switch_to="insert", status="insert", message="enter_insert"
    )


def delete_lines(
    context: ModeContext, command: ParsedCommand, line_range: LineRange
) -> ModeResult:
    ensure_no_suffix(command)
    buffer = context.buffer
    ensure_range_valid(line_range, buffer.line_count)

    at_end = line_range.end == buffer.line_count
    delta = buffer.splice_delete(line_range.start, line_range.end)
    state = context.state
    state.mark_modified()
    if delta.line_count == 0:
        state.current_line = 0
    elif at_end:
        state.current_line = delta.line_count
    else:
        state.current_line = line_range.start
    return ModeResult(consumed=True, status="delete", message=str(delta.count))


__all__ = ["begin_insert", "delete_lines", "print_lines", "print_numbered"]
