"""Resolve parsed addresses to line numbers and validate them per command."""

from __future__ import annotations

from typing import Optional

from ed_engine.errors import EditorError, ErrorKind

from .models import (
    CURRENT,
    LAST,
    AddressPart,
    LineRange,
    NoAddress,
    ParsedCommand,
    SingleAddress,
)


def resolve_part(part: AddressPart, *, current_line: int, line_count: int) -> int:
    """``.`` is the current line, ``$`` the last; negatives count back from ``.``."""

    if part == CURRENT:
        return current_line
    if part == LAST:
        return line_count
    value = int(part)
    if value < 0:
        return current_line + value
    return value


def resolve_range(
    command: ParsedCommand, *, current_line: int, line_count: int
) -> LineRange:
    """Turn the command's address into numbers; no bounds are checked here.

    Without an address the range collapses to the current line.
    """

    address = command.address
    if isinstance(address, NoAddress):
        return LineRange(current_line, current_line, explicit=False)

    def resolve(part: AddressPart) -> int:
        return resolve_part(part, current_line=current_line, line_count=line_count)

    if isinstance(address, SingleAddress):
        line = resolve(address.target)
        return LineRange(line, line, explicit=True)
    return LineRange(resolve(address.start), resolve(address.end), explicit=True)


def ensure_range_valid(
    line_range: LineRange, line_count: int, *, allow_zero: bool = False
) -> LineRange:
    """Require ``1 <= start <= end <= line_count``.

    ``allow_zero`` admits the ``0,0`` range that means "before line 1".
    """

    if allow_zero and line_range.start == 0 and line_range.end == 0:
        return line_range
    start, end = line_range
    if start < 1 or end > line_count or start > end:
        raise EditorError(ErrorKind.INVALID_ADDRESS)
    return line_range


def ensure_no_range_set(line_range: LineRange) -> None:
    if line_range.explicit:
        raise EditorError(ErrorKind.UNEXPECTED_ADDRESS)


def ensure_no_suffix(command: ParsedCommand) -> None:
    if command.suffix:
        raise EditorError(ErrorKind.INVALID_COMMAND_SUFFIX)


def ensure_filename_suffix(command: ParsedCommand) -> Optional[str]:
    """Validate the text after ``w`` and return the filename it names.

    The letter must be followed by whitespace or nothing. Leading whitespace
    is skipped; ``None`` means no filename was given.
    """

    suffix = command.suffix
    if suffix and not suffix[0].isspace():
        raise EditorError(ErrorKind.INVALID_COMMAND_SUFFIX)
    name = suffix.lstrip()
    return name or None


def ensure_addressless(command: ParsedCommand, line_range: LineRange, line_count: int) -> None:
    """Checks for commands that take no address: suffix, then range validity, then presence."""

    ensure_no_suffix(command)
    if line_range.explicit:
        ensure_range_valid(line_range, line_count)
        ensure_no_range_set(line_range)


__all__ = [
    "ensure_addressless",
    "ensure_filename_suffix",
    "ensure_no_range_set",
    "ensure_no_suffix",
    "ensure_range_valid",
    "resolve_part",
    "resolve_range",
]
