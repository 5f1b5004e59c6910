"""Tokenizer turning one raw input line into a ``ParsedCommand``."""

from __future__ import annotations

import re
from typing import Callable, Tuple

from ed_engine.errors import EditorError, ErrorKind

from .models import (
    Address,
    AddressPart,
    NoAddress,
    ParsedCommand,
    RangeAddress,
    SingleAddress,
)

TERMINATOR = "\n"

_NUMBER = r"\s*[+-]?[0-9]+"
_SYMBOL = r"[.$]"


def _part(text: str) -> AddressPart:
    if text in {".", "$"}:
        return text
    return int(text)


def _range(match: re.Match[str]) -> Address:
    return RangeAddress(_part(match["start"]), _part(match["end"]))


def _single(match: re.Match[str]) -> Address:
    return SingleAddress(_part(match["start"]))


# First match wins; the order decides how ambiguous prefixes are read.
_GRAMMAR: Tuple[Tuple[re.Pattern[str], Callable[[re.Match[str]], Address]], ...] = (
    (re.compile(rf"(?P<start>{_NUMBER}),(?P<end>{_NUMBER})"), _range),
    (re.compile(rf"(?P<start>{_SYMBOL}),(?P<end>{_SYMBOL})"), _range),
    (re.compile(rf"(?P<start>{_SYMBOL}),(?P<end>{_NUMBER})"), _range),
    (re.compile(rf"(?P<start>{_NUMBER}),(?P<end>{_SYMBOL})"), _range),
    (re.compile(rf"(?P<start>{_NUMBER})"), _single),
    (re.compile(rf"(?P<start>{_SYMBOL})"), _single),
)


def strip_terminator(raw: str) -> str:
    return raw[:-1] if raw.endswith(TERMINATOR) else raw


def parse_command(raw: str) -> ParsedCommand:
    """Split ``raw`` into address, command letter, and suffix.

    A line holding nothing but an address (or nothing but the terminator)
    yields the empty command letter; a line no address form matches is all
    command. The empty string, which no input line can be, is the only
    input rejected here.
    """

    if not raw:
        raise EditorError(ErrorKind.UNKNOWN_COMMAND)

    body = strip_terminator(raw)
    address: Address = NoAddress()
    rest = body
    for pattern, build in _GRAMMAR:
        match = pattern.match(body)
        if match is not None:
            address = build(match)
            rest = body[match.end() :]
            break

    return ParsedCommand(
        address=address,
        letter=rest[:1],
        suffix=rest[1:],
        raw=raw,
    )


__all__ = ["TERMINATOR", "parse_command", "strip_terminator"]
