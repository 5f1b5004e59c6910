"""Dataclasses describing parsed commands and resolved line ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

CURRENT = "."
LAST = "$"

# A decimal line number (possibly negative) or one of CURRENT / LAST.
AddressPart = Union[int, str]


@dataclass(frozen=True, slots=True)
class NoAddress:
    """The command carried no address."""


@dataclass(frozen=True, slots=True)
class SingleAddress:
    target: AddressPart


@dataclass(frozen=True, slots=True)
class RangeAddress:
    start: AddressPart
    end: AddressPart


Address = Union[NoAddress, SingleAddress, RangeAddress]


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """One input line split into address, command letter, and suffix.

    ``letter`` is the empty string for a line holding only an address (or
    nothing at all). ``suffix`` is whatever follows the letter, without the
    line terminator.
    """

    address: Address
    letter: str
    suffix: str
    raw: str

    @property
    def has_address(self) -> bool:
        return not isinstance(self.address, NoAddress)


@dataclass(frozen=True, slots=True)
class LineRange:
    """Numeric ``[start, end]`` pair after resolving symbols and offsets."""

    start: int
    end: int
    explicit: bool = False

    def __iter__(self):
        yield self.start
        yield self.end


__all__ = [
    "CURRENT",
    "LAST",
    "Address",
    "AddressPart",
    "LineRange",
    "NoAddress",
    "ParsedCommand",
    "RangeAddress",
    "SingleAddress",
]
