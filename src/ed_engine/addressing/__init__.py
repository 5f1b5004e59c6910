"""Command-line tokenizer and address resolution."""

from .models import (
    CURRENT,
    LAST,
    Address,
    AddressPart,
    LineRange,
    NoAddress,
    ParsedCommand,
    RangeAddress,
    SingleAddress,
)
from .parser import TERMINATOR, parse_command, strip_terminator
from .resolver import (
    ensure_addressless,
    ensure_filename_suffix,
    ensure_no_range_set,
    ensure_no_suffix,
    ensure_range_valid,
    resolve_part,
    resolve_range,
)

__all__ = [
    "CURRENT",
    "LAST",
    "TERMINATOR",
    "Address",
    "AddressPart",
    "LineRange",
    "NoAddress",
    "ParsedCommand",
    "RangeAddress",
    "SingleAddress",
    "ensure_addressless",
    "ensure_filename_suffix",
    "ensure_no_range_set",
    "ensure_no_suffix",
    "ensure_range_valid",
    "parse_command",
    "resolve_part",
    "resolve_range",
    "strip_terminator",
]
