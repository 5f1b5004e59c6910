"""Process entry point: ``ed [file]``."""

from __future__ import annotations

import argparse
import io
import sys
from typing import BinaryIO, NoReturn, Optional, Sequence

from ed_engine.interpreter import Interpreter
from ed_engine.runtime import telemetry
from ed_engine.runtime.settings import EditorSettings, load_settings

USAGE = "usage: ed [file]"


class UsageError(Exception):
    """Raised instead of argparse's own exit so ``main`` controls the status."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="ed", add_help=False, usage=USAGE)
    parser.add_argument("file", nargs="?", default=None, help="File to edit.")
    return parser


def open_stream(raw: BinaryIO, settings: EditorSettings) -> io.TextIOWrapper:
    """Text view over a byte stream that round-trips undecodable bytes.

    Only ``\\n`` ends a line and nothing is translated on the way through.
    """

    return io.TextIOWrapper(
        raw,
        encoding=settings.encoding,
        errors="surrogateescape",
        newline="\n",
        write_through=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    for arg in args:
        if arg.startswith("-"):
            sys.stderr.write(f"ed: illegal option -- {arg[1:]}\n")
            sys.stdout.write(f"{USAGE}\n")
            return 1

    try:
        namespace = build_parser().parse_args(args)
    except UsageError:
        sys.stdout.write(f"{USAGE}\n")
        return 1

    settings = load_settings()
    telemetry.configure(settings=settings)

    sys.stdout.flush()
    source = open_stream(sys.stdin.buffer, settings)
    output = open_stream(sys.stdout.buffer, settings)
    try:
        if namespace.file is not None:
            session = Interpreter.open(namespace.file, output=output, settings=settings)
        else:
            session = Interpreter(output=output, settings=settings)
        return session.run(source)
    finally:
        output.flush()
        # The process streams outlive these wrappers.
        source.detach()
        output.detach()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
