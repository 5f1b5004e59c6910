"""Load and persist collaborators between buffers and files."""

from __future__ import annotations

import os
from typing import Union

from ed_engine.errors import EditorError, ErrorKind
from ed_engine.runtime import telemetry

from .buffer import Buffer
from .document import split_lines

PathLike = Union[str, "os.PathLike[str]"]


def load_buffer(path: PathLike, *, encoding: str = "utf-8", name: str = "main") -> Buffer:
    """Read ``path`` into a new buffer, keeping every line terminator.

    Raises ``EditorError(CANNOT_OPEN_INPUT_FILE)`` carrying the OS reason.
    """

    with telemetry.span(
        "storage::load", component="storage", metadata={"path": os.fspath(path)}
    ) as handle:
        try:
            with open(path, "rb") as fh:
                raw = fh.read()
        except OSError as exc:
            raise EditorError(
                ErrorKind.CANNOT_OPEN_INPUT_FILE, detail=exc.strerror or str(exc)
            ) from exc
        buffer = Buffer.from_lines(
            split_lines(raw.decode(encoding, errors="surrogateescape")),
            name=name,
            encoding=encoding,
        )
        handle.add_metadata("lines", buffer.line_count)
        return buffer


def write_buffer(buffer: Buffer, path: PathLike, *, encoding: str = "utf-8") -> int:
    """Write the whole buffer to ``path`` and return the byte count.

    Raises ``EditorError(CANNOT_OPEN_OUTPUT_FILE)`` carrying the OS reason.
    """

    with telemetry.span(
        "storage::write", component="storage", metadata={"path": os.fspath(path)}
    ) as handle:
        data = buffer.to_bytes(encoding)
        try:
            with open(path, "wb") as fh:
                written = fh.write(data)
        except OSError as exc:
            raise EditorError(
                ErrorKind.CANNOT_OPEN_OUTPUT_FILE, detail=exc.strerror or str(exc)
            ) from exc
        handle.add_metadata("bytes", written)
        return written


__all__ = ["load_buffer", "write_buffer"]
