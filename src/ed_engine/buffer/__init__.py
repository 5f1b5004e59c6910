"""Line buffer, session state, and file collaborators."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import BufferDocument, split_lines
from .state import EditorState
from .storage import load_buffer, write_buffer
from .validation import (
    BufferValidationError,
    ensure_insert_point,
    ensure_line,
    ensure_span,
)

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferDocument",
    "BufferValidationError",
    "EditorState",
    "Transaction",
    "ensure_insert_point",
    "ensure_line",
    "ensure_span",
    "load_buffer",
    "split_lines",
    "write_buffer",
]
