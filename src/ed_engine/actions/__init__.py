"""Command handlers reused by command mode."""

from .command import execute_command_line
from .core import begin_insert, delete_lines, print_lines, print_numbered
from .session import quit_session, show_help, toggle_help, unknown_command, write_file

__all__ = [
    "execute_command_line",
    "begin_insert",
    "delete_lines",
    "print_lines",
    "print_numbered",
    "quit_session",
    "show_help",
    "toggle_help",
    "unknown_command",
    "write_file",
]
