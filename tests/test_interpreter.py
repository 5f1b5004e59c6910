from __future__ import annotations

import io
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ed_engine.buffer import Buffer
from ed_engine.errors import ErrorKind
from ed_engine.interpreter import Interpreter
from ed_engine.runtime.settings import EditorSettings


def make_session(
    *lines: str,
    filename: Optional[str] = None,
    verbose: bool = False,
) -> Tuple[Interpreter, io.StringIO, io.StringIO]:
    output = io.StringIO()
    diagnostics = io.StringIO()
    session = Interpreter(
        Buffer.from_lines(lines),
        output=output,
        diagnostics=diagnostics,
        settings=EditorSettings(verbose=verbose),
    )
    session.state.filename = filename
    return session, output, diagnostics


def run(session: Interpreter, commands: Sequence[str]) -> int:
    return session.run(iter(commands))


def feed_all(session: Interpreter, commands: Sequence[str]) -> List[str]:
    return [session.feed(command).status for command in commands]


def test_initial_current_line_is_last_line() -> None:
    session, _, _ = make_session("a\n", "b\n", "c\n")

    assert session.state.current_line == 3
    assert session.mode == "command"


def test_print_single_address() -> None:
    session, output, _ = make_session("a\n", "b\n", "c\n")

    session.feed("2p\n")

    assert output.getvalue() == "b\n"
    assert session.state.current_line == 2


def test_print_range_and_symbols() -> None:
    session, output, _ = make_session("a\n", "b\n", "c\n")

    session.feed("1,$p\n")
    session.feed(".p\n")

    assert output.getvalue() == "a\nb\nc\nc\n"
    assert session.state.current_line == 3


def test_numbered_print() -> None:
    session, output, _ = make_session("a\n", "b\n", "c\n")

    session.feed("2,3n\n")

    assert output.getvalue() == "2\tb\n3\tc\n"
    assert session.state.current_line == 3


def test_empty_line_prints_next_line() -> None:
    session, output, _ = make_session("a\n", "b\n", "c\n")
    session.feed("1p\n")

    session.feed("\n")
    session.feed("\n")

    assert output.getvalue() == "a\nb\nc\n"
    assert session.state.current_line == 3


def test_empty_line_past_end_is_invalid_address() -> None:
    session, output, _ = make_session("a\n")

    result = session.feed("\n")

    assert result.error is ErrorKind.INVALID_ADDRESS
    assert output.getvalue() == "?\n"
    assert session.state.current_line == 1


def test_address_only_line_prints_that_line() -> None:
    session, output, _ = make_session("a\n", "b\n", "c\n")

    session.feed("2\n")

    assert output.getvalue() == "b\n"
    assert session.state.current_line == 2


def test_negative_address_is_relative() -> None:
    session, output, _ = make_session("a\n", "b\n", "c\n")

    session.feed("-2p\n")

    assert output.getvalue() == "a\n"
    assert session.state.current_line == 1


def test_delete_range() -> None:
    session, _, _ = make_session("a\n", "b\n", "c\n")

    session.feed("1,2d\n")

    assert list(session.buffer.snapshot()) == ["c\n"]
    assert session.buffer.line_count == 1
    assert session.state.current_line == 1
    assert session.state.modified is True


def test_delete_at_end_moves_to_new_last_line() -> None:
    session, _, _ = make_session("a\n", "b\n", "c\n")

    session.feed("2,3d\n")

    assert session.state.current_line == 1


def test_delete_everything_resets_current_line() -> None:
    session, _, _ = make_session("a\n", "b\n")

    session.feed("1,$d\n")

    assert session.buffer.line_count == 0
    assert session.state.current_line == 0


def test_insert_into_empty_buffer() -> None:
    session, _, _ = make_session()

    statuses = feed_all(session, ["0i\n", "x\n", "y\n", "."])

    assert statuses == ["insert", "collecting", "collecting", "insert_done"]
    assert list(session.buffer.snapshot()) == ["x\n", "y\n"]
    assert session.buffer.line_count == 2
    assert session.state.current_line == 2
    assert session.state.modified is True
    assert session.mode == "command"


def test_insert_before_addressed_line() -> None:
    session, _, _ = make_session("a\n", "b\n", "c\n")

    feed_all(session, ["2i\n", "new\n", ".\n"])

    assert list(session.buffer.snapshot()) == ["a\n", "new\n", "b\n", "c\n"]
    assert session.state.current_line == 2


def test_insert_uses_second_address_of_range() -> None:
    session, _, _ = make_session("a\n", "b\n", "c\n")

    feed_all(session, ["1,3i\n", "new\n", ".\n"])

    assert list(session.buffer.snapshot()) == ["a\n", "b\n", "new\n", "c\n"]
    assert session.state.current_line == 3


def test_insert_nothing_keeps_buffer_clean() -> None:
    session, _, _ = make_session("a\n", "b\n")

    feed_all(session, ["1i\n", ".\n"])

    assert session.buffer.line_count == 2
    assert session.state.modified is False
    assert session.state.current_line == 1


def test_insert_mode_bypasses_command_grammar() -> None:
    session, output, _ = make_session()

    feed_all(session, ["i\n", "1,2d\n", "q\n", ".\n"])

    assert list(session.buffer.snapshot()) == ["1,2d\n", "q\n"]
    assert output.getvalue() == ""


def test_insert_stops_at_end_of_input() -> None:
    session, _, _ = make_session()

    status = run(session, ["i\n", "tail\n"])

    assert status == 0
    assert list(session.buffer.snapshot()) == ["tail\n"]
    assert session.finished is True


def test_insert_invalid_address() -> None:
    session, output, _ = make_session("a\n")

    result = session.feed("5i\n")

    assert result.error is ErrorKind.INVALID_ADDRESS
    assert session.mode == "command"
    assert output.getvalue() == "?\n"


def test_write_without_filename_fails() -> None:
    session, output, _ = make_session("a\n")

    result = session.feed("w\n")

    assert result.error is ErrorKind.NO_CURRENT_FILENAME
    assert list(session.buffer.snapshot()) == ["a\n"]
    assert output.getvalue() == "?\n"


def test_write_named_file_stores_filename(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    session, output, _ = make_session("a\n", "bc\n")
    session.feed("1d\n")

    session.feed(f"w {target}\n")

    assert target.read_bytes() == b"bc\n"
    assert output.getvalue() == "3\n"
    assert session.state.modified is False
    assert session.state.filename == str(target)


def test_write_keeps_existing_filename(tmp_path: Path) -> None:
    stored = tmp_path / "stored.txt"
    other = tmp_path / "other.txt"
    session, _, _ = make_session("a\n", filename=str(stored))

    session.feed(f"w {other}\n")
    session.feed("w\n")

    assert other.read_text() == "a\n"
    assert stored.read_text() == "a\n"
    assert session.state.filename == str(stored)


def test_write_with_address_is_unexpected(tmp_path: Path) -> None:
    session, _, _ = make_session("a\n", filename=str(tmp_path / "f.txt"))

    assert session.feed("1w\n").error is ErrorKind.UNEXPECTED_ADDRESS
    assert session.feed("7w\n").error is ErrorKind.INVALID_ADDRESS
    assert session.feed("wfile\n").error is ErrorKind.INVALID_COMMAND_SUFFIX
    assert not (tmp_path / "f.txt").exists()


def test_write_failure_keeps_modified(tmp_path: Path) -> None:
    session, output, diagnostics = make_session("a\n")
    session.feed("1d\n")
    target = tmp_path / "missing" / "out.txt"

    result = session.feed(f"w {target}\n")

    assert result.error is ErrorKind.CANNOT_OPEN_OUTPUT_FILE
    assert session.state.modified is True
    assert session.state.filename is None
    assert diagnostics.getvalue().startswith(f"{target}: ")
    assert output.getvalue() == "?\n"


def test_quit_on_clean_buffer() -> None:
    session, _, _ = make_session("a\n")

    status = run(session, ["q\n", "p\n"])

    assert status == 0
    assert session.finished is True


def test_quit_on_modified_buffer_needs_confirmation() -> None:
    session, output, _ = make_session("a\n", "b\n")
    session.feed("1d\n")

    first = session.feed("q\n")
    assert first.error is ErrorKind.MODIFIED_BUFFER_WARNING
    assert session.finished is False
    assert output.getvalue() == "?\n"

    second = session.feed("q\n")
    assert second.status == "quit"
    assert session.finished is True
    assert session.exit_status == 0
    assert output.getvalue() == "?\n"


def test_other_command_disarms_quit_warning() -> None:
    session, output, _ = make_session("a\n", "b\n")
    feed_all(session, ["1d\n", "q\n", "p\n"])

    result = session.feed("q\n")

    assert result.error is ErrorKind.MODIFIED_BUFFER_WARNING
    assert session.finished is False
    assert output.getvalue() == "?\nb\n?\n"


def test_failed_command_keeps_quit_armed() -> None:
    session, _, _ = make_session("a\n", "b\n")
    feed_all(session, ["1d\n", "q\n", "9p\n"])

    result = session.feed("q\n")

    assert result.status == "quit"


def test_quit_rejects_address_and_suffix() -> None:
    session, _, _ = make_session("a\n")

    assert session.feed("1q\n").error is ErrorKind.UNEXPECTED_ADDRESS
    assert session.feed("qq\n").error is ErrorKind.INVALID_COMMAND_SUFFIX
    assert session.finished is False


def test_unknown_command() -> None:
    session, _, _ = make_session("a\n")

    assert session.feed("z\n").error is ErrorKind.UNKNOWN_COMMAND
    assert session.feed("9z\n").error is ErrorKind.INVALID_ADDRESS
    assert session.feed("1z\n").error is ErrorKind.UNKNOWN_COMMAND


def test_unknown_command_without_address_on_empty_buffer() -> None:
    session, _, _ = make_session()

    assert session.feed("z\n").error is ErrorKind.UNKNOWN_COMMAND


def test_suffix_is_checked_before_range() -> None:
    session, _, _ = make_session("a\n")

    assert session.feed("9px\n").error is ErrorKind.INVALID_COMMAND_SUFFIX


def test_help_prints_last_error() -> None:
    session, output, _ = make_session("a\n")
    session.feed("9p\n")

    session.feed("h\n")

    assert output.getvalue() == "?\nInvalid address\n"
    assert session.state.verbose is False


def test_help_without_error_prints_nothing() -> None:
    session, output, _ = make_session("a\n")

    result = session.feed("h\n")

    assert result.status == "help"
    assert output.getvalue() == ""


def test_verbose_toggle_shows_messages() -> None:
    session, output, _ = make_session("a\n")
    session.feed("z\n")

    session.feed("H\n")
    session.feed("9p\n")
    session.feed("H\n")
    session.feed("9p\n")

    assert output.getvalue() == (
        "?\n"
        "Unknown command\n"
        "?\n"
        "Invalid address\n"
        "?\n"
    )


def test_verbose_from_settings() -> None:
    session, output, _ = make_session("a\n", verbose=True)

    session.feed("w\n")

    assert output.getvalue() == "?\nNo current filename\n"


def test_help_rejects_address() -> None:
    session, _, _ = make_session("a\n")

    assert session.feed("1h\n").error is ErrorKind.UNEXPECTED_ADDRESS
    assert session.feed("5H\n").error is ErrorKind.INVALID_ADDRESS
    assert session.state.verbose is False


def test_failed_command_leaves_state() -> None:
    session, _, _ = make_session("a\n", "b\n", "c\n")
    session.feed("2p\n")

    session.feed("2,9d\n")

    assert session.buffer.line_count == 3
    assert session.state.current_line == 2
    assert session.state.modified is False
    assert session.state.last_error is ErrorKind.INVALID_ADDRESS


def test_exit_status_reflects_last_command() -> None:
    failing, _, _ = make_session("a\n")
    clean, _, _ = make_session("a\n")

    assert run(failing, ["p\n", "9p\n"]) == 1
    assert run(clean, ["9p\n", "p\n"]) == 0


def test_end_of_input_after_quit_warning_is_an_error() -> None:
    session, _, _ = make_session("a\n")

    assert run(session, ["1d\n", "q\n"]) == 1


def test_open_loads_file_and_reports_size(tmp_path: Path) -> None:
    source = tmp_path / "in.txt"
    source.write_text("one\ntwo\n")
    output = io.StringIO()

    session = Interpreter.open(
        source, output=output, diagnostics=io.StringIO(), settings=EditorSettings()
    )

    assert output.getvalue() == "8\n"
    assert session.buffer.line_count == 2
    assert session.state.current_line == 2
    assert session.state.filename == str(source)


def test_open_missing_file_records_initial_error(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"
    output = io.StringIO()
    diagnostics = io.StringIO()

    session = Interpreter.open(
        missing, output=output, diagnostics=diagnostics, settings=EditorSettings()
    )
    session.feed("h\n")

    assert session.buffer.line_count == 0
    assert session.state.filename == str(missing)
    assert diagnostics.getvalue().startswith(f"{missing}: ")
    assert output.getvalue() == "Cannot open input file\n"


def test_write_then_reopen_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    session, _, _ = make_session("alpha\n", "beta\n", "gamma")
    session.feed(f"w {target}\n")

    reopened = Interpreter.open(
        target, output=io.StringIO(), diagnostics=io.StringIO(), settings=EditorSettings()
    )

    assert list(reopened.buffer.snapshot()) == list(session.buffer.snapshot())
    assert reopened.buffer.character_count == session.buffer.character_count


def test_non_ascii_counts_match_on_open_and_write(tmp_path: Path) -> None:
    source = tmp_path / "accent.txt"
    source.write_bytes("café\nnaïve\n".encode("utf-8"))
    output = io.StringIO()

    session = Interpreter.open(
        source, output=output, diagnostics=io.StringIO(), settings=EditorSettings()
    )
    session.feed("w\n")

    assert output.getvalue() == "13\n13\n"
    assert source.read_bytes() == "café\nnaïve\n".encode("utf-8")
