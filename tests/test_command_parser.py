import pytest

from sheetui.commands import Command, CommandTag, help_text, parse_command
from sheetui.errors import InvalidCommand


@pytest.mark.parametrize(
    "line,expected",
    [
        ("write", Command(CommandTag.WRITE)),
        ("w out.json", Command(CommandTag.WRITE, path="out.json")),
        ("insert-rows", Command(CommandTag.INSERT_ROWS, count=1)),
        ("ir 3", Command(CommandTag.INSERT_ROWS, count=3)),
        ("insert-row 2", Command(CommandTag.INSERT_ROWS, count=2)),
        ("ic", Command(CommandTag.INSERT_COLS, count=1)),
        ("insert-cols 4", Command(CommandTag.INSERT_COLS, count=4)),
        ("cr red", Command(CommandTag.COLOR_ROWS, count=1, color="red")),
        ("color-cols 2 blue", Command(CommandTag.COLOR_COLS, count=2, color="blue")),
        ("color-cell #ff0000", Command(CommandTag.COLOR_CELL, color="#ff0000")),
        ("rename-sheet test", Command(CommandTag.RENAME_SHEET, name="test")),
        ("rename-sheet 0 test", Command(CommandTag.RENAME_SHEET, index=0, name="test")),
        ("new-sheet", Command(CommandTag.NEW_SHEET)),
        ("new-sheet test", Command(CommandTag.NEW_SHEET, name="test")),
        ("select-sheet test", Command(CommandTag.SELECT_SHEET, name="test")),
        ("e book.json", Command(CommandTag.EDIT, path="book.json")),
        ("?", Command(CommandTag.HELP)),
        ("help range", Command(CommandTag.HELP, topic="range")),
        ("export-csv out.csv", Command(CommandTag.EXPORT_CSV, path="out.csv")),
        ("q", Command(CommandTag.QUIT)),
        ("system-paste", Command(CommandTag.SYSTEM_PASTE)),
    ],
)
def test_parse_command(line: str, expected: Command) -> None:
    assert parse_command(line) == expected


def test_whitespace_is_insignificant() -> None:
    assert parse_command("   ir    2  ") == Command(CommandTag.INSERT_ROWS, count=2)


@pytest.mark.parametrize(
    "line",
    [
        "",
        "bogus-cmd",
        "ir zero",
        "ir 0",
        "ir -1",
        "ir 1 2",
        "cr",
        "color-cell",
        "select-sheet",
        "edit",
        "export-csv",
        "quit now",
        "ir ²",
    ],
)
def test_invalid_commands(line: str) -> None:
    with pytest.raises(InvalidCommand) as excinfo:
        parse_command(line)
    assert excinfo.value.line == line
    assert excinfo.value.kind == "invalid_command"


def test_help_topics() -> None:
    assert help_text() == help_text("navigation")
    assert "Range Select" in (help_text("range") or "")
    assert help_text("nav") == help_text("navigation")
    assert help_text("nope") is None
