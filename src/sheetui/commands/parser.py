"""Parser for command-line mode input such as ``insert-rows 2``."""

from __future__ import annotations

from typing import Callable, Dict, List

from sheetui.errors import InvalidCommand

from .models import Command, CommandTag

ArgParser = Callable[[str, List[str]], Command]


def parse_command(line: str) -> Command:
    """Turn one command line into a :class:`Command`.

    Raises :class:`InvalidCommand` for unknown names, missing required
    arguments and non-numeric counts or indexes.
    """

    parts = line.split()
    if not parts:
        raise InvalidCommand("Empty command", line=line)
    name, args = parts[0], parts[1:]
    parser = _PARSERS.get(name)
    if parser is None:
        raise InvalidCommand(f"Unknown command '{name}'", line=line)
    try:
        return parser(name, args)
    except InvalidCommand as exc:
        raise InvalidCommand(str(exc), line=line) from None


def _count(name: str, raw: str) -> int:
    if not raw.isdecimal() or int(raw) == 0:
        raise InvalidCommand(f"{name}: count must be a positive number, got '{raw}'")
    return int(raw)


def _no_args(name: str, args: List[str]) -> None:
    if args:
        raise InvalidCommand(f"{name}: unexpected arguments '{' '.join(args)}'")


def _required(name: str, args: List[str], what: str) -> str:
    if not args:
        raise InvalidCommand(f"{name}: missing {what}")
    return " ".join(args)


def _write(name: str, args: List[str]) -> Command:
    return Command(CommandTag.WRITE, path=" ".join(args) or None)


def _counted(tag: CommandTag) -> ArgParser:
    def parse(name: str, args: List[str]) -> Command:
        if len(args) > 1:
            raise InvalidCommand(f"{name}: expected at most one count")
        count = _count(name, args[0]) if args else 1
        return Command(tag, count=count)

    return parse


def _colored(tag: CommandTag) -> ArgParser:
    def parse(name: str, args: List[str]) -> Command:
        if len(args) == 1:
            return Command(tag, count=1, color=args[0])
        if len(args) == 2:
            return Command(tag, count=_count(name, args[0]), color=args[1])
        if not args:
            raise InvalidCommand(f"{name}: missing color")
        raise InvalidCommand(f"{name}: expected '[count] <color>'")

    return parse


def _color_cell(name: str, args: List[str]) -> Command:
    if len(args) != 1:
        raise InvalidCommand(f"{name}: expected exactly one color")
    return Command(CommandTag.COLOR_CELL, color=args[0])


def _rename_sheet(name: str, args: List[str]) -> Command:
    if len(args) >= 2 and args[0].isdecimal():
        return Command(CommandTag.RENAME_SHEET, index=int(args[0]), name=" ".join(args[1:]))
    return Command(CommandTag.RENAME_SHEET, name=_required(name, args, "sheet name"))


def _new_sheet(name: str, args: List[str]) -> Command:
    return Command(CommandTag.NEW_SHEET, name=" ".join(args) or None)


def _select_sheet(name: str, args: List[str]) -> Command:
    return Command(CommandTag.SELECT_SHEET, name=_required(name, args, "sheet name"))


def _edit(name: str, args: List[str]) -> Command:
    return Command(CommandTag.EDIT, path=_required(name, args, "file path"))


def _help(name: str, args: List[str]) -> Command:
    return Command(CommandTag.HELP, topic=" ".join(args) or None)


def _export_csv(name: str, args: List[str]) -> Command:
    return Command(CommandTag.EXPORT_CSV, path=_required(name, args, "file path"))


def _bare(tag: CommandTag) -> ArgParser:
    def parse(name: str, args: List[str]) -> Command:
        _no_args(name, args)
        return Command(tag)

    return parse


_PARSERS: Dict[str, ArgParser] = {
    "write": _write,
    "w": _write,
    "insert-rows": _counted(CommandTag.INSERT_ROWS),
    "insert-row": _counted(CommandTag.INSERT_ROWS),
    "ir": _counted(CommandTag.INSERT_ROWS),
    "insert-cols": _counted(CommandTag.INSERT_COLS),
    "insert-col": _counted(CommandTag.INSERT_COLS),
    "ic": _counted(CommandTag.INSERT_COLS),
    "color-rows": _colored(CommandTag.COLOR_ROWS),
    "cr": _colored(CommandTag.COLOR_ROWS),
    "color-cols": _colored(CommandTag.COLOR_COLS),
    "cc": _colored(CommandTag.COLOR_COLS),
    "color-cell": _color_cell,
    "rename-sheet": _rename_sheet,
    "new-sheet": _new_sheet,
    "select-sheet": _select_sheet,
    "edit": _edit,
    "e": _edit,
    "help": _help,
    "?": _help,
    "export-csv": _export_csv,
    "quit": _bare(CommandTag.QUIT),
    "q": _bare(CommandTag.QUIT),
    "system-paste": _bare(CommandTag.SYSTEM_PASTE),
}

COMMAND_NAMES = tuple(sorted(_PARSERS))


__all__ = ["parse_command", "COMMAND_NAMES"]
