"""Structured command values produced by the command-line parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandTag(str, Enum):
    WRITE = "write"
    INSERT_ROWS = "insert-rows"
    INSERT_COLS = "insert-cols"
    COLOR_ROWS = "color-rows"
    COLOR_COLS = "color-cols"
    COLOR_CELL = "color-cell"
    RENAME_SHEET = "rename-sheet"
    NEW_SHEET = "new-sheet"
    SELECT_SHEET = "select-sheet"
    EDIT = "edit"
    HELP = "help"
    EXPORT_CSV = "export-csv"
    QUIT = "quit"
    SYSTEM_PASTE = "system-paste"


@dataclass(frozen=True, slots=True)
class Command:
    """A validated command; unused fields stay ``None``.

    ``count`` defaults to 1 for the counted commands, ``index`` of ``None``
    means the current sheet.
    """

    tag: CommandTag
    path: Optional[str] = None
    count: Optional[int] = None
    color: Optional[str] = None
    index: Optional[int] = None
    name: Optional[str] = None
    topic: Optional[str] = None


__all__ = ["Command", "CommandTag"]
