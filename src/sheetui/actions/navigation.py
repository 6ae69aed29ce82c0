"""Cursor movement and cell verbs used by navigation and range selection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from sheetui.commands import Command, CommandTag
from sheetui.effects import ClearCells, CopyCells, PasteCells, RunCommand
from sheetui.model import Address, Range
from sheetui.modes.base_mode import Mode, ModeResult

if TYPE_CHECKING:
    from sheetui.keymaps import ResolutionMatch

CursorVector = Tuple[int, int]


def _move_by_delta(mode: Mode, delta: CursorVector, count: int) -> ModeResult:
    session = mode.context.session
    extent = session.extent(mode.cursor.sheet)
    d_row, d_col = delta
    current = mode.cursor
    # Clamp each axis directly; equivalent to ``count`` single clamped steps.
    row = min(max(current.row + d_row * count, 0), extent.rows - 1)
    col = min(max(current.col + d_col * count, 0), extent.cols - 1)
    mode.cursor = current.with_position(row, col)
    return ModeResult(consumed=True, status="move")


def move_left(mode: Mode, match: ResolutionMatch, count: int = 1) -> ModeResult:
    del match
    return _move_by_delta(mode, (0, -1), count)


def move_right(mode: Mode, match: ResolutionMatch, count: int = 1) -> ModeResult:
    del match
    return _move_by_delta(mode, (0, 1), count)


def move_up(mode: Mode, match: ResolutionMatch, count: int = 1) -> ModeResult:
    del match
    return _move_by_delta(mode, (-1, 0), count)


def move_down(mode: Mode, match: ResolutionMatch, count: int = 1) -> ModeResult:
    del match
    return _move_by_delta(mode, (1, 0), count)


def column_top(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.cursor = mode.cursor.with_position(0, mode.cursor.col)
    return ModeResult(consumed=True, status="move")


def _switch_sheet(mode: Mode, step: int) -> ModeResult:
    if not mode.can_switch_sheet:
        return ModeResult(
            consumed=True,
            status="range_sheet_locked",
            message="cannot change sheet once the anchor is set",
        )
    session = mode.context.session
    sheet = (mode.cursor.sheet + step) % max(1, session.sheet_count)
    target = Address(sheet, mode.cursor.row, mode.cursor.col)
    mode.cursor = session.clamp(target)
    return ModeResult(consumed=True, status="sheet", message=session.sheet_name(sheet))


def next_sheet(mode: Mode, match: ResolutionMatch, count: int = 1) -> ModeResult:
    del match
    return _switch_sheet(mode, count)


def previous_sheet(mode: Mode, match: ResolutionMatch, count: int = 1) -> ModeResult:
    del match
    return _switch_sheet(mode, -count)


def _target_range(mode: Mode) -> Range:
    pending = mode.context.session.pending_range
    if pending is not None:
        return pending
    return Range.single(mode.cursor)


def _delete(mode: Mode, *, include_style: bool) -> ModeResult:
    target = Range.single(mode.cursor)
    return ModeResult(
        consumed=True,
        status="delete",
        effects=(ClearCells(target, include_style=include_style),),
    )


def delete_content(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del match
    return _delete(mode, include_style=False)


def delete_formatted(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del match
    return _delete(mode, include_style=True)


def _copy(mode: Mode, *, include_style: bool) -> ModeResult:
    target = _target_range(mode)
    mode.context.session.pending_range = None
    return ModeResult(
        consumed=True,
        status="copy",
        effects=(CopyCells(target, include_style=include_style),),
    )


def copy_content(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del match
    return _copy(mode, include_style=False)


def copy_formatted(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del match
    return _copy(mode, include_style=True)


def paste(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del match
    if mode.context.clipboard.empty:
        return ModeResult(consumed=True, status="clipboard_empty", message="clipboard is empty")
    return ModeResult(consumed=True, status="paste", effects=(PasteCells(mode.cursor),))


def save(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(
        consumed=True, status="save", effects=(RunCommand(Command(CommandTag.WRITE)),)
    )


def clear_pending(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.context.session.pending_range = None
    return ModeResult(consumed=True, status="clear")


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "column_top",
    "next_sheet",
    "previous_sheet",
    "delete_content",
    "delete_formatted",
    "copy_content",
    "copy_formatted",
    "paste",
    "save",
    "clear_pending",
]
