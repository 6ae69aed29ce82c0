"""Actions bound inside cell editing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sheetui.effects import WriteCell
from sheetui.modes.base_mode import NAVIGATION, RANGE_SELECT, ModeResult

if TYPE_CHECKING:
    from sheetui.keymaps import ResolutionMatch
    from sheetui.modes.cell_edit_mode import CellEditMode


def commit_edit(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = mode.buffer
    mode.context.bus.emit("cell.commit", {"address": buffer.target, "text": buffer.text})
    return ModeResult(
        consumed=True,
        switch_to=NAVIGATION,
        status="commit",
        effects=(WriteCell(buffer.target, buffer.text, buffer.kind),),
    )


def cancel_edit(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, switch_to=NAVIGATION, status="cancel")


def begin_reference(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, switch_to=RANGE_SELECT, message="enter_range_select")


def paste_text(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    """Insert the clipboard at the edit cursor, one line with cells space-joined."""

    del match
    payload = mode.context.clipboard.payload
    text = ""
    if payload is not None:
        text = " ".join(entry.content for _, _, entry in payload.entries() if entry.content)
    if not text:
        return ModeResult(consumed=True, status="clipboard_empty", message="clipboard is empty")
    mode.buffer.insert(text)
    return ModeResult(consumed=True, status="edit")


def backspace(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.buffer.backspace()
    return ModeResult(consumed=True, status="edit")


def delete_forward(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.buffer.delete()
    return ModeResult(consumed=True, status="edit")


def cursor_left(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.buffer.move_left()
    return ModeResult(consumed=True, status="edit")


def cursor_right(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.buffer.move_right()
    return ModeResult(consumed=True, status="edit")


def cursor_home(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.buffer.home()
    return ModeResult(consumed=True, status="edit")


def cursor_end(mode: CellEditMode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.buffer.end()
    return ModeResult(consumed=True, status="edit")


__all__ = [
    "commit_edit",
    "cancel_edit",
    "begin_reference",
    "paste_text",
    "backspace",
    "delete_forward",
    "cursor_left",
    "cursor_right",
    "cursor_home",
    "cursor_end",
]
