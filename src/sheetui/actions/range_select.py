"""Actions dedicated to range selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sheetui.effects import ClearCells, CopyCells, WorkbookEffect
from sheetui.modes.base_mode import ModeResult

if TYPE_CHECKING:
    from sheetui.keymaps import ResolutionMatch
    from sheetui.modes.range_select_mode import RangeSelectMode


def set_anchor(mode: RangeSelectMode, match: ResolutionMatch) -> ModeResult:
    del match
    mode.mark_anchor()
    mode.context.bus.emit("range.mark", mode.anchor)
    return ModeResult(consumed=True, status="range_mark", message=mode.anchor.to_a1())


def finish_selection(mode: RangeSelectMode, match: ResolutionMatch) -> ModeResult:
    del match
    selection = mode.selection
    mode.context.bus.emit("range.finish", selection)
    return ModeResult(
        consumed=True,
        switch_to=mode.origin,
        status="range_finish",
        message=selection.to_reference(),
        selection=selection,
    )


def _leave_with(mode: RangeSelectMode, status: str, effect: WorkbookEffect) -> ModeResult:
    return ModeResult(
        consumed=True,
        switch_to=mode.origin,
        status=status,
        effects=(effect,),
    )


def copy_selection(mode: RangeSelectMode, match: ResolutionMatch) -> ModeResult:
    del match
    return _leave_with(mode, "copy", CopyCells(mode.selection, include_style=False))


def copy_selection_formatted(
    mode: RangeSelectMode, match: ResolutionMatch
) -> ModeResult:
    del match
    return _leave_with(mode, "copy", CopyCells(mode.selection, include_style=True))


def delete_selection(mode: RangeSelectMode, match: ResolutionMatch) -> ModeResult:
    del match
    return _leave_with(mode, "delete", ClearCells(mode.selection, include_style=False))


def delete_selection_formatted(
    mode: RangeSelectMode, match: ResolutionMatch
) -> ModeResult:
    del match
    return _leave_with(mode, "delete", ClearCells(mode.selection, include_style=True))


def abort_selection(mode: RangeSelectMode, match: ResolutionMatch) -> ModeResult:
    del match
    return ModeResult(consumed=True, switch_to=mode.origin, status="range_abort")


__all__ = [
    "set_anchor",
    "finish_selection",
    "copy_selection",
    "copy_selection_formatted",
    "delete_selection",
    "delete_selection_formatted",
    "abort_selection",
]
