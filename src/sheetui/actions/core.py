"""Mode-entry actions shared across modes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sheetui.modes.base_mode import (
    CELL_EDIT,
    COMMAND_LINE,
    NAVIGATION,
    RANGE_SELECT,
    Mode,
    ModeResult,
)

if TYPE_CHECKING:
    from sheetui.keymaps import ResolutionMatch


def enter_cell_edit(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, switch_to=CELL_EDIT, message="enter_cell_edit")


def enter_range_select(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, switch_to=RANGE_SELECT, message="enter_range_select")


def enter_range_select_anchored(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(
        consumed=True, switch_to=RANGE_SELECT, anchor=True, message="enter_range_select"
    )


def enter_command_line(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, switch_to=COMMAND_LINE, message="enter_command_line")


def exit_to_navigation(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, switch_to=NAVIGATION, message="exit_to_navigation")


def quit_app(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, quit=True, status="quit", message="quit")


def noop_action(mode: Mode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_cell_edit",
    "enter_range_select",
    "enter_range_select_anchored",
    "enter_command_line",
    "exit_to_navigation",
    "quit_app",
    "noop_action",
]
