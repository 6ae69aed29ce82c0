"""Verbs that key bindings point at, grouped by the mode they serve."""

from .core import (
    enter_cell_edit,
    enter_command_line,
    enter_range_select,
    exit_to_navigation,
    noop_action,
    quit_app,
)
from .navigation import (
    move_down,
    move_left,
    move_right,
    move_up,
    next_sheet,
    previous_sheet,
)
from .range_select import finish_selection, set_anchor
from .command import submit_command_line

__all__ = [
    "enter_cell_edit",
    "enter_command_line",
    "enter_range_select",
    "exit_to_navigation",
    "noop_action",
    "quit_app",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "next_sheet",
    "previous_sheet",
    "set_anchor",
    "finish_selection",
    "submit_command_line",
]
