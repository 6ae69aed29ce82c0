"""Interaction modes and the shared types they exchange with the controller."""

from .base_mode import (
    CELL_EDIT,
    COMMAND_LINE,
    MODE_NAMES,
    NAVIGATION,
    RANGE_SELECT,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
)
from .keymap_helpers import KeymapMode
from .navigation_mode import NavigationMode
from .cell_edit_mode import CellEditMode
from .range_select_mode import RangeSelectMode
from .command_mode import CommandLineMode

__all__ = [
    "NAVIGATION",
    "CELL_EDIT",
    "RANGE_SELECT",
    "COMMAND_LINE",
    "MODE_NAMES",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "NavigationMode",
    "CellEditMode",
    "RangeSelectMode",
    "CommandLineMode",
]
