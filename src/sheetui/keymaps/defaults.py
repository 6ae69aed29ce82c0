"""Built-in keymaps that seed each mode with its default bindings."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from sheetui.actions import command as command_actions
from sheetui.actions import core as core_actions
from sheetui.actions import edit as edit_actions
from sheetui.actions import navigation as navigation_actions
from sheetui.actions import range_select as range_actions
from sheetui.modes.base_mode import CELL_EDIT, COMMAND_LINE, NAVIGATION, RANGE_SELECT

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_cell_edit", core_actions.enter_cell_edit, "Edit the current cell"),
    ActionRef("core.enter_range_select", core_actions.enter_range_select, "Start a range selection"),
    ActionRef(
        "core.enter_range_select_anchored",
        core_actions.enter_range_select_anchored,
        "Start a range selection anchored at the cursor",
    ),
    ActionRef("core.enter_command_line", core_actions.enter_command_line, "Open the command line"),
    ActionRef("core.quit", core_actions.quit_app, "Quit"),
    ActionRef("nav.move_left", navigation_actions.move_left, "Move left", repeatable=True),
    ActionRef("nav.move_right", navigation_actions.move_right, "Move right", repeatable=True),
    ActionRef("nav.move_up", navigation_actions.move_up, "Move up", repeatable=True),
    ActionRef("nav.move_down", navigation_actions.move_down, "Move down", repeatable=True),
    ActionRef("nav.column_top", navigation_actions.column_top, "Jump to the top of the column"),
    ActionRef("nav.next_sheet", navigation_actions.next_sheet, "Next sheet", repeatable=True),
    ActionRef(
        "nav.previous_sheet", navigation_actions.previous_sheet, "Previous sheet", repeatable=True
    ),
    ActionRef("nav.delete", navigation_actions.delete_content, "Delete cell content"),
    ActionRef(
        "nav.delete_formatted",
        navigation_actions.delete_formatted,
        "Delete cell content and style",
    ),
    ActionRef("nav.copy", navigation_actions.copy_content, "Copy content"),
    ActionRef("nav.copy_formatted", navigation_actions.copy_formatted, "Copy content and style"),
    ActionRef("nav.paste", navigation_actions.paste, "Paste the clipboard at the cursor"),
    ActionRef("nav.save", navigation_actions.save, "Save the workbook"),
    ActionRef("nav.clear", navigation_actions.clear_pending, "Discard prefix and pending range"),
    ActionRef("edit.commit", edit_actions.commit_edit, "Commit the edit"),
    ActionRef("edit.cancel", edit_actions.cancel_edit, "Discard the edit"),
    ActionRef("edit.reference", edit_actions.begin_reference, "Select a range to reference"),
    ActionRef("edit.paste", edit_actions.paste_text, "Insert the clipboard text"),
    ActionRef("edit.backspace", edit_actions.backspace, "Delete before the cursor"),
    ActionRef("edit.delete", edit_actions.delete_forward, "Delete under the cursor"),
    ActionRef("edit.left", edit_actions.cursor_left, "Cursor left"),
    ActionRef("edit.right", edit_actions.cursor_right, "Cursor right"),
    ActionRef("edit.home", edit_actions.cursor_home, "Cursor to start"),
    ActionRef("edit.end", edit_actions.cursor_end, "Cursor to end"),
    ActionRef("range.mark", range_actions.set_anchor, "Set the selection anchor"),
    ActionRef("range.finish", range_actions.finish_selection, "Finish the selection"),
    ActionRef("range.copy", range_actions.copy_selection, "Copy the selection"),
    ActionRef(
        "range.copy_formatted",
        range_actions.copy_selection_formatted,
        "Copy the selection with style",
    ),
    ActionRef("range.delete", range_actions.delete_selection, "Delete the selection"),
    ActionRef(
        "range.delete_formatted",
        range_actions.delete_selection_formatted,
        "Delete the selection with style",
    ),
    ActionRef("range.abort", range_actions.abort_selection, "Abort the selection"),
    ActionRef("command.submit_line", command_actions.submit_command_line, "Run the command line"),
    ActionRef("command.cancel", command_actions.cancel_command_line, "Discard the command line"),
    ActionRef(
        "command.backspace",
        command_actions.backspace_command_line,
        "Delete the last character",
    ),
)


def _bind(
    mode: str,
    keys: str,
    action_id: str,
    description: str = "",
    *,
    when: Sequence[str] = (),
) -> Binding:
    """Build a binding whose id is derived from its mode, action and keys."""

    strokes = keys.split(" ")
    return Binding(
        id=f"{mode}.{action_id.split('.', 1)[1]}.{'_'.join(strokes)}",
        mode=mode,
        sequence=KeySequence.from_strings(*strokes),
        action_id=action_id,
        description=description,
        when=tuple(when),  # type: ignore[arg-type]
    )


_MOVEMENT: tuple[tuple[str, str], ...] = (
    ("h", "nav.move_left"),
    ("LEFT", "nav.move_left"),
    ("shift+TAB", "nav.move_left"),
    ("l", "nav.move_right"),
    ("RIGHT", "nav.move_right"),
    ("TAB", "nav.move_right"),
    ("k", "nav.move_up"),
    ("UP", "nav.move_up"),
    ("shift+ENTER", "nav.move_up"),
    ("j", "nav.move_down"),
    ("DOWN", "nav.move_down"),
    ("ENTER", "nav.move_down"),
    ("ctrl+n", "nav.next_sheet"),
    ("ctrl+p", "nav.previous_sheet"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(_bind(NAVIGATION, keys, action) for keys, action in _MOVEMENT),
    _bind(NAVIGATION, "g g", "nav.column_top", "Top of column"),
    _bind(NAVIGATION, "d", "nav.delete"),
    _bind(NAVIGATION, "D", "nav.delete_formatted"),
    _bind(NAVIGATION, "i", "core.enter_cell_edit"),
    _bind(NAVIGATION, "e", "core.enter_cell_edit"),
    _bind(NAVIGATION, "v", "core.enter_range_select"),
    _bind(NAVIGATION, "V", "core.enter_range_select_anchored"),
    _bind(NAVIGATION, ":", "core.enter_command_line"),
    _bind(NAVIGATION, "y", "nav.copy"),
    _bind(NAVIGATION, "Y", "nav.copy_formatted"),
    _bind(NAVIGATION, "p", "nav.paste"),
    _bind(NAVIGATION, "ctrl+s", "nav.save"),
    _bind(NAVIGATION, "q", "core.quit"),
    _bind(NAVIGATION, "ESC", "nav.clear"),
    _bind(CELL_EDIT, "ENTER", "edit.commit"),
    _bind(CELL_EDIT, "ESC", "edit.cancel"),
    _bind(CELL_EDIT, "ctrl+r", "edit.reference"),
    _bind(CELL_EDIT, "ctrl+v", "edit.paste"),
    _bind(CELL_EDIT, "BACKSPACE", "edit.backspace"),
    _bind(CELL_EDIT, "DELETE", "edit.delete"),
    _bind(CELL_EDIT, "LEFT", "edit.left"),
    _bind(CELL_EDIT, "RIGHT", "edit.right"),
    _bind(CELL_EDIT, "HOME", "edit.home"),
    _bind(CELL_EDIT, "END", "edit.end"),
    *(_bind(RANGE_SELECT, keys, action) for keys, action in _MOVEMENT),
    _bind(RANGE_SELECT, "m", "range.mark", when=("!range_anchored",)),
    _bind(RANGE_SELECT, "m", "range.finish", when=("range_anchored",)),
    _bind(RANGE_SELECT, "y", "range.copy"),
    _bind(RANGE_SELECT, "Y", "range.copy_formatted"),
    _bind(RANGE_SELECT, "d", "range.delete"),
    _bind(RANGE_SELECT, "D", "range.delete_formatted"),
    _bind(RANGE_SELECT, "ESC", "range.abort"),
    _bind(COMMAND_LINE, "ENTER", "command.submit_line"),
    _bind(COMMAND_LINE, "ESC", "command.cancel"),
    _bind(COMMAND_LINE, "BACKSPACE", "command.backspace"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if _selected(action.id, allowed_actions):
            registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if _selected(binding.id, allowed_bindings):
            registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)

    for mode, bindings in (per_mode_overrides or {}).items():
        for binding in bindings:
            if binding.mode != mode:
                raise ValueError(
                    f"Override binding '{binding.id}' must target mode '{mode}'"
                )
            registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
