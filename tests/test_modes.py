from __future__ import annotations

from typing import Any, Dict, List

import pytest

from sheetui.effects import CopyCells, RunCommand, WriteCell
from sheetui.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from sheetui.model import (
    Address,
    ClipboardPayload,
    ClipboardRegister,
    Range,
    SessionState,
    SheetExtent,
)
from sheetui.modes import (
    CellEditMode,
    CommandLineMode,
    KeyInput,
    ModeBus,
    ModeContext,
    NavigationMode,
    RangeSelectMode,
)


def make_context(
    *, rows: int = 10, cols: int = 5, sheets: int = 1, extras: Dict[str, Any] | None = None
) -> ModeContext:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    session = SessionState(
        extents=tuple(SheetExtent(rows, cols) for _ in range(sheets)),
        sheet_names=tuple(f"Sheet{i + 1}" for i in range(sheets)),
    )
    context = ModeContext(session=session, clipboard=ClipboardRegister(), bus=ModeBus())
    context.extras.update(
        {
            "keymap_registry": registry,
            "keymap_resolver": KeymapResolver(registry),
            "keymap_flags": {},
            **(extras or {}),
        }
    )
    return context


def key(name: str, *modifiers: str) -> KeyInput:
    text = name if len(name) == 1 and not modifiers else None
    return KeyInput(key=name, modifiers=modifiers, text=text)


def test_mode_requires_keymap_resolver() -> None:
    context = ModeContext(session=SessionState(), clipboard=ClipboardRegister(), bus=ModeBus())

    with pytest.raises(RuntimeError):
        NavigationMode(context)


def test_navigation_binding_requests_cell_edit() -> None:
    mode = NavigationMode(make_context())

    result = mode.handle_key(key("i"))

    assert result.switch_to == "cell_edit"
    assert result.consumed is True


def test_navigation_count_prefix_repeats_movement() -> None:
    context = make_context()
    mode = NavigationMode(context)

    assert mode.handle_key(key("3")).status == "prefix"
    assert context.prefix.value == 3
    mode.handle_key(key("l"))

    assert context.session.cursor == Address(0, 0, 3)
    assert context.prefix.pending is False


def test_navigation_movement_clamps_at_edges() -> None:
    context = make_context(rows=4, cols=3)
    mode = NavigationMode(context)

    for stroke in ("9", "9", "l", "k", "h", "h"):
        mode.handle_key(key(stroke))

    assert context.session.cursor == Address(0, 0, 0)
    mode.handle_key(key("5"))
    mode.handle_key(key("j"))
    assert context.session.cursor == Address(0, 3, 0)


def test_named_keys_move_like_letters() -> None:
    context = make_context()
    mode = NavigationMode(context)

    mode.handle_key(key("TAB"))
    mode.handle_key(key("ENTER"))
    mode.handle_key(key("ENTER"))
    mode.handle_key(key("ENTER", "shift"))

    assert context.session.cursor == Address(0, 1, 1)


def test_non_repeatable_action_discards_prefix() -> None:
    context = make_context()
    mode = NavigationMode(context)

    mode.handle_key(key("4"))
    result = mode.handle_key(key("i"))

    assert result.switch_to == "cell_edit"
    assert context.prefix.pending is False


def test_column_top_pending_sequence() -> None:
    context = make_context()
    context.session.cursor = Address(0, 6, 2)
    mode = NavigationMode(context)

    pending = mode.handle_key(key("g"))
    assert pending.status == "pending"
    assert pending.consumed is True
    assert mode.pending_keys == ("g",)

    mode.handle_key(key("g"))
    assert context.session.cursor == Address(0, 0, 2)


def test_broken_sequence_retries_last_key() -> None:
    context = make_context()
    context.session.cursor = Address(0, 3, 0)
    mode = NavigationMode(context)

    mode.handle_key(key("g"))
    result = mode.handle_key(key("j"))

    assert result.status == "move"
    assert context.session.cursor == Address(0, 4, 0)
    assert mode.pending_keys == ()


def test_unbound_key_clears_prefix() -> None:
    context = make_context()
    mode = NavigationMode(context)

    mode.handle_key(key("2"))
    result = mode.handle_key(key("z"))

    assert result.consumed is False
    assert result.status == "miss"
    assert context.prefix.pending is False


def test_sheet_switch_wraps() -> None:
    context = make_context(sheets=3)
    mode = NavigationMode(context)

    result = mode.handle_key(key("p", "ctrl"))

    assert context.session.cursor.sheet == 2
    assert result.status == "sheet"
    assert result.message == "Sheet3"
    mode.handle_key(key("n", "ctrl"))
    assert context.session.cursor.sheet == 0


def test_navigation_copy_uses_pending_range() -> None:
    context = make_context()
    selection = Range(Address(0, 0, 0), Address(0, 1, 1))
    context.session.pending_range = selection
    mode = NavigationMode(context)

    result = mode.handle_key(key("y"))

    assert result.effects == (CopyCells(selection, include_style=False),)
    assert context.session.pending_range is None
    assert context.extras["keymap_flags"]["range_pending"] is False


def test_paste_with_empty_clipboard() -> None:
    mode = NavigationMode(make_context())

    result = mode.handle_key(key("p"))

    assert result.status == "clipboard_empty"
    assert result.effects == ()


def test_save_binding_emits_write_command() -> None:
    mode = NavigationMode(make_context())

    result = mode.handle_key(key("s", "ctrl"))

    assert len(result.effects) == 1
    assert isinstance(result.effects[0], RunCommand)
    assert result.effects[0].command.tag.value == "write"


def test_cell_edit_inserts_printable_text() -> None:
    context = make_context()
    mode = CellEditMode(context)
    mode.begin(Address(0, 1, 1), "")

    for stroke in "=A1":
        mode.handle_key(key(stroke))
    result = mode.handle_key(key("ENTER"))

    assert result.switch_to == "navigation"
    (effect,) = result.effects
    assert isinstance(effect, WriteCell)
    assert effect.address == Address(0, 1, 1)
    assert effect.text == "=A1"
    assert effect.kind is not None and effect.kind.value == "formula"


def test_cell_edit_digits_are_text_not_prefix() -> None:
    context = make_context()
    mode = CellEditMode(context)
    mode.begin(Address(), "")

    mode.handle_key(key("4"))
    mode.handle_key(key("2"))

    assert mode.buffer.text == "42"
    assert context.prefix.pending is False


def test_cell_edit_ignores_control_chords() -> None:
    mode = CellEditMode(make_context())
    mode.begin(Address(), "x")

    result = mode.handle_key(key("b", "ctrl"))

    assert result.consumed is False
    assert mode.buffer.text == "x"


def test_cell_edit_cursor_keys() -> None:
    mode = CellEditMode(make_context())
    mode.begin(Address(), "abc")

    mode.handle_key(key("HOME"))
    mode.handle_key(key("DELETE"))
    mode.handle_key(key("END"))
    mode.handle_key(key("LEFT"))
    mode.handle_key(key("BACKSPACE"))

    assert mode.buffer.text == "c"


def test_cell_edit_buffer_survives_range_detour_only() -> None:
    mode = CellEditMode(make_context())
    mode.begin(Address(), "=")

    mode.on_exit("range_select")
    assert mode.active is True

    mode.on_exit("navigation")
    assert mode.active is False


def test_cell_edit_paste_inserts_clipboard_text() -> None:
    context = make_context()
    mode = CellEditMode(context)
    mode.begin(Address(), "")

    assert mode.handle_key(key("v", "ctrl")).status == "clipboard_empty"

    context.clipboard.store(ClipboardPayload.from_text("hi"))
    mode.handle_key(key("v", "ctrl"))
    assert mode.buffer.text == "hi"


def test_cell_edit_paste_flattens_block_to_one_line() -> None:
    context = make_context()
    mode = CellEditMode(context)
    mode.begin(Address(), "")
    context.clipboard.store(ClipboardPayload.from_text("1\t2\n\t4"))

    mode.handle_key(key("v", "ctrl"))

    assert mode.buffer.text == "1 2 4"
    assert "\t" not in mode.buffer.text and "\n" not in mode.buffer.text


def test_range_select_mark_then_finish() -> None:
    context = make_context()
    mode = RangeSelectMode(context)
    mode.begin("navigation", Address(0, 0, 1))

    mode.handle_key(key("m"))
    assert mode.anchor == Address(0, 0, 1)
    assert context.extras["keymap_flags"]["range_anchored"] is True

    mode.handle_key(key("2"))
    mode.handle_key(key("j"))
    result = mode.handle_key(key("m"))

    assert result.switch_to == "navigation"
    assert result.selection == Range(Address(0, 0, 1), Address(0, 2, 1))
    assert result.message == "B1:B3"


def test_range_select_leaves_session_cursor_alone() -> None:
    context = make_context()
    mode = RangeSelectMode(context)
    mode.begin("cell_edit", Address(0, 1, 1))

    mode.handle_key(key("l"))

    assert mode.cursor == Address(0, 1, 2)
    assert context.session.cursor == Address(0, 0, 0)


def test_range_select_rejects_unknown_origin() -> None:
    mode = RangeSelectMode(make_context())

    with pytest.raises(ValueError):
        mode.begin("command_line", Address())


def test_range_select_sheet_locked_after_anchor() -> None:
    context = make_context(sheets=2)
    mode = RangeSelectMode(context)
    mode.begin("navigation", Address(), anchored=True)

    result = mode.handle_key(key("n", "ctrl"))

    assert result.status == "range_sheet_locked"
    assert mode.cursor.sheet == 0


def test_range_select_can_change_sheet_before_anchor() -> None:
    context = make_context(sheets=2)
    mode = RangeSelectMode(context)
    mode.begin("navigation", Address())

    mode.handle_key(key("n", "ctrl"))

    assert mode.cursor.sheet == 1
    assert mode.selection == Range.single(Address(1, 0, 0))


def test_range_select_exit_resets_anchor() -> None:
    context = make_context()
    mode = RangeSelectMode(context)
    mode.begin("navigation", Address(), anchored=True)

    mode.on_exit("navigation")

    assert mode.anchor is None
    assert context.extras["keymap_flags"]["range_anchored"] is False


def test_command_line_collects_text_and_submits() -> None:
    context = make_context()
    events: List[tuple[str, object]] = []
    context.bus.subscribe("command.submit", lambda payload: events.append(("submit", payload)))
    mode = CommandLineMode(context)
    mode.on_enter("navigation")

    for stroke in "ir 2":
        mode.handle_key(KeyInput(key=stroke, text=stroke))
    result = mode.handle_key(key("ENTER"))

    assert events == [("submit", "ir 2")]
    assert result.switch_to == "navigation"
    assert result.status == "command_insert-rows"


def test_command_line_reports_parse_errors() -> None:
    mode = CommandLineMode(make_context())
    mode.on_enter("navigation")
    mode.text = "bogus-cmd"

    result = mode.handle_key(key("ENTER"))

    assert result.status == "command_error"
    assert result.switch_to is None
    assert result.error is not None and result.error.kind == "invalid_command"
    assert mode.text == "bogus-cmd"


def test_command_line_backspace_on_empty_leaves() -> None:
    mode = CommandLineMode(make_context())
    mode.on_enter("navigation")
    mode.text = "w"

    assert mode.handle_key(key("BACKSPACE")).switch_to is None
    assert mode.text == ""
    assert mode.handle_key(key("BACKSPACE")).switch_to == "navigation"


def test_command_line_quit_flags_result() -> None:
    mode = CommandLineMode(make_context())
    mode.on_enter("navigation")
    mode.text = "q"

    result = mode.handle_key(key("ENTER"))

    assert result.quit is True
