"""Interaction controller: owns the active mode and applies effects."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Optional, Type, TypeVar

from sheetui.collaborators import SystemClipboard, Workbook
from sheetui.commands import Command, CommandTag, help_text
from sheetui.effects import (
    ClearCells,
    CopyCells,
    PasteCells,
    RunCommand,
    WorkbookEffect,
    WriteCell,
)
from sheetui.errors import (
    CollaboratorFailure,
    InvalidCommand,
    IOFailure,
    SheetUIError,
)
from sheetui.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from sheetui.model import (
    Address,
    ClipboardPayload,
    ClipboardRegister,
    ClipEntry,
    Range,
    RenderState,
    SessionState,
)
from sheetui.modes import (
    CELL_EDIT,
    COMMAND_LINE,
    NAVIGATION,
    RANGE_SELECT,
    CellEditMode,
    CommandLineMode,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    NavigationMode,
    RangeSelectMode,
)
from sheetui.modes.keymap_helpers import update_flag
from sheetui.runtime import EngineConfig, telemetry

R = TypeVar("R")
CommandHandler = Callable[["InteractionController", Command], Optional[str]]

# Statuses whose message is worth showing on the status line.
_ANNOUNCED = frozenset({"range_sheet_locked", "clipboard_empty", "sheet"})


class InteractionController:
    """Routes key events to the active mode and applies the effects it returns.

    The controller is the only component that talks to the workbook and
    the system clipboard. Every such call goes through :meth:`_call`, which
    wraps it in a telemetry span and turns collaborator exceptions into
    :class:`CollaboratorFailure` / :class:`IOFailure`.
    """

    def __init__(
        self,
        workbook: Workbook,
        *,
        clipboard: ClipboardRegister | None = None,
        system_clipboard: SystemClipboard | None = None,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        config: EngineConfig | None = None,
    ) -> None:
        self.workbook = workbook
        self.system_clipboard = system_clipboard
        self.config = config or EngineConfig()
        self.logger = telemetry.get_logger("sheetui.controller")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="sheetui.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="sheetui.keymaps"
        )
        self.context = ModeContext(
            session=SessionState(),
            clipboard=clipboard or ClipboardRegister(),
            bus=ModeBus(),
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("keymap_flags", {})
        self.running = True
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.refresh()
        for mode_cls in (NavigationMode, CellEditMode, RangeSelectMode, CommandLineMode):
            self.register_mode(mode_cls)

    # ------------------------------------------------------------------
    # Mode bookkeeping
    # ------------------------------------------------------------------
    @property
    def session(self) -> SessionState:
        return self.context.session

    @property
    def bus(self) -> ModeBus:
        return self.context.bus

    @property
    def active_mode(self) -> Mode:
        if self._active is None:
            raise RuntimeError("No active mode registered")
        return self._modes[self._active]

    def mode(self, name: str) -> Mode:
        return self._modes[name]

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def _switch(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous.name == name:
            return
        previous.on_exit(name)
        self._active = name
        self.context.prefix.clear()
        self._modes[name].on_enter(previous.name)
        update_flag(
            self.context, "range_pending", self.session.pending_range is not None
        )
        self.bus.emit("mode.switch", {"from": previous.name, "to": name})
        telemetry.record_event(
            "mode.switch", data={"from": previous.name, "to": name}
        )

    # ------------------------------------------------------------------
    # Key handling
    # ------------------------------------------------------------------
    def handle_key(self, key: KeyInput) -> ModeResult:
        if not self.running:
            return ModeResult(consumed=False, status="stopped")
        self.session.popup = None
        self.session.status = ""
        try:
            self.refresh()
        except SheetUIError as exc:
            self._set_status(str(exc))
            return ModeResult(consumed=False, status="refresh_failed", error=exc)

        mode = self.active_mode
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(mode, result)

    def _after_mode_result(self, mode: Mode, result: ModeResult) -> ModeResult:
        for effect in result.effects:
            try:
                self._apply_effect(effect)
            except SheetUIError as exc:
                return self._effect_failed(mode, result, exc)

        if result.error is not None:
            self._set_status(str(result.error))
            telemetry.record_event(
                "command.error",
                level="warning",
                data={"kind": result.error.kind, "error": str(result.error)},
                logger_name="sheetui.controller",
            )
        elif result.status in _ANNOUNCED and result.message:
            self._set_status(result.message)

        if result.quit:
            self.running = False
            self.bus.emit("quit", None)
            telemetry.record_event("controller.quit", logger_name="sheetui.controller")
            return result

        if result.switch_to:
            try:
                self._transition(mode, result)
            except SheetUIError as exc:
                return self._effect_failed(mode, result, exc)

        # Effects may have shrunk the sheet under the cursor.
        self.session.set_cursor(self.session.cursor)
        return result

    def _effect_failed(
        self, mode: Mode, result: ModeResult, error: SheetUIError
    ) -> ModeResult:
        self._set_status(str(error))
        telemetry.record_event(
            "effect.failed",
            level="error",
            data={"mode": mode.name, "kind": error.kind, "error": str(error)},
            logger_name="sheetui.controller",
        )
        self.session.set_cursor(self.session.cursor)
        return replace(
            result,
            switch_to=None,
            quit=False,
            status="effect_failed",
            message=str(error),
            error=error,
        )

    def _transition(self, source: Mode, result: ModeResult) -> None:
        target = result.switch_to
        assert target is not None

        if target == RANGE_SELECT:
            if source.name == NAVIGATION:
                self.session.pending_range = None
            self._switch(RANGE_SELECT)
            selector = self._range_mode
            selector.begin(source.name, self.session.cursor, anchored=result.anchor)
            return

        if source.name == RANGE_SELECT:
            selection = result.selection
            self._switch(target)
            if selection is None:
                return
            if target == CELL_EDIT:
                self._splice_reference(selection)
            elif target == NAVIGATION:
                self.session.pending_range = selection
                update_flag(self.context, "range_pending", True)
            return

        if target == CELL_EDIT and source.name == NAVIGATION:
            cursor = self.session.cursor
            literal = self._call("get_literal", self.workbook.get_literal, cursor)
            self._edit_mode.begin(cursor, literal)
        self._switch(target)

    def _splice_reference(self, selection: Range) -> None:
        editor = self._edit_mode
        target_sheet = editor.buffer.target.sheet
        sheet_name = None
        if selection.sheet != target_sheet:
            sheet_name = self.session.sheet_name(selection.sheet)
        editor.insert_reference(selection.to_reference(sheet_name))

    @property
    def _edit_mode(self) -> CellEditMode:
        mode = self._modes[CELL_EDIT]
        assert isinstance(mode, CellEditMode)
        return mode

    @property
    def _range_mode(self) -> RangeSelectMode:
        mode = self._modes[RANGE_SELECT]
        assert isinstance(mode, RangeSelectMode)
        return mode

    @property
    def _command_mode(self) -> CommandLineMode:
        mode = self._modes[COMMAND_LINE]
        assert isinstance(mode, CommandLineMode)
        return mode

    # ------------------------------------------------------------------
    # Collaborator access
    # ------------------------------------------------------------------
    def _call(
        self, operation: str, func: Callable[..., R], *args: object, **kwargs: object
    ) -> R:
        with telemetry.span(
            name=f"workbook::{operation}",
            logger_name="sheetui.controller",
            component="workbook",
            metadata={"operation": operation},
        ) as handle:
            try:
                return func(*args, **kwargs)
            except SheetUIError as exc:
                handle.warn(str(exc))
                if exc.operation is None:
                    exc.operation = operation
                raise
            except OSError as exc:
                handle.warn(str(exc))
                raise IOFailure(f"{operation} failed: {exc}", operation=operation) from exc
            except (ValueError, KeyError, IndexError) as exc:
                handle.warn(str(exc))
                message = exc.args[0] if exc.args else repr(exc)
                raise CollaboratorFailure(str(message), operation=operation) from exc

    def refresh(self) -> None:
        """Re-read sheet names and extents so modes see the current shape."""

        count = self._call("sheet_count", self.workbook.sheet_count)
        self.session.extents = tuple(
            self._call("extent", self.workbook.extent, index) for index in range(count)
        )
        self.session.sheet_names = tuple(
            self._call("sheet_name", self.workbook.sheet_name, index)
            for index in range(count)
        )
        self.session.set_cursor(self.session.cursor)

    def display_value(self, address: Address) -> str:
        return self._call("display_value", self.workbook.display_value, address)

    def _set_status(self, message: str) -> None:
        self.session.status = message
        self.bus.emit("status", message)

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------
    def _apply_effect(self, effect: WorkbookEffect) -> None:
        if isinstance(effect, WriteCell):
            self._call(
                "set_literal", self.workbook.set_literal, effect.address, effect.text, effect.kind
            )
            self.bus.emit("cell.written", effect.address)
        elif isinstance(effect, ClearCells):
            for address in effect.range.addresses():
                self._call(
                    "clear_cell",
                    self.workbook.clear_cell,
                    address,
                    include_style=effect.include_style,
                )
        elif isinstance(effect, CopyCells):
            self._copy(effect)
        elif isinstance(effect, PasteCells):
            self._paste(effect.target)
        elif isinstance(effect, RunCommand):
            self._run_command(effect.command)
        else:  # pragma: no cover - exhaustive over WorkbookEffect
            raise TypeError(f"Unsupported effect {effect!r}")

    def _copy(self, effect: CopyCells) -> None:
        rows = tuple(
            tuple(
                ClipEntry(
                    self._call("get_literal", self.workbook.get_literal, address),
                    self._call("get_style", self.workbook.get_style, address)
                    if effect.include_style
                    else None,
                )
                for address in row
            )
            for row in effect.range.rows()
        )
        payload = ClipboardPayload(rows=rows, include_style=effect.include_style)
        self.context.clipboard.store(payload)
        self.bus.emit("clipboard.copy", payload)
        if self.system_clipboard is not None:
            self._export_to_system(payload)

    def _export_to_system(self, payload: ClipboardPayload) -> None:
        """Mirror a copy to the desktop clipboard; the register already holds it."""

        assert self.system_clipboard is not None
        try:
            self._call("clipboard_write", self.system_clipboard.write_text, payload.text)
        except SheetUIError as exc:
            self._set_status(str(exc))
            telemetry.record_event(
                "clipboard.system_failed",
                level="warning",
                data={"kind": exc.kind, "error": str(exc)},
                logger_name="sheetui.controller",
            )

    def _paste(self, target: Address) -> None:
        payload = self.context.clipboard.payload
        if payload is None:
            return
        extent = self.session.extent(target.sheet)
        for dr, dc, entry in payload.entries():
            row, col = target.row + dr, target.col + dc
            if row >= extent.rows or col >= extent.cols:
                continue
            address = target.with_position(row, col)
            self._call("set_literal", self.workbook.set_literal, address, entry.content)
            if payload.include_style and entry.style is not None:
                self._call("set_style", self.workbook.set_style, address, entry.style)

    def _run_command(self, command: Command) -> None:
        handler = _COMMAND_HANDLERS.get(command.tag)
        if handler is None:  # pragma: no cover - quit is handled by the mode
            raise InvalidCommand(f"Unsupported command '{command.tag.value}'")
        with telemetry.span(
            name=f"command::{command.tag.value}",
            logger_name="sheetui.controller",
            component="commands",
            metadata={"tag": command.tag.value},
        ):
            message = handler(self, command)
        if message:
            self.logger.info(message)
            self._set_status(message)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render_state(self) -> RenderState:
        mode = self.active_mode
        session = self.session
        cursor = session.cursor
        edit_text = edit_cursor = edit_kind = command_text = None
        if mode.name in (CELL_EDIT, RANGE_SELECT) and self._edit_mode.active:
            buffer = self._edit_mode.buffer
            edit_text, edit_cursor, edit_kind = buffer.text, buffer.cursor, buffer.kind
        if mode.name == COMMAND_LINE:
            command_text = self._command_mode.text
        pending = session.pending_range
        if mode.name == RANGE_SELECT:
            cursor = self._range_mode.cursor
            pending = self._range_mode.selection
        return RenderState(
            mode=mode.name,
            cursor=cursor,
            sheet_name=session.sheet_name(cursor.sheet),
            prefix=self.context.prefix.value,
            pending_range=pending,
            edit_text=edit_text,
            edit_cursor=edit_cursor,
            edit_kind=edit_kind,
            command_text=command_text,
            status=session.status,
            popup=session.popup,
        )


# ----------------------------------------------------------------------
# Command handlers; each returns an optional status message.
# ----------------------------------------------------------------------
def _handle_write(controller: InteractionController, command: Command) -> str:
    path = controller._call("save", controller.workbook.save, command.path)
    return f"Saved {path}"


def _handle_insert_rows(controller: InteractionController, command: Command) -> None:
    cursor = controller.session.cursor
    controller._call(
        "insert_rows", controller.workbook.insert_rows, cursor.sheet, cursor.row, command.count or 1
    )
    controller.refresh()


def _handle_insert_cols(controller: InteractionController, command: Command) -> None:
    cursor = controller.session.cursor
    controller._call(
        "insert_columns",
        controller.workbook.insert_columns,
        cursor.sheet,
        cursor.col,
        command.count or 1,
    )
    controller.refresh()


def _handle_color_rows(controller: InteractionController, command: Command) -> None:
    cursor = controller.session.cursor
    extent = controller.session.extent(cursor.sheet)
    last = min(cursor.row + (command.count or 1), extent.rows)
    for row in range(cursor.row, last):
        controller._call(
            "set_row_color", controller.workbook.set_row_color, cursor.sheet, row, command.color
        )


def _handle_color_cols(controller: InteractionController, command: Command) -> None:
    cursor = controller.session.cursor
    extent = controller.session.extent(cursor.sheet)
    last = min(cursor.col + (command.count or 1), extent.cols)
    for col in range(cursor.col, last):
        controller._call(
            "set_column_color",
            controller.workbook.set_column_color,
            cursor.sheet,
            col,
            command.color,
        )


def _handle_color_cell(controller: InteractionController, command: Command) -> None:
    cursor = controller.session.cursor
    style = controller._call("get_style", controller.workbook.get_style, cursor)
    controller._call(
        "set_style", controller.workbook.set_style, cursor, replace(style, background=command.color)
    )


def _handle_rename_sheet(controller: InteractionController, command: Command) -> str:
    index = controller.session.cursor.sheet if command.index is None else command.index
    controller._call("rename_sheet", controller.workbook.rename_sheet, index, command.name)
    controller.refresh()
    return f"Renamed sheet {index} to {command.name}"


def _handle_new_sheet(controller: InteractionController, command: Command) -> str:
    index = controller._call("new_sheet", controller.workbook.new_sheet, command.name)
    controller.refresh()
    cursor = controller.session.cursor
    controller.session.set_cursor(Address(index, cursor.row, cursor.col))
    return f"Created sheet {controller.session.sheet_name(index)}"


def _handle_select_sheet(controller: InteractionController, command: Command) -> None:
    index = controller._call("sheet_index", controller.workbook.sheet_index, command.name)
    cursor = controller.session.cursor
    controller.session.set_cursor(Address(index, cursor.row, cursor.col))


def _handle_edit(controller: InteractionController, command: Command) -> str:
    controller._call("load", controller.workbook.load, command.path)
    controller.session.pending_range = None
    controller.session.cursor = Address()
    controller.refresh()
    return f"Opened {command.path}"


def _handle_help(controller: InteractionController, command: Command) -> None:
    text = help_text(command.topic)
    if text is None:
        raise InvalidCommand(f"No help topic '{command.topic}'", line=f"help {command.topic}")
    controller.session.popup = text


def _handle_export_csv(controller: InteractionController, command: Command) -> str:
    sheet = controller.session.cursor.sheet
    controller._call("export_csv", controller.workbook.export_csv, sheet, command.path)
    return f"Exported {controller.session.sheet_name(sheet)} to {command.path}"


def _handle_system_paste(controller: InteractionController, command: Command) -> None:
    del command
    if controller.system_clipboard is None:
        raise IOFailure("No system clipboard configured", operation="clipboard_read")
    text = controller._call("clipboard_read", controller.system_clipboard.read_text)
    if not text:
        return
    controller.context.clipboard.store(ClipboardPayload.from_text(text))
    controller._paste(controller.session.cursor)


_COMMAND_HANDLERS: Dict[CommandTag, CommandHandler] = {
    CommandTag.WRITE: _handle_write,
    CommandTag.INSERT_ROWS: _handle_insert_rows,
    CommandTag.INSERT_COLS: _handle_insert_cols,
    CommandTag.COLOR_ROWS: _handle_color_rows,
    CommandTag.COLOR_COLS: _handle_color_cols,
    CommandTag.COLOR_CELL: _handle_color_cell,
    CommandTag.RENAME_SHEET: _handle_rename_sheet,
    CommandTag.NEW_SHEET: _handle_new_sheet,
    CommandTag.SELECT_SHEET: _handle_select_sheet,
    CommandTag.EDIT: _handle_edit,
    CommandTag.HELP: _handle_help,
    CommandTag.EXPORT_CSV: _handle_export_csv,
    CommandTag.SYSTEM_PASTE: _handle_system_paste,
}


__all__ = ["InteractionController"]
