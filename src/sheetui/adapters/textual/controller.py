"""Textual-facing adapter that forwards key events into the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from sheetui.controller import InteractionController
from sheetui.model import Address, RenderState, column_name
from sheetui.modes import CELL_EDIT, COMMAND_LINE, KeyInput, ModeResult
from sheetui.runtime.input_log import InputLogWriter

NormalizedKey = Tuple[str, Optional[str], Tuple[str, ...]]

_NAMED_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
}
_MODIFIERS = frozenset({"ctrl", "alt", "meta", "shift"})


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def normalize_key(key: str, character: Optional[str] = None) -> Optional[NormalizedKey]:
    """Translate a Textual key name (``"ctrl+n"``, ``"shift+tab"``) into engine terms.

    Returns ``None`` for keys the host application keeps for itself.
    """

    if key in {"ctrl+c", "ctrl+q"}:
        return None
    parts = key.split("+")
    modifiers = tuple(
        "alt" if part == "meta" else part for part in parts[:-1] if part in _MODIFIERS
    )
    base = parts[-1]
    named = _NAMED_KEYS.get(base)
    if named is not None:
        return (named, None, modifiers)
    if character and len(character) == 1 and character.isprintable():
        if not {"ctrl", "alt"} & set(modifiers):
            return (character, character, ())
    if len(base) == 1:
        return (base, None, modifiers)
    return (base.upper(), None, modifiers)


def format_grid(
    controller: InteractionController,
    state: RenderState,
    *,
    height: int = 20,
    width: int = 8,
    col_width: int = 10,
) -> str:
    """Render the page of cells around the cursor as plain text.

    The cursor cell is bracketed and cells of the pending range are
    starred.
    """

    cursor = state.cursor
    extent = controller.session.extent(cursor.sheet)
    top = (cursor.row // height) * height
    left = (cursor.col // width) * width
    rows = range(top, min(top + height, extent.rows))
    cols = range(left, min(left + width, extent.cols))
    inner = col_width - 2

    lines = [" " * 6 + "".join(f" {column_name(c):<{inner}} " for c in cols)]
    for row in rows:
        cells = []
        for col in cols:
            address = Address(cursor.sheet, row, col)
            text = controller.display_value(address)[:inner]
            if address == cursor:
                cells.append(f"[{text:<{inner}}]")
            elif state.pending_range is not None and state.pending_range.contains(address):
                cells.append(f"*{text:<{inner}}*")
            else:
                cells.append(f" {text:<{inner}} ")
        lines.append(f"{row + 1:>5} " + "".join(cells))
    return "\n".join(lines)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_grid: Callable[[RenderState], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    show_popup: Callable[[Optional[str]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional debug line sink a host may surface
    log: Callable[[str], None] = _noop


class TextualSheetAdapter:
    """Bridges the controller and its bus events to a Textual-friendly surface."""

    def __init__(
        self,
        controller: InteractionController,
        hooks: TextualUIHooks,
        *,
        input_log: InputLogWriter | None = None,
    ) -> None:
        self.controller = controller
        self.hooks = hooks
        self.input_log = input_log
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a normalized key into a KeyInput and dispatch it."""

        event = KeyInput(
            key=key, text=text, modifiers=tuple(str(m).lower() for m in modifiers)
        )
        self._log_state("key ->", key=key, text=text, mods=event.modifiers)
        if self.input_log is not None:
            self.input_log.record(event)
        result = self.controller.handle_key(event)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        self.refresh()
        return result

    def refresh(self) -> RenderState:
        state = self.controller.render_state()
        self.hooks.update_grid(state)
        self.hooks.update_status(self._status_line(state))
        self.hooks.show_command(self._command_line(state))
        self.hooks.show_popup(state.popup)
        return state

    @staticmethod
    def _status_line(state: RenderState) -> str:
        parts = [
            state.mode.upper().replace("_", "-"),
            f"{state.sheet_name}!{state.cursor.to_a1()}",
        ]
        if state.prefix is not None:
            parts.append(str(state.prefix))
        if state.pending_range is not None:
            parts.append(state.pending_range.to_reference())
        if state.status:
            parts.append(state.status)
        return "  ".join(parts)

    @staticmethod
    def _command_line(state: RenderState) -> str:
        if state.mode == COMMAND_LINE:
            return f":{state.command_text or ''}"
        if state.edit_text is not None:
            marker = ">" if state.mode == CELL_EDIT else "~"
            return f"{marker} {state.edit_text}"
        return ""

    def _subscribe_events(self) -> None:
        bus = self.controller.bus
        for event in (
            "mode.switch",
            "cell.commit",
            "range.mark",
            "range.finish",
            "command.submit",
            "command.error",
            "clipboard.copy",
            "quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "mode": self.controller.active_mode.name,
            "cursor": self.controller.session.cursor.to_a1(),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = [
    "TextualSheetAdapter",
    "TextualUIHooks",
    "format_grid",
    "normalize_key",
]
