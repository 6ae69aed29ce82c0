"""Cell editing mode backed by an :class:`EditBuffer`."""

from __future__ import annotations

from typing import Optional

from sheetui.model import Address, EditBuffer

from .base_mode import CELL_EDIT, RANGE_SELECT, KeyInput, ModeContext, ModeResult
from .keymap_helpers import KeymapMode


class CellEditMode(KeymapMode):
    """Edits one cell's literal.

    The buffer survives a detour through range selection; it is dropped
    when the mode is left for anything else.
    """

    name = CELL_EDIT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._buffer: Optional[EditBuffer] = None

    @property
    def buffer(self) -> EditBuffer:
        if self._buffer is None:
            self._buffer = EditBuffer(target=self.context.session.cursor)
        return self._buffer

    @property
    def active(self) -> bool:
        return self._buffer is not None

    def begin(self, target: Address, literal: str) -> None:
        self._buffer = EditBuffer.load(target, literal)

    def insert_reference(self, text: str) -> None:
        self.buffer.insert(text)

    def discard(self) -> None:
        self._buffer = None

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        if next_mode != RANGE_SELECT:
            self.discard()

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if not key.text or {"ctrl", "alt"} & {m.lower() for m in key.modifiers}:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        if not key.text.isprintable():
            return ModeResult(consumed=False, status="miss", message="unhandled")
        self.buffer.insert(key.text)
        return ModeResult(consumed=True, status="edit")
