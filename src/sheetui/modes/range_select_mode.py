"""Range selection with an origin to hand the result back to."""

from __future__ import annotations

from typing import Optional

from sheetui.model import Address, Range

from .base_mode import NAVIGATION, RANGE_ORIGINS, RANGE_SELECT, ModeContext
from .keymap_helpers import KeymapMode, update_flag


class RangeSelectMode(KeymapMode):
    """Owns its own live cursor so the caller's cursor is left alone.

    Until an anchor is set the selection is just the cursor cell and the
    cursor may change sheets; afterwards the sheet is locked.
    """

    name = RANGE_SELECT
    accepts_prefix = True

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.origin: str = NAVIGATION
        self.anchor: Optional[Address] = None
        self._cursor: Address = context.session.cursor

    @property
    def cursor(self) -> Address:
        return self._cursor

    @cursor.setter
    def cursor(self, address: Address) -> None:
        self._cursor = self.context.session.clamp(address)

    @property
    def can_switch_sheet(self) -> bool:
        return self.anchor is None

    @property
    def selection(self) -> Range:
        if self.anchor is None:
            return Range.single(self._cursor)
        return Range(self.anchor, self._cursor)

    def begin(self, origin: str, cursor: Address, *, anchored: bool = False) -> None:
        if origin not in RANGE_ORIGINS:
            raise ValueError(f"range selection cannot return to '{origin}'")
        self.origin = origin
        self.anchor = None
        self.cursor = cursor
        update_flag(self.context, "range_anchored", False)
        if anchored:
            self.mark_anchor()

    def mark_anchor(self) -> None:
        self.anchor = self._cursor
        update_flag(self.context, "range_anchored", True)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.anchor = None
        update_flag(self.context, "range_anchored", False)
