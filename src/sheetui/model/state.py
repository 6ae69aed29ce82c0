"""Session and render state owned by the interaction controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .address import Address, Range, SheetExtent
from .cell import ContentKind


@dataclass(slots=True)
class SessionState:
    """Cursor plus the workbook shape snapshot modes navigate against.

    ``extents`` and ``sheet_names`` are refreshed by the controller from
    the workbook before every key so modes never query it themselves.
    """

    cursor: Address = field(default_factory=Address)
    extents: Tuple[SheetExtent, ...] = (SheetExtent(),)
    sheet_names: Tuple[str, ...] = ("Sheet1",)
    pending_range: Optional[Range] = None
    status: str = ""
    popup: Optional[str] = None

    @property
    def sheet_count(self) -> int:
        return len(self.extents)

    def extent(self, sheet: Optional[int] = None) -> SheetExtent:
        index = self.cursor.sheet if sheet is None else sheet
        if 0 <= index < len(self.extents):
            return self.extents[index]
        return SheetExtent()

    def sheet_name(self, sheet: Optional[int] = None) -> str:
        index = self.cursor.sheet if sheet is None else sheet
        if 0 <= index < len(self.sheet_names):
            return self.sheet_names[index]
        return ""

    def clamp(self, address: Address) -> Address:
        if address.sheet >= self.sheet_count:
            address = Address(max(0, self.sheet_count - 1), address.row, address.col)
        return address.clamp(self.extent(address.sheet))

    def set_cursor(self, address: Address) -> Address:
        self.cursor = self.clamp(address)
        return self.cursor


@dataclass(frozen=True, slots=True)
class RenderState:
    """Read-only snapshot handed to the renderer after each key."""

    mode: str
    cursor: Address
    sheet_name: str
    prefix: Optional[int] = None
    pending_range: Optional[Range] = None
    edit_text: Optional[str] = None
    edit_cursor: Optional[int] = None
    edit_kind: Optional[ContentKind] = None
    command_text: Optional[str] = None
    status: str = ""
    popup: Optional[str] = None


__all__ = ["SessionState", "RenderState"]
