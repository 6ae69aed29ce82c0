"""Protocol describing the spreadsheet engine the controller drives."""

from __future__ import annotations

from typing import Optional, Protocol

from sheetui.model import Address, CellStyle, ContentKind, SheetExtent


class Workbook(Protocol):
    """Operations the interaction controller consumes from a workbook.

    Implementations signal rejected mutations with ``ValueError`` (or a
    :class:`~sheetui.errors.CollaboratorFailure`) and persistence problems
    with ``OSError`` (or :class:`~sheetui.errors.IOFailure`).
    """

    @property
    def path(self) -> Optional[str]:
        """Location the workbook was loaded from or last saved to."""
        ...

    def sheet_count(self) -> int: ...

    def sheet_name(self, sheet: int) -> str: ...

    def sheet_index(self, name: str) -> int: ...

    def extent(self, sheet: int) -> SheetExtent: ...

    def get_literal(self, address: Address) -> str: ...

    def get_style(self, address: Address) -> CellStyle: ...

    def set_literal(
        self, address: Address, text: str, kind: Optional[ContentKind] = None
    ) -> None: ...

    def set_style(self, address: Address, style: CellStyle) -> None: ...

    def clear_cell(self, address: Address, *, include_style: bool) -> None: ...

    def insert_rows(self, sheet: int, at: int, count: int) -> None: ...

    def insert_columns(self, sheet: int, at: int, count: int) -> None: ...

    def set_row_color(self, sheet: int, row: int, color: str) -> None: ...

    def set_column_color(self, sheet: int, col: int, color: str) -> None: ...

    def rename_sheet(self, sheet: int, name: str) -> None: ...

    def new_sheet(self, name: Optional[str] = None) -> int: ...

    def display_value(self, address: Address) -> str:
        """Formatted value for display; never used for engine decisions."""
        ...

    def load(self, path: str) -> None: ...

    def save(self, path: Optional[str] = None) -> str: ...

    def export_csv(self, sheet: int, path: str) -> None: ...


__all__ = ["Workbook"]
