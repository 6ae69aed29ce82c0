"""Cell coordinates, sheet extents and rectangular ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from sheetui.errors import OutOfBounds

MAX_ROWS = 1_048_576
MAX_COLS = 16_384


def column_name(col: int) -> str:
    """Return the A1-style letters for a zero-based column index."""

    if col < 0:
        raise OutOfBounds(f"Column {col} is negative")
    letters = []
    value = col + 1
    while value:
        value, remainder = divmod(value - 1, 26)
        letters.append(chr(ord("A") + remainder))
    return "".join(reversed(letters))


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper - 1))


@dataclass(frozen=True, slots=True)
class SheetExtent:
    """Row and column counts the workbook reports for one sheet."""

    rows: int = 1
    cols: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", max(1, min(self.rows, MAX_ROWS)))
        object.__setattr__(self, "cols", max(1, min(self.cols, MAX_COLS)))

    def contains(self, address: "Address") -> bool:
        return address.row < self.rows and address.col < self.cols


@dataclass(frozen=True, order=True, slots=True)
class Address:
    """Zero-based (sheet, row, column) coordinate."""

    sheet: int = 0
    row: int = 0
    col: int = 0

    def __post_init__(self) -> None:
        if self.sheet < 0:
            raise OutOfBounds(f"Sheet index {self.sheet} is negative")
        if not 0 <= self.row < MAX_ROWS:
            raise OutOfBounds(f"Row {self.row} outside 0..{MAX_ROWS - 1}")
        if not 0 <= self.col < MAX_COLS:
            raise OutOfBounds(f"Column {self.col} outside 0..{MAX_COLS - 1}")

    def with_position(self, row: int, col: int) -> "Address":
        return Address(self.sheet, row, col)

    def offset(self, rows: int, cols: int) -> "Address":
        return Address(self.sheet, self.row + rows, self.col + cols)

    def clamp(self, extent: SheetExtent) -> "Address":
        """Pull the address back inside ``extent`` without wrapping."""

        return Address(
            self.sheet, _clamp(self.row, extent.rows), _clamp(self.col, extent.cols)
        )

    def to_a1(self) -> str:
        return f"{column_name(self.col)}{self.row + 1}"


@dataclass(frozen=True, slots=True)
class Range:
    """Axis-aligned rectangle spanned by an anchor and a cursor.

    The pair keeps the order it was selected in; ``top_left`` and
    ``bottom_right`` give the normalized corners.
    """

    anchor: Address
    cursor: Address

    def __post_init__(self) -> None:
        if self.anchor.sheet != self.cursor.sheet:
            raise OutOfBounds(
                "Ranges cannot span sheets "
                f"({self.anchor.sheet} != {self.cursor.sheet})"
            )

    @classmethod
    def single(cls, address: Address) -> "Range":
        return cls(address, address)

    @property
    def sheet(self) -> int:
        return self.anchor.sheet

    @property
    def top_left(self) -> Address:
        return Address(
            self.sheet,
            min(self.anchor.row, self.cursor.row),
            min(self.anchor.col, self.cursor.col),
        )

    @property
    def bottom_right(self) -> Address:
        return Address(
            self.sheet,
            max(self.anchor.row, self.cursor.row),
            max(self.anchor.col, self.cursor.col),
        )

    @property
    def height(self) -> int:
        return self.bottom_right.row - self.top_left.row + 1

    @property
    def width(self) -> int:
        return self.bottom_right.col - self.top_left.col + 1

    def contains(self, address: Address) -> bool:
        start, end = self.top_left, self.bottom_right
        return (
            address.sheet == self.sheet
            and start.row <= address.row <= end.row
            and start.col <= address.col <= end.col
        )

    def rows(self) -> Tuple[Tuple[Address, ...], ...]:
        start = self.top_left
        return tuple(
            tuple(start.offset(dr, dc) for dc in range(self.width))
            for dr in range(self.height)
        )

    def addresses(self) -> Iterator[Address]:
        for row in self.rows():
            yield from row

    def to_reference(self, sheet_name: Optional[str] = None) -> str:
        start, end = self.top_left, self.bottom_right
        text = start.to_a1() if start == end else f"{start.to_a1()}:{end.to_a1()}"
        if sheet_name:
            return f"{sheet_name}!{text}"
        return text


__all__ = [
    "MAX_ROWS",
    "MAX_COLS",
    "Address",
    "Range",
    "SheetExtent",
    "column_name",
]
