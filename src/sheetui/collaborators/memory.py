"""In-memory workbook used by the launcher and the test-suite."""

from __future__ import annotations

import csv
import json
import re
from dataclasses import asdict, dataclass, field, replace
from typing import Dict, List, Optional, Tuple, TypeVar

from sheetui.errors import CollaboratorFailure, IOFailure
from sheetui.model import (
    DEFAULT_STYLE,
    MAX_COLS,
    MAX_ROWS,
    Address,
    CellStyle,
    ContentKind,
    SheetExtent,
)
from sheetui.runtime import telemetry

NAMED_COLORS = frozenset(
    {
        "black",
        "blue",
        "cyan",
        "gray",
        "green",
        "magenta",
        "orange",
        "purple",
        "red",
        "white",
        "yellow",
    }
)
_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

Position = Tuple[int, int]
T = TypeVar("T")


def validate_color(color: str) -> str:
    value = color.strip()
    if value.lower() in NAMED_COLORS:
        return value.lower()
    if _HEX_COLOR.match(value):
        return value.lower()
    raise ValueError(f"Unknown color '{color}'")


def _check_formula(text: str) -> None:
    body = text[1:].strip()
    if not body:
        raise CollaboratorFailure("Formula is empty", operation="set_literal")
    depth = 0
    for char in body:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                break
    if depth != 0:
        raise CollaboratorFailure(
            f"Unbalanced parentheses in formula '{text}'", operation="set_literal"
        )


def _shift(
    mapping: Dict[Position, T], *, axis: int, at: int, count: int
) -> Dict[Position, T]:
    shifted: Dict[Position, T] = {}
    for pos, value in mapping.items():
        if pos[axis] >= at:
            pos = (pos[0] + count, pos[1]) if axis == 0 else (pos[0], pos[1] + count)
        shifted[pos] = value
    return shifted


@dataclass
class _Sheet:
    name: str
    rows: int
    cols: int
    cells: Dict[Position, str] = field(default_factory=dict)
    styles: Dict[Position, CellStyle] = field(default_factory=dict)
    row_colors: Dict[int, str] = field(default_factory=dict)
    col_colors: Dict[int, str] = field(default_factory=dict)

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "rows": self.rows,
            "cols": self.cols,
            "cells": [[r, c, text] for (r, c), text in sorted(self.cells.items())],
            "styles": [
                [r, c, asdict(style)] for (r, c), style in sorted(self.styles.items())
            ],
            "row_colors": {str(k): v for k, v in self.row_colors.items()},
            "col_colors": {str(k): v for k, v in self.col_colors.items()},
        }

    @classmethod
    def from_json(cls, data: dict) -> "_Sheet":
        return cls(
            name=str(data["name"]),
            rows=int(data["rows"]),
            cols=int(data["cols"]),
            cells={(int(r), int(c)): str(text) for r, c, text in data.get("cells", [])},
            styles={
                (int(r), int(c)): CellStyle(**style)
                for r, c, style in data.get("styles", [])
            },
            row_colors={int(k): v for k, v in data.get("row_colors", {}).items()},
            col_colors={int(k): v for k, v in data.get("col_colors", {}).items()},
        )


class InMemoryWorkbook:
    """Dictionary-backed workbook with JSON persistence and CSV export.

    Formulas are stored verbatim; nothing is evaluated.
    """

    def __init__(
        self,
        *,
        path: Optional[str] = None,
        rows: int = 100,
        cols: int = 26,
        sheet_names: Tuple[str, ...] = ("Sheet1",),
        locale: str = "en",
        timezone: str = "America/New_York",
    ) -> None:
        self._path = path
        self._default_rows = rows
        self._default_cols = cols
        self.locale = locale
        self.timezone = timezone
        self.logger = telemetry.get_logger("sheetui.workbook")
        self._sheets: List[_Sheet] = [
            _Sheet(name=name, rows=rows, cols=cols) for name in sheet_names
        ]

    @classmethod
    def open(cls, path: str, **kwargs: object) -> "InMemoryWorkbook":
        workbook = cls(path=path, **kwargs)  # type: ignore[arg-type]
        workbook.load(path)
        return workbook

    @property
    def path(self) -> Optional[str]:
        return self._path

    def _sheet(self, index: int) -> _Sheet:
        if not 0 <= index < len(self._sheets):
            raise IndexError(f"Invalid sheet index {index}")
        return self._sheets[index]

    def sheet_count(self) -> int:
        return len(self._sheets)

    def sheet_name(self, sheet: int) -> str:
        return self._sheet(sheet).name

    def sheet_index(self, name: str) -> int:
        for index, sheet in enumerate(self._sheets):
            if sheet.name == name:
                return index
        raise KeyError(f"No sheet named '{name}'")

    def extent(self, sheet: int) -> SheetExtent:
        data = self._sheet(sheet)
        return SheetExtent(rows=data.rows, cols=data.cols)

    def get_literal(self, address: Address) -> str:
        return self._sheet(address.sheet).cells.get((address.row, address.col), "")

    def get_style(self, address: Address) -> CellStyle:
        sheet = self._sheet(address.sheet)
        style = sheet.styles.get((address.row, address.col), DEFAULT_STYLE)
        if style.background is None:
            inherited = sheet.row_colors.get(address.row) or sheet.col_colors.get(
                address.col
            )
            if inherited:
                style = replace(style, background=inherited)
        return style

    def set_literal(
        self, address: Address, text: str, kind: Optional[ContentKind] = None
    ) -> None:
        sheet = self._sheet(address.sheet)
        if kind is ContentKind.FORMULA or (kind is None and text.startswith("=")):
            _check_formula(text)
        if text:
            sheet.cells[(address.row, address.col)] = text
        else:
            sheet.cells.pop((address.row, address.col), None)

    def set_style(self, address: Address, style: CellStyle) -> None:
        sheet = self._sheet(address.sheet)
        for color in (style.background, style.foreground):
            if color is not None:
                validate_color(color)
        if style == DEFAULT_STYLE:
            sheet.styles.pop((address.row, address.col), None)
        else:
            sheet.styles[(address.row, address.col)] = style

    def clear_cell(self, address: Address, *, include_style: bool) -> None:
        sheet = self._sheet(address.sheet)
        sheet.cells.pop((address.row, address.col), None)
        if include_style:
            sheet.styles.pop((address.row, address.col), None)

    def insert_rows(self, sheet: int, at: int, count: int) -> None:
        data = self._sheet(sheet)
        if count <= 0:
            raise ValueError("Row count must be positive")
        if data.rows + count > MAX_ROWS:
            raise CollaboratorFailure(
                f"Cannot grow past {MAX_ROWS} rows", operation="insert_rows"
            )
        data.cells = _shift(data.cells, axis=0, at=at, count=count)
        data.styles = _shift(data.styles, axis=0, at=at, count=count)
        data.row_colors = {
            (row + count if row >= at else row): color
            for row, color in data.row_colors.items()
        }
        data.rows += count
        telemetry.record_event(
            "workbook.insert_rows",
            level="debug",
            data={"sheet": sheet, "at": at, "count": count},
            logger_name="sheetui.workbook",
        )

    def insert_columns(self, sheet: int, at: int, count: int) -> None:
        data = self._sheet(sheet)
        if count <= 0:
            raise ValueError("Column count must be positive")
        if data.cols + count > MAX_COLS:
            raise CollaboratorFailure(
                f"Cannot grow past {MAX_COLS} columns", operation="insert_columns"
            )
        data.cells = _shift(data.cells, axis=1, at=at, count=count)
        data.styles = _shift(data.styles, axis=1, at=at, count=count)
        data.col_colors = {
            (col + count if col >= at else col): color
            for col, color in data.col_colors.items()
        }
        data.cols += count
        telemetry.record_event(
            "workbook.insert_columns",
            level="debug",
            data={"sheet": sheet, "at": at, "count": count},
            logger_name="sheetui.workbook",
        )

    def set_row_color(self, sheet: int, row: int, color: str) -> None:
        self._sheet(sheet).row_colors[row] = validate_color(color)

    def set_column_color(self, sheet: int, col: int, color: str) -> None:
        self._sheet(sheet).col_colors[col] = validate_color(color)

    def rename_sheet(self, sheet: int, name: str) -> None:
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("Sheet name cannot be empty")
        if any(s.name == cleaned for i, s in enumerate(self._sheets) if i != sheet):
            raise ValueError(f"Sheet '{cleaned}' already exists")
        self._sheet(sheet).name = cleaned

    def new_sheet(self, name: Optional[str] = None) -> int:
        if name is None:
            taken = {sheet.name for sheet in self._sheets}
            suffix = len(self._sheets) + 1
            while f"Sheet{suffix}" in taken:
                suffix += 1
            name = f"Sheet{suffix}"
        elif any(sheet.name == name for sheet in self._sheets):
            raise ValueError(f"Sheet '{name}' already exists")
        self._sheets.append(
            _Sheet(name=name, rows=self._default_rows, cols=self._default_cols)
        )
        return len(self._sheets) - 1

    def display_value(self, address: Address) -> str:
        return self.get_literal(address)

    def load(self, path: str) -> None:
        with open(path, encoding="utf-8") as handle:
            try:
                payload = json.load(handle)
                sheets = [_Sheet.from_json(item) for item in payload["sheets"]]
            except (ValueError, KeyError, TypeError) as exc:
                raise IOFailure(
                    f"'{path}' is not a sheetui workbook: {exc}", operation="load"
                ) from exc
        if not sheets:
            raise IOFailure(f"'{path}' contains no sheets", operation="load")
        self._sheets = sheets
        self._path = path
        self.logger.info(f"loaded workbook {path}")

    def save(self, path: Optional[str] = None) -> str:
        target = path or self._path
        if not target:
            raise IOFailure("No file name given for write", operation="save")
        payload = {"sheets": [sheet.to_json() for sheet in self._sheets]}
        with open(target, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        self._path = target
        self.logger.info(f"saved workbook {target}")
        return target

    def export_csv(self, sheet: int, path: str) -> None:
        data = self._sheet(sheet)
        if data.cells:
            last_row = max(row for row, _ in data.cells)
            last_col = max(col for _, col in data.cells)
        else:
            last_row = last_col = -1
        with open(path, "w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            for row in range(last_row + 1):
                writer.writerow(
                    [data.cells.get((row, col), "") for col in range(last_col + 1)]
                )


__all__ = ["InMemoryWorkbook", "NAMED_COLORS", "validate_color"]
