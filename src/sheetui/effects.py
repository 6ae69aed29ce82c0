"""Workbook effects returned by mode handlers and applied by the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from sheetui.commands import Command
from sheetui.model import Address, ContentKind, Range


@dataclass(frozen=True, slots=True)
class WriteCell:
    address: Address
    text: str
    kind: Optional[ContentKind] = None


@dataclass(frozen=True, slots=True)
class ClearCells:
    range: Range
    include_style: bool = False


@dataclass(frozen=True, slots=True)
class CopyCells:
    range: Range
    include_style: bool = False


@dataclass(frozen=True, slots=True)
class PasteCells:
    target: Address


@dataclass(frozen=True, slots=True)
class RunCommand:
    command: Command


WorkbookEffect = Union[WriteCell, ClearCells, CopyCells, PasteCells, RunCommand]


__all__ = [
    "WriteCell",
    "ClearCells",
    "CopyCells",
    "PasteCells",
    "RunCommand",
    "WorkbookEffect",
]
