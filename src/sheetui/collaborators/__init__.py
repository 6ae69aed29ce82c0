"""Workbook and clipboard collaborators the controller talks to."""

from .clipboard import MemoryClipboard, PyperclipClipboard, SystemClipboard
from .memory import InMemoryWorkbook, validate_color
from .workbook import Workbook

__all__ = [
    "Workbook",
    "InMemoryWorkbook",
    "validate_color",
    "SystemClipboard",
    "PyperclipClipboard",
    "MemoryClipboard",
]
