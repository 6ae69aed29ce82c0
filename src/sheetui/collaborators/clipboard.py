"""System clipboard collaborators."""

from __future__ import annotations

from typing import Protocol

import pyperclip

from sheetui.errors import IOFailure


class SystemClipboard(Protocol):
    def write_text(self, text: str) -> None: ...

    def read_text(self) -> str: ...


class PyperclipClipboard:
    """Desktop clipboard through pyperclip (xclip, wl-copy, pbcopy, ...)."""

    def write_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise IOFailure(f"Clipboard unavailable: {exc}", operation="clipboard_write") from exc

    def read_text(self) -> str:
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as exc:
            raise IOFailure(f"Clipboard unavailable: {exc}", operation="clipboard_read") from exc


class MemoryClipboard:
    """Process-local clipboard for headless sessions and tests."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    def write_text(self, text: str) -> None:
        self.text = text

    def read_text(self) -> str:
        return self.text


__all__ = ["SystemClipboard", "PyperclipClipboard", "MemoryClipboard"]
