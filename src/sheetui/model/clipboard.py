"""Clipboard register holding the last copied cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .cell import CellStyle


@dataclass(frozen=True, slots=True)
class ClipEntry:
    content: str
    style: Optional[CellStyle] = None


@dataclass(frozen=True, slots=True)
class ClipboardPayload:
    """Rectangular grid of copied entries.

    ``include_style`` distinguishes a formatted copy from a content-only
    copy; content-only entries carry ``style=None``.
    """

    rows: Tuple[Tuple[ClipEntry, ...], ...]
    include_style: bool = False

    def __post_init__(self) -> None:
        if not self.rows or not self.rows[0]:
            raise ValueError("Clipboard payload cannot be empty")
        width = len(self.rows[0])
        if any(len(row) != width for row in self.rows):
            raise ValueError("Clipboard payload must be rectangular")

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def text(self) -> str:
        return "\n".join("\t".join(entry.content for entry in row) for row in self.rows)

    def entries(self) -> Iterator[Tuple[int, int, ClipEntry]]:
        for dr, row in enumerate(self.rows):
            for dc, entry in enumerate(row):
                yield dr, dc, entry

    @classmethod
    def from_text(cls, text: str) -> "ClipboardPayload":
        """Parse tab/newline separated text into a content-only payload."""

        lines = text.rstrip("\n").split("\n") if text else [""]
        cells = [line.rstrip("\r").split("\t") for line in lines]
        width = max(len(row) for row in cells)
        rows = tuple(
            tuple(ClipEntry(value) for value in row + [""] * (width - len(row)))
            for row in cells
        )
        return cls(rows=rows, include_style=False)


class ClipboardRegister:
    """Keeps the most recent payload until the next copy overwrites it."""

    def __init__(self) -> None:
        self._payload: Optional[ClipboardPayload] = None

    @property
    def payload(self) -> Optional[ClipboardPayload]:
        return self._payload

    @property
    def empty(self) -> bool:
        return self._payload is None

    def store(self, payload: ClipboardPayload) -> None:
        self._payload = payload

    def text(self) -> str:
        return self._payload.text if self._payload else ""

    def clear(self) -> None:
        self._payload = None


__all__ = ["ClipEntry", "ClipboardPayload", "ClipboardRegister"]
