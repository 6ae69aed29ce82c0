"""In-progress text of the cell being edited."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .address import Address
from .cell import ContentKind, classify


@dataclass(slots=True)
class EditBuffer:
    """Single-line edit buffer with an insertion cursor.

    ``kind`` is decided when text is first typed during the edit, from
    what the buffer holds at that moment. A loaded literal alone leaves it
    unset, and it is never re-classified afterwards.
    """

    target: Address
    text: str = ""
    cursor: int = 0
    kind: Optional[ContentKind] = None

    @classmethod
    def load(cls, target: Address, literal: str) -> "EditBuffer":
        return cls(target=target, text=literal, cursor=len(literal))

    def insert(self, text: str) -> None:
        if not text:
            return
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)
        if self.kind is None:
            self.kind = classify(self.text)

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        return True

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self.text)


__all__ = ["EditBuffer"]
