"""Cell content kinds and styles shared by the engine and collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ContentKind(str, Enum):
    """How the first character of an edit classifies the cell content."""

    FORMULA = "formula"
    CURRENCY = "currency"
    NUMBER = "number"
    TEXT = "text"


def classify(text: str) -> Optional[ContentKind]:
    """Return the kind implied by ``text``'s first character, if any."""

    if not text:
        return None
    first = text[0]
    if first == "=":
        return ContentKind.FORMULA
    if first == "$":
        return ContentKind.CURRENCY
    if first.isdigit() or first in "+-":
        return ContentKind.NUMBER
    return ContentKind.TEXT


@dataclass(frozen=True, slots=True)
class CellStyle:
    background: Optional[str] = None
    foreground: Optional[str] = None
    bold: bool = False


DEFAULT_STYLE = CellStyle()


__all__ = ["ContentKind", "CellStyle", "DEFAULT_STYLE", "classify"]
