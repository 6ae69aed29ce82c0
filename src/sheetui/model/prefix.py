"""Numeric repeat prefix collected from digit keystrokes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class NumericPrefix:
    """Digits typed ahead of a repeatable action."""

    _digits: List[str] = field(default_factory=list)

    @property
    def value(self) -> Optional[int]:
        if not self._digits:
            return None
        return int("".join(self._digits))

    @property
    def pending(self) -> bool:
        return bool(self._digits)

    @property
    def text(self) -> str:
        return "".join(self._digits)

    def push(self, digit: str) -> None:
        if len(digit) != 1 or not digit.isdecimal():
            raise ValueError(f"Expected a single digit, got {digit!r}")
        self._digits.append(digit)

    def take(self) -> int:
        """Consume the prefix and return the repeat count (at least 1)."""

        count = self.value
        self.clear()
        return count or 1

    def clear(self) -> None:
        self._digits.clear()


__all__ = ["NumericPrefix"]
