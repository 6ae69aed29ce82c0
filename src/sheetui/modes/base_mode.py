"""Base classes and shared value types for interaction modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from sheetui.effects import WorkbookEffect
from sheetui.errors import SheetUIError
from sheetui.model import Address, ClipboardRegister, NumericPrefix, Range, SessionState

NAVIGATION = "navigation"
CELL_EDIT = "cell_edit"
RANGE_SELECT = "range_select"
COMMAND_LINE = "command_line"

MODE_NAMES = (NAVIGATION, CELL_EDIT, RANGE_SELECT, COMMAND_LINE)
RANGE_ORIGINS = (NAVIGATION, CELL_EDIT)


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Outcome of ``Mode.handle_key``.

    ``effects`` are applied by the controller in order before ``switch_to``
    is honoured. ``selection`` carries the finished range when leaving
    range selection; ``anchor`` asks a freshly entered range selection to
    anchor at the cursor immediately.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    effects: Tuple[WorkbookEffect, ...] = ()
    quit: bool = False
    selection: Optional[Range] = None
    anchor: bool = False
    error: Optional[SheetUIError] = None


class ModeBus:
    """Minimal event bus letting modes and adapters exchange signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Engine state every mode can read; owned by the controller."""

    session: SessionState
    clipboard: ClipboardRegister
    bus: ModeBus
    prefix: NumericPrefix = field(default_factory=NumericPrefix)
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """Base class all concrete interaction modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def cursor(self) -> Address:
        """Address movement actions operate on."""

        return self.context.session.cursor

    @cursor.setter
    def cursor(self, address: Address) -> None:
        self.context.session.set_cursor(address)

    @property
    def can_switch_sheet(self) -> bool:
        return True

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError


__all__ = [
    "NAVIGATION",
    "CELL_EDIT",
    "RANGE_SELECT",
    "COMMAND_LINE",
    "MODE_NAMES",
    "RANGE_ORIGINS",
    "KeyInput",
    "ModeResult",
    "ModeBus",
    "ModeContext",
    "Mode",
]
