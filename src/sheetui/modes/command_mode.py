"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from .base_mode import COMMAND_LINE, KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class CommandLineMode(KeymapMode):
    name = COMMAND_LINE

    text: str = ""

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.text = ""
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.bus.emit("command.end", self.text)
        self.text = ""

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if not key.text or {"ctrl", "alt"} & {m.lower() for m in key.modifiers}:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        self.text += key.text
        return ModeResult(consumed=True, status="command_edit", message=self.text)
