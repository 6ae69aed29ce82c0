"""Navigation mode: cursor movement, sheet switching and cell verbs."""

from __future__ import annotations

from .base_mode import NAVIGATION, KeyInput, ModeResult
from .keymap_helpers import KeymapMode, update_flag


class NavigationMode(KeymapMode):
    name = NAVIGATION
    accepts_prefix = True

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        self.sync_flags()

    def sync_flags(self) -> None:
        update_flag(
            self.context, "range_pending", self.context.session.pending_range is not None
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = super().handle_key(key)
        self.sync_flags()
        return result
