"""Keymap-driven key dispatch shared by every mode."""

from __future__ import annotations

from typing import Dict, List, cast

from sheetui.keymaps import KeymapResolver, ResolutionMatch, make_token
from sheetui.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

# Chords that never count as a digit for the numeric prefix.
_NON_DIGIT_MODIFIERS = frozenset({"ctrl", "alt", "meta"})


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def is_digit_key(key: KeyInput) -> bool:
    text = key.text or ""
    if len(text) != 1 or not text.isdecimal():
        return False
    return _NON_DIGIT_MODIFIERS.isdisjoint(m.lower() for m in key.modifiers)


def mode_flags(context: ModeContext) -> Dict[str, bool]:
    """Flags gating bindings (``range_pending``, ``range_anchored``); shared by all modes."""

    return cast(Dict[str, bool], context.extras.setdefault("keymap_flags", {}))


def update_flag(context: ModeContext, key: str, value: bool) -> None:
    mode_flags(context)[key] = value


class KeymapMode(Mode):
    """Resolves keys through the keymap trie and runs the bound action.

    Modes with ``accepts_prefix`` feed bare digits into the numeric
    prefix. Repeatable actions are called with ``count=`` taken from the
    prefix; any other outcome clears it. Keys with no binding go to
    :meth:`handle_unbound`.
    """

    accepts_prefix = False

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"sheetui.modes.{self.name}")
        resolver = context.extras.get("keymap_resolver")
        if not isinstance(resolver, KeymapResolver):
            raise RuntimeError(f"{self.name} mode needs a 'keymap_resolver' in context.extras")
        self._resolver = resolver
        self._flags = mode_flags(context)
        self._pending: List[str] = []

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        if self.accepts_prefix and not self._pending and is_digit_key(key):
            self.context.prefix.push(cast(str, key.text))
            return ModeResult(consumed=True, status="prefix", message=self.context.prefix.text)

        token = key_to_token(key)
        self._pending.append(token)
        result = self._resolver.resolve(self.name, tuple(self._pending), context=self._flags)
        if result.status == "miss" and len(self._pending) > 1:
            # Drop the unfinished sequence and retry the key on its own.
            self._pending = [token]
            result = self._resolver.resolve(self.name, (token,), context=self._flags)

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        self._pending.clear()
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        self.context.prefix.clear()
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        action = match.action
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": action.id},
        ):
            if action.repeatable:
                outcome = action(self, match, count=self.context.prefix.take())
            else:
                self.context.prefix.clear()
                outcome = action(self, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "KeymapMode",
    "key_to_token",
    "is_digit_key",
    "mode_flags",
    "update_flag",
]
