"""Value types for key bindings: strokes, sequences, flag gates and actions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

# Order modifiers are written in a token ("ctrl+shift+TAB").
_MODIFIER_ORDER = ("alt", "ctrl", "meta", "shift")


def normalize_modifiers(modifiers: Iterable[str], key: str = "") -> tuple[str, ...]:
    wanted = {m.strip().lower() for m in modifiers if m.strip()}
    if len(key) == 1:
        # A printable key already carries shift in its character ("V").
        wanted.discard("shift")
    known = [m for m in _MODIFIER_ORDER if m in wanted]
    return tuple(known + sorted(wanted.difference(_MODIFIER_ORDER)))


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    return "+".join((*normalize_modifiers(modifiers, key), key))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key with its modifiers, compared by token."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers, self.key))

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """``"ctrl+n"`` -> ctrl + n. A lone ``+`` is the plus key."""

        head, sep, key = text.rpartition("+")
        if not sep or not head or not key:
            return cls(text)
        return cls(key, tuple(head.split("+")))


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("a key sequence needs at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Gate on a mode flag; ``!range_anchored`` requires the flag to be off."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        flag = text.lstrip("!").strip()
        if not flag:
            raise ValueError(f"empty when clause: {expression!r}")
        return cls(flag, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) == self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A named verb that bindings point at.

    Repeatable actions are called with the numeric prefix as ``count``;
    the others are called without it and the prefix is dropped.
    """

    id: str
    handler: Callable[..., object]
    description: str = ""
    repeatable: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Keys in one mode mapped to an action, optionally gated by flags."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        clauses = tuple(
            c if isinstance(c, WhenClause) else WhenClause.parse(str(c)) for c in self.when
        )
        object.__setattr__(self, "when", clauses)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)

    def excludes(self, other: "Binding") -> bool:
        """True when no flag state can enable both bindings at once.

        An ungated binding is the fallback for its keys, so it never
        competes with a gated variant.
        """

        if bool(self.when) != bool(other.when):
            return True
        theirs = other.when_map
        return any(flag in theirs and theirs[flag] != want for flag, want in self.when_map.items())


__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "make_token",
    "normalize_modifiers",
]
