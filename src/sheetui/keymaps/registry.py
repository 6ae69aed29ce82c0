"""Registry of actions and the per-mode bindings that trigger them."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict, Dict, Iterator, Optional

from sheetui.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding would share keys and flag state with existing bindings."""

    def __init__(self, binding: Binding, conflicts: tuple[Binding, ...]):
        names = ", ".join(c.id for c in conflicts)
        super().__init__(
            f"'{binding.id}' ({binding.mode}: {binding.key_signature}) clashes with {names}"
        )
        self.binding = binding
        self.conflicts = conflicts


class KeymapRegistry:
    """Actions by id plus bindings grouped by mode and key signature.

    Every change to the bindings bumps :meth:`revision` so resolvers know
    to rebuild their tries.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_mode: DefaultDict[str, DefaultDict[str, set[str]]] = defaultdict(
            lambda: defaultdict(set)
        )
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"no action '{action_id}'")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"no binding '{binding_id}'")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"action '{action.id}' is already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it clashes with."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(f"'{binding.id}' points at unknown action '{binding.action_id}'")

            clashes = self.conflicts_with(binding)
            if not replace:
                if clashes:
                    handle.add_metadata("conflicts", ",".join(c.id for c in clashes))
                    raise KeymapConflictError(binding, clashes)
                if binding.id in self._bindings:
                    raise ValueError(f"binding id '{binding.id}' is already registered")

            for old_id in {c.id for c in clashes} | {binding.id}:
                self._drop(old_id)
            self._bindings[binding.id] = binding
            self._by_mode[binding.mode][binding.key_signature].add(binding.id)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._drop(binding_id)
        if binding is not None:
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for ids in self._by_mode.get(mode, {}).values():
            yield from (self._bindings[binding_id] for binding_id in sorted(ids))

    def bindings_for_action(self, action_id: str) -> tuple[Binding, ...]:
        return tuple(b for b in self._bindings.values() if b.action_id == action_id)

    def conflicts_with(self, binding: Binding) -> tuple[Binding, ...]:
        same_keys = self._by_mode.get(binding.mode, {}).get(binding.key_signature, ())
        return tuple(
            self._bindings[other_id]
            for other_id in sorted(same_keys)
            if other_id != binding.id and not binding.excludes(self._bindings[other_id])
        )

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._by_mode)),
        )

    def _drop(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        signatures = self._by_mode[binding.mode]
        signatures[binding.key_signature].discard(binding_id)
        if not signatures[binding.key_signature]:
            del signatures[binding.key_signature]
        if not signatures:
            del self._by_mode[binding.mode]
        return binding


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
