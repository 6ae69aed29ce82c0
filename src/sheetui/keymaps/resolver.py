"""Walks pending key tokens through a per-mode trie of bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from sheetui.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class _Node:
    binding_ids: list[str] = field(default_factory=list)
    children: Dict[str, "_Node"] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of one lookup.

    ``match`` found an enabled binding, ``pending`` means the tokens are a
    prefix of longer sequences (``g`` before ``g g``), ``miss`` means
    nothing is bound. ``consumed`` counts tokens that walked the trie.
    """

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


def _build_trie(bindings: Sequence[Binding]) -> _Node:
    root = _Node()
    for binding in bindings:
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, _Node())
        node.binding_ids.append(binding.id)
    return root


class KeymapResolver:
    """Resolves tokens for a mode; tries are rebuilt when the registry revision moves."""

    def __init__(self, registry: KeymapRegistry, *, logger_name: str | None = None) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, tuple[int, _Node]] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        keys = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(keys)},
        ) as handle:
            result = self._walk(self._trie(mode), keys, context or {})
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def _walk(
        self, node: _Node, keys: tuple[str, ...], flags: Mapping[str, bool]
    ) -> ResolutionResult:
        for depth, token in enumerate(keys):
            if token not in node.children:
                return ResolutionResult("miss", consumed=depth)
            node = node.children[token]

        match = self._best_match(node, flags)
        if match is not None:
            return ResolutionResult("match", match=match, consumed=len(keys))
        if node.children:
            return ResolutionResult(
                "pending", consumed=len(keys), next_expected=tuple(sorted(node.children))
            )
        return ResolutionResult("miss", consumed=len(keys))

    def _trie(self, mode: str) -> _Node:
        revision = self._registry.revision()
        cached = self._tries.get(mode)
        if cached is None or cached[0] != revision:
            cached = (revision, _build_trie(list(self._registry.iter_bindings(mode))))
            self._tries[mode] = cached
        return cached[1]

    def _best_match(self, node: _Node, flags: Mapping[str, bool]) -> Optional[ResolutionMatch]:
        enabled = [
            binding
            for binding in map(self._registry.get_binding, node.binding_ids)
            if binding.allows(flags)
        ]
        if not enabled:
            return None
        # Higher priority first, then the binding with more gates.
        best = min(enabled, key=lambda b: (-b.priority, -len(b.when), b.id))
        return ResolutionMatch(best, self._registry.get_action(best.action_id))


__all__ = [
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
