"""JSON-lines recording and replay of key events."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING, Iterable, List, Optional

from sheetui.errors import IOFailure
from sheetui.modes.base_mode import KeyInput, ModeResult
from sheetui.runtime import telemetry

if TYPE_CHECKING:
    from sheetui.controller import InteractionController


def encode_key(key: KeyInput) -> str:
    payload = {"key": key.key, "modifiers": list(key.modifiers), "text": key.text}
    return json.dumps(payload, ensure_ascii=False)


def decode_key(line: str) -> KeyInput:
    try:
        payload = json.loads(line)
        return KeyInput(
            key=str(payload["key"]),
            modifiers=tuple(str(m) for m in payload.get("modifiers", ())),
            text=payload.get("text"),
        )
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise IOFailure(f"Malformed input log line {line!r}: {exc}", operation="replay") from exc


class InputLogWriter:
    """Appends every key event to a JSON-lines file as it is handled."""

    def __init__(self, path: str) -> None:
        self.path = path
        try:
            self._handle: Optional[IO[str]] = open(path, "w", encoding="utf-8")
        except OSError as exc:
            raise IOFailure(f"Cannot open input log {path}: {exc}", operation="input_log") from exc

    def record(self, key: KeyInput) -> None:
        if self._handle is None:
            return
        self._handle.write(encode_key(key) + "\n")
        self._handle.flush()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "InputLogWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def read_input_log(path: str) -> List[KeyInput]:
    try:
        with open(path, encoding="utf-8") as handle:
            return [decode_key(line) for line in handle if line.strip()]
    except OSError as exc:
        raise IOFailure(f"Cannot read input log {path}: {exc}", operation="replay") from exc


def replay(
    controller: InteractionController, keys: Iterable[KeyInput]
) -> List[ModeResult]:
    """Feed recorded keys into ``controller`` until they run out or it quits."""

    results: List[ModeResult] = []
    with telemetry.span("input_log::replay", component="input_log") as handle:
        for key in keys:
            if not controller.running:
                break
            results.append(controller.handle_key(key))
        handle.add_metadata("keys", len(results))
    return results


__all__ = [
    "InputLogWriter",
    "encode_key",
    "decode_key",
    "read_input_log",
    "replay",
]
