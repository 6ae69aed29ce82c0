"""Engine configuration resolved from ``SHEETUI_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from sheetui.errors import FatalError

ENV_PREFIX = "SHEETUI_"


def _read(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value.strip()


def _read_int(env: Mapping[str, str], name: str, fallback: int) -> int:
    raw = _read(env, name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError as exc:
        raise FatalError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise FatalError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


def _read_flag(env: Mapping[str, str], name: str, fallback: bool) -> bool:
    raw = _read(env, name)
    if raw is None:
        return fallback
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EngineConfig:
    """Settings the launcher hands to the workbook and the engine."""

    locale: str = "en"
    timezone: str = "America/New_York"
    input_log: Optional[str] = None
    sheet_rows: int = 100
    sheet_cols: int = 26
    system_clipboard: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            locale=_read(source, "LOCALE") or defaults.locale,
            timezone=_read(source, "TIMEZONE") or defaults.timezone,
            input_log=_read(source, "INPUT_LOG"),
            sheet_rows=_read_int(source, "SHEET_ROWS", defaults.sheet_rows),
            sheet_cols=_read_int(source, "SHEET_COLS", defaults.sheet_cols),
            system_clipboard=_read_flag(
                source, "SYSTEM_CLIPBOARD", defaults.system_clipboard
            ),
        )

    def override(self, **changes: object) -> "EngineConfig":
        """Apply CLI overrides, ignoring options that were not given."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["EngineConfig", "ENV_PREFIX"]
