"""telelog-backed logging, events and profiling spans for the engine.

Everything else imports four names from here: ``configure``,
``get_logger``, ``record_event`` and ``span``. Settings come from
``SHEETUI_LOG_*`` environment variables unless a preset is chosen.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ROOT_LOGGER = "sheetui"


@dataclass(frozen=True)
class LogSettings:
    """What a telelog ``Config`` should be built from."""

    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LogSettings":
        source = os.environ if env is None else env

        def flag(name: str, default: bool) -> bool:
            raw = source.get(f"SHEETUI_LOG_{name}")
            if raw is None or not raw.strip():
                return default
            return raw.strip().lower() in {"1", "true", "yes", "on"}

        size = source.get("SHEETUI_LOG_BUFFER_SIZE", "").strip()
        return cls(
            level=(source.get("SHEETUI_LOG_LEVEL") or "INFO").upper(),
            console=flag("CONSOLE", False),
            colored=not flag("NO_COLOR", False),
            json=flag("JSON", False),
            file=source.get("SHEETUI_LOG_FILE") or None,
            buffered=flag("BUFFERED", False),
            buffer_size=int(size) if size.isdecimal() else 2048,
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        config.with_json_format(self.json)
        if self.file:
            config.with_file_output(self.file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # Spans rely on logger.profile, so profiling is always on.
        config.with_profiling(True)
        return config


def _preset(name: str) -> LogSettings:
    log_file = os.getenv("SHEETUI_LOG_FILE")
    presets: Dict[str, Callable[[], LogSettings]] = {
        "development": lambda: LogSettings(level="DEBUG", console=True, file=log_file),
        # The terminal belongs to the grid, so production logs to a file only.
        "production": lambda: LogSettings(
            level="INFO", file=log_file or "sheetui.log", buffered=True
        ),
        "performance": lambda: LogSettings(
            level="DEBUG",
            json=True,
            file=log_file or "sheetui-performance.log",
            buffered=True,
        ),
    }
    try:
        return presets[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown telemetry preset '{name}' (choose from {', '.join(sorted(presets))})"
        ) from None


_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def configure(*, settings: Optional[LogSettings] = None, preset: Optional[str] = None) -> None:
    """Swap the active configuration; cached loggers are rebuilt lazily."""

    global _config
    if settings is not None and preset is not None:
        raise ValueError("Pass either settings or preset, not both")
    if preset is not None:
        settings = _preset(preset)
    _config = (settings or LogSettings.from_env()).build()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    key = name or ROOT_LOGGER
    logger = _loggers.get(key)
    if logger is None:
        if _config is None:
            configure()
        logger = _loggers[key] = tl.Logger.with_config(key, _config)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    """Log ``message`` with structured ``fields`` when the level supports it."""

    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in fields.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log an ``event::<name>`` line such as a mode switch or a failed effect."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; lets the block attach outcome details."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def _report(self, level: str, reason: str) -> None:
        fields: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            fields["component"] = self.component
        _emit(self.logger, level, f"span::{level}", fields)

    def warn(self, reason: str) -> None:
        self._report("warning", reason)

    def fail(self, reason: str) -> None:
        self._report("error", reason)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block such as ``mode::navigation`` or ``workbook::save``.

    ``component=True`` tracks the block under its own name, a string
    tracks it under that component. ``metadata`` is pushed onto the
    logger context for the duration of the block. Exceptions are logged
    and re-raised.
    """

    logger = get_logger(logger_name)
    component_name = name if component is True else component or None
    pushed = {key: _text(value) for key, value in (metadata or {}).items()}
    for key, value in pushed.items():
        logger.add_context(key, value)

    handle = SpanHandle(logger, name, cast(Optional[str], component_name), dict(pushed))
    try:
        with ExitStack() as stack:
            if component_name:
                stack.enter_context(logger.track_component(component_name))
            stack.enter_context(logger.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in pushed:
            logger.remove_context(key)


__all__ = [
    "LogSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
