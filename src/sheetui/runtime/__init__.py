"""Runtime services: telemetry, configuration and input logging."""

from . import telemetry
from .config import EngineConfig

__all__ = ["telemetry", "EngineConfig"]
