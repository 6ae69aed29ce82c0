"""Error kinds surfaced by the interaction engine."""

from __future__ import annotations

from typing import Optional


class SheetUIError(RuntimeError):
    """Base class for every recoverable engine error."""

    kind: str = "error"

    def __init__(self, message: str, *, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation


class InvalidCommand(SheetUIError):
    """Raised when a command line cannot be parsed."""

    kind = "invalid_command"

    def __init__(self, message: str, *, line: str = "") -> None:
        super().__init__(message, operation="parse_command")
        self.line = line


class OutOfBounds(SheetUIError):
    """Raised when an address or range falls outside the representable grid."""

    kind = "out_of_bounds"


class CollaboratorFailure(SheetUIError):
    """The workbook rejected a mutation or query."""

    kind = "collaborator_failure"


class IOFailure(SheetUIError):
    """Saving, loading, exporting or clipboard access failed."""

    kind = "io_failure"


class FatalError(SheetUIError):
    """Startup or configuration failure outside the interactive loop."""

    kind = "fatal"


__all__ = [
    "SheetUIError",
    "InvalidCommand",
    "OutOfBounds",
    "CollaboratorFailure",
    "IOFailure",
    "FatalError",
]
