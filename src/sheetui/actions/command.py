"""Actions that evaluate the command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sheetui.commands import CommandTag, parse_command
from sheetui.effects import RunCommand
from sheetui.errors import InvalidCommand
from sheetui.modes.base_mode import NAVIGATION, ModeResult

if TYPE_CHECKING:
    from sheetui.keymaps import ResolutionMatch
    from sheetui.modes.command_mode import CommandLineMode


def submit_command_line(mode: CommandLineMode, match: ResolutionMatch) -> ModeResult:
    """Parse the typed line into a command effect.

    The line is left in place; the mode clears it only once the controller
    actually leaves command-line mode, so a failed parse or a failed
    execution can be corrected.
    """

    del match
    text = mode.text.strip()
    mode.context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to=NAVIGATION, status="command_empty")
    try:
        command = parse_command(text)
    except InvalidCommand as exc:
        mode.context.bus.emit("command.error", text)
        return ModeResult(
            consumed=True, status="command_error", message=str(exc), error=exc
        )
    if command.tag is CommandTag.QUIT:
        return ModeResult(consumed=True, quit=True, status="quit", message="quit")
    return ModeResult(
        consumed=True,
        switch_to=NAVIGATION,
        status=f"command_{command.tag.value}",
        effects=(RunCommand(command),),
    )


def cancel_command_line(mode: CommandLineMode, match: ResolutionMatch) -> ModeResult:
    del mode, match
    return ModeResult(consumed=True, switch_to=NAVIGATION, status="command_cancel")


def backspace_command_line(
    mode: CommandLineMode, match: ResolutionMatch
) -> ModeResult:
    del match
    if not mode.text:
        return ModeResult(consumed=True, switch_to=NAVIGATION, status="command_cancel")
    mode.text = mode.text[:-1]
    return ModeResult(consumed=True, status="command_edit")


__all__ = ["submit_command_line", "cancel_command_line", "backspace_command_line"]
