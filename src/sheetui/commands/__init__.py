"""Command-line grammar: parser, command values and help topics."""

from .help import HELP_TOPICS, help_text
from .models import Command, CommandTag
from .parser import COMMAND_NAMES, parse_command

__all__ = [
    "Command",
    "CommandTag",
    "COMMAND_NAMES",
    "parse_command",
    "HELP_TOPICS",
    "help_text",
]
