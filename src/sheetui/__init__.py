"""Modal interaction engine for a terminal spreadsheet."""

__all__ = [
    "actions",
    "adapters",
    "collaborators",
    "commands",
    "controller",
    "effects",
    "errors",
    "keymaps",
    "model",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
