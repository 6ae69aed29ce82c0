"""Help text shown by ``:help [topic]``."""

from __future__ import annotations

from typing import Dict, Optional

HELP_TOPICS: Dict[str, str] = {
    "navigation": "\n".join(
        [
            "Navigate Mode:",
            "* h,j,k,l / arrows: move (prefix with a count, e.g. 3l)",
            "* Enter/Tab, Shift-Enter/Shift-Tab: move down/right, up/left",
            "* gg: top of column   Ctrl-n/Ctrl-p: next/previous sheet",
            "* i,e: edit cell   v,V: select range   : command line",
            "* y/Y: copy (formatted)   p: paste   d/D: delete (with style)",
            "* Ctrl-s: save   q: quit   Esc: clear count and selection",
        ]
    ),
    "edit": "\n".join(
        [
            "Edit Mode:",
            "* Enter: commit   Esc: discard",
            "* Ctrl-r: select a range to insert as a reference",
            "* Ctrl-v: paste the clipboard text",
        ]
    ),
    "range": "\n".join(
        [
            "Range Select Mode:",
            "* m: set anchor, m again: finish the range",
            "* movement keys as in Navigate Mode",
            "* y/Y: copy   d/D: delete   Esc: abort",
        ]
    ),
    "command": "\n".join(
        [
            "Commands:",
            "write|w [path]   edit|e <path>   export-csv <path>",
            "insert-rows|ir [count]   insert-cols|ic [count]",
            "color-rows|cr [count] <color>   color-cols|cc [count] <color>",
            "color-cell <color>   rename-sheet [index] <name>",
            "new-sheet [name]   select-sheet <name>   system-paste",
            "help|? [topic]   quit|q",
        ]
    ),
}

_ALIASES = {"nav": "navigation", "navigate": "navigation", "cell": "edit", "commands": "command"}


def help_text(topic: Optional[str] = None) -> Optional[str]:
    """Return the help text for ``topic`` (navigation by default)."""

    key = (topic or "navigation").strip().lower()
    return HELP_TOPICS.get(_ALIASES.get(key, key))


__all__ = ["HELP_TOPICS", "help_text"]
