"""Textual host for the interaction engine."""

from .controller import TextualSheetAdapter, TextualUIHooks, format_grid, normalize_key

__all__ = ["TextualSheetAdapter", "TextualUIHooks", "format_grid", "normalize_key"]
