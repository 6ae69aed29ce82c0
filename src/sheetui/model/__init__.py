"""Pure data model: addresses, ranges, prefix, edit buffer and clipboard."""

from .address import MAX_COLS, MAX_ROWS, Address, Range, SheetExtent, column_name
from .cell import DEFAULT_STYLE, CellStyle, ContentKind, classify
from .clipboard import ClipboardPayload, ClipboardRegister, ClipEntry
from .edit_buffer import EditBuffer
from .prefix import NumericPrefix
from .state import RenderState, SessionState

__all__ = [
    "MAX_ROWS",
    "MAX_COLS",
    "Address",
    "Range",
    "SheetExtent",
    "column_name",
    "CellStyle",
    "ContentKind",
    "DEFAULT_STYLE",
    "classify",
    "ClipEntry",
    "ClipboardPayload",
    "ClipboardRegister",
    "EditBuffer",
    "NumericPrefix",
    "RenderState",
    "SessionState",
]
