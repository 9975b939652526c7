"""In-memory buffers and the host boundary the helpers operate through."""

from .buffer import Buffer, Transaction
from .document import BufferDocument
from .registers import SEARCH_REGISTER, RegisterBank, RegisterValue
from .state import BufferState, Cursor, ViewState
from .sync import BufferHost, BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_cursor, ensure_line_range

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferHost",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "Cursor",
    "RegisterBank",
    "RegisterValue",
    "SEARCH_REGISTER",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ViewState",
    "ensure_cursor",
    "ensure_line_range",
]
