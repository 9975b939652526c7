"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor
from .sync import BufferValidationError


def ensure_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    row, col = cursor
    if row < 0 or row >= document.line_count:
        raise BufferValidationError("Row out of range", cursor=cursor)
    if col < 0 or col > len(document.get_line(row)):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def ensure_line_range(document: BufferDocument, start: int, end: int) -> None:
    if start < 0 or end < start or end > document.line_count:
        raise BufferValidationError(
            f"Line range [{start}, {end}) outside buffer of {document.line_count} lines"
        )
