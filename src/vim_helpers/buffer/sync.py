"""Boundary types shared by buffers and host bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Pattern, Protocol, Sequence

from .state import Cursor, ViewState


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    name: str
    text: str
    cursor: Cursor
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


class BufferHost(Protocol):
    """Editor services the helpers operate through.

    Line ranges are 0-based and end-exclusive. Production code binds this to a
    live editor; tests and the Textual demo bind it to an in-memory buffer.
    """

    @property
    def buffer_name(self) -> str:
        """File name of the buffer being edited (may be empty)."""
        ...

    def line_count(self) -> int: ...

    def get_lines(self, start: int, end: int) -> List[str]: ...

    def set_lines(self, start: int, end: int, lines: Sequence[str]) -> None: ...

    def delete_lines(self, start: int, end: int) -> None: ...

    def get_cursor(self) -> Cursor: ...

    def set_cursor(self, cursor: Cursor) -> None: ...

    def save_view(self) -> ViewState: ...

    def restore_view(self, view: ViewState) -> None: ...

    def get_register(self, name: str) -> str: ...

    def set_register(self, name: str, value: str) -> None: ...

    def substitute(self, pattern: Pattern[str], replacement: str) -> int:
        """Substitute over every line the way ``:%s`` does.

        Like the editor command, this may overwrite the search register and
        move the cursor. Returns the number of lines changed.
        """
        ...

    def echo(self, message: str) -> None:
        """Show a short status message to the user."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when callers provide out-of-bounds cursor or line info."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
