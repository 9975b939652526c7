"""``BufferHost`` bound to an in-memory ``Buffer``."""

from __future__ import annotations

from typing import Iterable, List, Optional, Pattern, Sequence

from vim_helpers.buffer import (
    Buffer,
    Cursor,
    RegisterValue,
    Transaction,
    UndoEntry,
    ViewState,
)
from vim_helpers.runtime import telemetry


class MemoryHost:
    """Runs the helpers against a ``Buffer`` and collects echoed messages."""

    def __init__(self, buffer: Optional[Buffer] = None) -> None:
        self.buffer = buffer or Buffer()
        self.messages: List[str] = []

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "") -> "MemoryHost":
        return cls(Buffer.from_lines(lines, name=name))

    @property
    def buffer_name(self) -> str:
        return self.buffer.name

    @property
    def lines(self) -> List[str]:
        return self.buffer.lines

    @property
    def last_message(self) -> Optional[str]:
        return self.messages[-1] if self.messages else None

    def line_count(self) -> int:
        return self.buffer.document.line_count

    def get_lines(self, start: int, end: int) -> List[str]:
        return self.buffer.lines[start:end]

    def set_lines(self, start: int, end: int, lines: Sequence[str]) -> None:
        self.buffer.replace_lines(start, end, lines, label="set_lines")

    def delete_lines(self, start: int, end: int) -> None:
        self.buffer.delete_lines(start, end)

    def get_cursor(self) -> Cursor:
        return self.buffer.state.cursor

    def set_cursor(self, cursor: Cursor) -> None:
        self.buffer.move_cursor(cursor)

    def save_view(self) -> ViewState:
        return self.buffer.save_view()

    def restore_view(self, view: ViewState) -> None:
        self.buffer.restore_view(view)

    def get_register(self, name: str) -> str:
        return self.buffer.registers.get(name).text

    def set_register(self, name: str, value: str) -> None:
        self.buffer.registers.set(name, RegisterValue(text=value))

    def substitute(self, pattern: Pattern[str], replacement: str) -> int:
        return self.buffer.substitute(pattern, replacement)

    def change(self, label: str) -> Transaction:
        """Make every edit inside the block undo as one change."""

        return self.buffer.transaction(label)

    def undo(self) -> Optional[UndoEntry]:
        return self.buffer.undo_last()

    def echo(self, message: str) -> None:
        self.messages.append(message)
        telemetry.record_event(
            "host.echo", data={"buffer": self.buffer.name, "message": message}
        )
