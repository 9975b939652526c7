"""High-level buffer façade combining document, state, registers, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, List, Optional, Pattern

from vim_helpers.runtime import telemetry

from .document import BufferDocument
from .registers import RegisterBank
from .state import BufferState, Cursor, ViewState
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_cursor, ensure_line_range


class Buffer:
    def __init__(
        self,
        *,
        name: str = "",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        registers: Optional[RegisterBank] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.registers = registers or RegisterBank()
        self.undo = undo or UndoTimeline()
        self._transaction_depth = 0

    @classmethod
    def from_text(cls, text: str, *, name: str = "") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_lines(lines))

    @property
    def lines(self) -> List[str]:
        return list(self.document.snapshot())

    def text(self) -> str:
        return self.document.text()

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            name=self.name,
            text=self.document.text(),
            cursor=self.state.cursor,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    def replace_lines(
        self, start: int, end: int, lines: Iterable[str], *, label: str
    ) -> None:
        """Replace ``[start:end]`` with ``lines`` as one undoable change."""

        ensure_line_range(self.document, start, end)
        with self.transaction(label):
            self.document = self.document.update_lines(start, end, lines)
            self.state.last_change_tick = self.document.version
            self.set_cursor(self.state.cursor)

    def transaction(self, label: str) -> "Transaction":
        """Group edits into one undo entry; nested transactions join the outer one."""

        return Transaction(self, label)

    def delete_lines(self, start: int, end: int) -> None:
        if start >= end:
            return
        self.replace_lines(start, end, [], label="delete_lines")

    def set_cursor(self, cursor: Cursor) -> None:
        """Move the cursor, clamping it onto the current document."""

        row, col = cursor
        row = max(0, min(row, self.document.line_count - 1))
        col = max(0, min(col, len(self.document.get_line(row))))
        self.state.set_cursor(row, col)

    def move_cursor(self, cursor: Cursor) -> None:
        """Move the cursor, rejecting positions outside the document."""

        self.state.set_cursor(*ensure_cursor(self.document, cursor))

    def substitute(self, pattern: Pattern[str], replacement: str) -> int:
        """Apply ``pattern`` to every line as ``:%s/pattern/replacement/e`` would.

        Sets the search register and leaves the cursor on the last changed
        line, matching the side effects of the editor command.
        """

        self.registers.set_search(pattern.pattern)
        changed = 0
        last_row: Optional[int] = None
        updated = self.lines
        for row, line in enumerate(updated):
            new_line = pattern.sub(replacement, line)
            if new_line != line:
                updated[row] = new_line
                changed += 1
                last_row = row
        if last_row is None:
            return 0
        with self.transaction("substitute"):
            self.replace_lines(
                0, self.document.line_count, updated, label="substitute"
            )
            self.state.set_cursor(last_row, 0)
        return changed

    def save_view(self) -> ViewState:
        return self.state.view()

    def restore_view(self, view: ViewState) -> None:
        self.state.restore(view)
        self.set_cursor(view.cursor)

    def undo_last(self) -> Optional[UndoEntry]:
        entry = self.undo.undo()
        if entry is None:
            return None
        self.document = self.document.update_lines(
            0, self.document.line_count, entry.before_lines
        )
        self.set_cursor(entry.cursor_before)
        return entry

    def redo_last(self) -> Optional[UndoEntry]:
        entry = self.undo.redo()
        if entry is None:
            return None
        self.document = self.document.update_lines(
            0, self.document.line_count, entry.after_lines
        )
        self.set_cursor(entry.cursor_after)
        return entry


class Transaction(AbstractContextManager["Transaction"]):
    """Records one undo entry for the edits made inside the block.

    Only the outermost transaction of a buffer records; nested ones fold their
    edits into it.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._outermost = False
        self._before: tuple[str, ...] = ()
        self._cursor_before: Cursor = (0, 0)

    def __enter__(self) -> "Transaction":
        self._outermost = self.buffer._transaction_depth == 0
        self.buffer._transaction_depth += 1
        if self._outermost:
            self._before = tuple(self.buffer.document.snapshot())
            self._cursor_before = self.buffer.state.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name or "[No Name]"},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.buffer._transaction_depth -= 1
        try:
            if self._outermost:
                after = tuple(self.buffer.document.snapshot())
                if after != self._before:
                    self.buffer.undo.push(
                        UndoEntry(
                            label=self.label,
                            before_lines=self._before,
                            after_lines=after,
                            cursor_before=self._cursor_before,
                            cursor_after=self.buffer.state.cursor,
                        )
                    )
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False
