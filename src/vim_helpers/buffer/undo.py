"""Undo/redo history for buffer edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .state import Cursor


@dataclass(slots=True)
class UndoEntry:
    label: str
    before_lines: Tuple[str, ...]
    after_lines: Tuple[str, ...]
    cursor_before: Cursor
    cursor_after: Cursor


class UndoTimeline:
    """Linear undo/redo history; pushing after an undo drops the redo tail."""

    def __init__(self) -> None:
        self._entries: List[UndoEntry] = []
        self._index: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: UndoEntry) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(entry)
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]
