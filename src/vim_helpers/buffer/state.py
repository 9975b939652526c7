"""Cursor and view state for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

Cursor = Tuple[int, int]  # (row, column), both 0-based


@dataclass(frozen=True, slots=True)
class ViewState:
    """Window view snapshot restored verbatim after a helper runs.

    ``extra`` carries whatever the host reports beyond cursor and scroll
    offsets (folds, wanted column, ...).
    """

    cursor: Cursor = (0, 0)
    topline: int = 0
    leftcol: int = 0
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor and scroll info tied to a document version."""

    cursor: Cursor = (0, 0)
    topline: int = 0
    leftcol: int = 0
    last_change_tick: int = 0

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def view(self) -> ViewState:
        return ViewState(cursor=self.cursor, topline=self.topline, leftcol=self.leftcol)

    def restore(self, view: ViewState) -> None:
        self.cursor = view.cursor
        self.topline = view.topline
        self.leftcol = view.leftcol
