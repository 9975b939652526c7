"""Line storage for in-memory buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """List-of-lines text storage.

    Every edit returns a new document with a bumped ``version``. A document
    never holds zero lines: removing everything leaves a single empty line,
    the same shape an editor gives an empty buffer.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        lines = text.splitlines()
        # A final newline terminates the last line rather than opening a new one.
        return cls(_lines=lines or [""])

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        return cls(_lines=list(lines))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``new_lines``."""

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        return BufferDocument(_lines=lines, version=self.version + 1, dirty=True)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]
