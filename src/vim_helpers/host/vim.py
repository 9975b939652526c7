"""``BufferHost`` bound to a live Vim/Neovim session.

Only importable inside the editor, where its embedded Python interpreter
provides the ``vim`` module. Usage from a vimrc::

    python3 from vim_helpers.host.vim import VimHost
    python3 from vim_helpers.actions import trim_trailing_whitespace
    command! TrimWhitespace python3 trim_trailing_whitespace(VimHost())
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Pattern, Sequence

from vim_helpers.buffer import Cursor, ViewState


def _load_vim() -> Any:
    try:
        import vim  # type: ignore[import-not-found]
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "vim_helpers.host.vim must run inside Vim's embedded Python"
        ) from exc
    return vim


def quote(value: str) -> str:
    """Render ``value`` as a single-quoted Vim string literal."""

    return "'" + value.replace("'", "''") + "'"


def _dict_literal(values: Mapping[str, Any]) -> str:
    items = []
    for key, value in values.items():
        if isinstance(value, int) or (isinstance(value, str) and value.lstrip("-").isdigit()):
            rendered = str(int(value))
        else:
            rendered = quote(str(value))
        items.append(f"{quote(key)}: {rendered}")
    return "{" + ", ".join(items) + "}"


class VimHost:
    """Operates on the current buffer and window of the running editor."""

    def __init__(self, vim_module: Any = None) -> None:
        self._vim = vim_module if vim_module is not None else _load_vim()

    @property
    def _buffer(self) -> Any:
        return self._vim.current.buffer

    @property
    def buffer_name(self) -> str:
        return self._buffer.name or ""

    def line_count(self) -> int:
        return len(self._buffer)

    def get_lines(self, start: int, end: int) -> List[str]:
        return list(self._buffer[start:end])

    def set_lines(self, start: int, end: int, lines: Sequence[str]) -> None:
        self._buffer[start:end] = list(lines)

    def delete_lines(self, start: int, end: int) -> None:
        if start < end:
            del self._buffer[start:end]

    def get_cursor(self) -> Cursor:
        row, col = self._vim.current.window.cursor
        return (row - 1, col)

    def set_cursor(self, cursor: Cursor) -> None:
        row, col = cursor
        self._vim.current.window.cursor = (row + 1, col)

    def save_view(self) -> ViewState:
        raw: Dict[str, Any] = dict(self._vim.eval("winsaveview()"))
        return ViewState(
            cursor=(int(raw.get("lnum", 1)) - 1, int(raw.get("col", 0))),
            topline=int(raw.get("topline", 1)) - 1,
            leftcol=int(raw.get("leftcol", 0)),
            extra=raw,
        )

    def restore_view(self, view: ViewState) -> None:
        values: Dict[str, Any] = dict(view.extra)
        values.update(
            lnum=view.cursor[0] + 1,
            col=view.cursor[1],
            topline=view.topline + 1,
            leftcol=view.leftcol,
        )
        self._vim.command(f"call winrestview({_dict_literal(values)})")

    def get_register(self, name: str) -> str:
        return str(self._vim.eval(f"getreg({quote(name)})"))

    def set_register(self, name: str, value: str) -> None:
        self._vim.command(f"call setreg({quote(name)}, {quote(value)})")

    def substitute(self, pattern: Pattern[str], replacement: str) -> int:
        buffer = self._buffer
        changed = 0
        last_row = None
        # Write back only the lines that change so marks on the rest survive.
        for row, line in enumerate(list(buffer)):
            new_line = pattern.sub(replacement, line)
            if new_line != line:
                buffer[row] = new_line
                changed += 1
                last_row = row
        if last_row is not None:
            self.set_cursor((last_row, 0))
        return changed

    def echo(self, message: str) -> None:
        self._vim.command(f"echomsg {quote(message)}")
