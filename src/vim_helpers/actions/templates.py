"""Skeleton files for new buffers and C header guards."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from vim_helpers.buffer import BufferHost, BufferValidationError
from vim_helpers.config import default_template_dir
from vim_helpers.runtime import telemetry


class TemplateNotFoundError(FileNotFoundError):
    """Raised when ``template<ext>`` does not exist in the template directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"E484: Can't open file {path}")
        self.path = path


def template_file(ext: str, template_dir: Optional[Path] = None) -> Path:
    return (template_dir or default_template_dir()) / f"template{ext}"


def read_template_file(
    host: BufferHost,
    ext: str,
    curpos: Tuple[int, int],
    *,
    template_dir: Optional[Path] = None,
) -> Path:
    """Read the template for ``ext`` (e.g. ``".c"``) into the buffer.

    The template goes below the cursor line and the first buffer line, the
    empty line of a new buffer, is dropped. ``curpos`` is an editor-style
    position: 1-based row, 0-based column.
    """

    path = template_file(ext, template_dir)
    try:
        lines: List[str] = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError as exc:
        raise TemplateNotFoundError(path) from exc

    row = host.get_cursor()[0]
    existing = host.get_lines(0, host.line_count())
    result = (existing[: row + 1] + lines + existing[row + 1 :])[1:] or [""]
    cursor = (curpos[0] - 1, curpos[1])
    _check_curpos(result, cursor)

    with telemetry.span(
        "actions::read_template_file",
        component="actions",
        metadata={"template": str(path), "lines": len(lines)},
    ):
        host.set_lines(row + 1, row + 1, lines)
        host.delete_lines(0, 1)
        host.set_cursor(cursor)
    return path


def _check_curpos(lines: List[str], cursor: Tuple[int, int]) -> None:
    # Checked before editing so a bad position leaves the buffer untouched.
    row, col = cursor
    if row < 0 or row >= len(lines):
        raise BufferValidationError(
            f"Template cursor row {row + 1} outside {len(lines)} lines", cursor=cursor
        )
    if col < 0 or col > len(lines[row]):
        raise BufferValidationError(
            f"Template cursor column {col} outside line {row + 1}", cursor=cursor
        )


def header_macro(filename: str, clock: Callable[[], datetime] = datetime.now) -> str:
    """``foo.h`` -> ``FOO_<yyyymmdd>_H``."""

    stamp = clock().strftime("%Y%m%d")
    return Path(filename).name.upper().replace(".", f"_{stamp}_")


def set_header_macros(
    host: BufferHost, *, clock: Callable[[], datetime] = datetime.now
) -> str:
    """Complete the ``#ifndef``/``#define``/``#endif`` guard of a header.

    The macro is appended to the first two lines and, as a comment, to the
    last line. Returns the macro name.
    """

    total = host.line_count()
    if total < 2:
        raise BufferValidationError(
            f"Header guard needs at least two lines, buffer has {total}"
        )

    macro = header_macro(host.buffer_name, clock)
    first, second = host.get_lines(0, 2)
    host.set_lines(0, 2, [f"{first} {macro}", f"{second} {macro}"])
    last = host.get_lines(total - 1, total)[0]
    host.set_lines(total - 1, total, [f"{last} // {macro}"])
    telemetry.record_event(
        "actions.header_macros", data={"macro": macro, "buffer": host.buffer_name}
    )
    return macro
