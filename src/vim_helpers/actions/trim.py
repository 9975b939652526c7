"""Blank-line and whitespace trimming."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from vim_helpers.buffer import SEARCH_REGISTER, BufferHost
from vim_helpers.config import DEFAULT_REPORT
from vim_helpers.runtime import telemetry

NO_LINES_MESSAGE = "--No lines in buffer--"

TRAILING_WHITESPACE = re.compile(r"[ \t]+$")
_NON_BLANK = re.compile(r"\S", re.ASCII)


def is_blank(line: str) -> bool:
    return _NON_BLANK.search(line) is None


def count_leading_blank(lines: Sequence[str]) -> int:
    count = 0
    for line in lines:
        if not is_blank(line):
            break
        count += 1
    return count


def count_trailing_blank(lines: Sequence[str]) -> int:
    count = 0
    for line in reversed(lines):
        if not is_blank(line):
            break
        count += 1
    return count


def fewer_lines_message(count: int) -> str:
    if count == 1:
        return "1 line less"
    return f"{count} fewer lines"


def trim_peripheral_blank_lines(
    host: BufferHost, *, report: int = DEFAULT_REPORT
) -> Optional[str]:
    """Delete the blank lines at the start and end of the buffer.

    For the buffer::

        1
        2 A line containing non-space characters.
        3
        4 Another line.
        5
        6
        7

    four lines go: line 1 at the start and lines 5-7 at the end. Interior
    blank lines are kept. The message shown to the user (if any) is echoed
    through ``host`` and returned.
    """

    total = host.line_count()
    lines = host.get_lines(0, total)

    leading = count_leading_blank(lines)
    trailing = 0
    if leading != total:
        trailing = count_trailing_blank(lines)

    with telemetry.span(
        "actions::trim_peripheral_blank_lines",
        component="actions",
        metadata={"leading": leading, "trailing": trailing, "total": total},
    ):
        # Trailing run first so the leading deletion cannot shift its range.
        host.delete_lines(total - trailing, total)
        host.delete_lines(0, leading)

    deleted = leading + trailing
    message: Optional[str] = None
    if deleted == total:
        message = NO_LINES_MESSAGE
    elif deleted > report:
        message = fewer_lines_message(deleted)

    if message is not None:
        host.echo(message)
    return message


def trim_trailing_whitespace(host: BufferHost) -> int:
    """Strip trailing spaces and tabs from every line.

    The view and the search register are restored afterwards, so the user
    sees neither a jump nor a changed last-search pattern. Returns the number
    of lines changed.
    """

    view = host.save_view()
    search = host.get_register(SEARCH_REGISTER)
    try:
        with telemetry.span(
            "actions::trim_trailing_whitespace", component="actions"
        ) as handle:
            changed = host.substitute(TRAILING_WHITESPACE, "")
            handle.add_metadata("changed", changed)
    finally:
        host.restore_view(view)
        host.set_register(SEARCH_REGISTER, search)
    return changed
