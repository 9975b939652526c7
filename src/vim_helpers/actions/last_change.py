"""Timestamp maintenance for ``Last change:`` headers."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, Optional

from vim_helpers.buffer import BufferHost
from vim_helpers.config import DEFAULT_DATE_FORMAT, DEFAULT_LAST_CHANGE_LIMIT
from vim_helpers.runtime import telemetry

LAST_CHANGE = re.compile(r"(Last [Cc]hange:)(\s*)")


def today(clock: Callable[[], datetime] = datetime.now) -> str:
    """Today's date as ``yyyy Mon dd``."""

    return clock().strftime(DEFAULT_DATE_FORMAT)


def stamp_line(line: str, date: str) -> Optional[str]:
    """Return ``line`` with the text after ``Last change:`` set to ``date``.

    Whitespace already following the phrase is kept; a tab is inserted when
    there is none. Returns ``None`` when the phrase is absent.
    """

    match = LAST_CHANGE.search(line)
    if match is None:
        return None
    separator = match.group(2) or "\t"
    return line[: match.end(1)] + separator + date


def update_last_change(
    host: BufferHost,
    format: Optional[str] = None,
    *,
    clock: Callable[[], datetime] = datetime.now,
    limit: int = DEFAULT_LAST_CHANGE_LIMIT,
) -> bool:
    """Update the date after the first ``Last change:`` in the first lines.

    Only the first ``limit`` lines are searched and only the first match is
    rewritten. ``format`` follows ``strftime``; without it ``today()`` is
    used. Returns whether a line was updated.
    """

    window = min(limit, host.line_count())
    for row, line in enumerate(host.get_lines(0, window)):
        if LAST_CHANGE.search(line) is None:
            continue
        date = clock().strftime(format) if format is not None else today(clock)
        updated = stamp_line(line, date)
        with telemetry.span(
            "actions::update_last_change",
            component="actions",
            metadata={"row": row},
        ):
            host.set_lines(row, row + 1, [updated])
        return True
    return False
