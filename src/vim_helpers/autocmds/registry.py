"""Autocommand registry: handlers bound to editor events and file patterns."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import PurePath
from typing import Callable, Dict, Iterator, List, Optional

from vim_helpers.actions.base import ActionContext
from vim_helpers.runtime.telemetry import span

AutocmdHandler = Callable[[ActionContext], object]


@dataclass(frozen=True, slots=True)
class Autocmd:
    """One ``autocmd {event} {pattern} {handler}`` entry."""

    id: str
    event: str
    handler: AutocmdHandler
    pattern: str = "*"
    group: Optional[str] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("autocmd id cannot be empty")
        if not self.event:
            raise ValueError("autocmd event cannot be empty")
        if not self.pattern:
            raise ValueError("autocmd pattern cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def matches(self, filename: str) -> bool:
        if self.pattern == "*":
            return True
        tail = PurePath(filename).name if filename else ""
        return fnmatchcase(tail, self.pattern) or fnmatchcase(filename, self.pattern)


class AutocmdRegistry:
    """Stores autocommands in registration order and fires them by event."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._autocmds: Dict[str, Autocmd] = {}
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._autocmds)

    def register(self, autocmd: Autocmd, *, replace: bool = False) -> Autocmd:
        if not replace and autocmd.id in self._autocmds:
            raise ValueError(f"Autocmd '{autocmd.id}' already registered")
        self._autocmds[autocmd.id] = autocmd
        return autocmd

    def unregister(self, autocmd_id: str) -> Autocmd:
        try:
            return self._autocmds.pop(autocmd_id)
        except KeyError as exc:
            raise KeyError(f"Autocmd '{autocmd_id}' is not registered") from exc

    def clear_group(self, group: str) -> int:
        doomed = [a.id for a in self._autocmds.values() if a.group == group]
        for autocmd_id in doomed:
            del self._autocmds[autocmd_id]
        return len(doomed)

    def iter_matching(self, event: str, filename: str) -> Iterator[Autocmd]:
        for autocmd in self._autocmds.values():
            if autocmd.event == event and autocmd.matches(filename):
                yield autocmd

    def fire(self, event: str, context: ActionContext) -> List[object]:
        filename = context.host.buffer_name
        with span(
            f"autocmd::{event}",
            logger_name=self._logger_name,
            component="autocmds",
            metadata={"event": event, "buffer": filename},
        ) as handle:
            results = []
            for autocmd in list(self.iter_matching(event, filename)):
                results.append(autocmd.handler(context))
            handle.add_metadata("fired", len(results))
            return results


__all__ = ["Autocmd", "AutocmdHandler", "AutocmdRegistry"]
