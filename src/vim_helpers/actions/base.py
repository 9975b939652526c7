"""Shared context and result types for helper dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Optional

from vim_helpers.buffer import BufferHost
from vim_helpers.config import EditorOptions

Clock = Callable[[], datetime]


@dataclass(slots=True)
class ActionResult:
    """Outcome of a command or autocommand handler."""

    status: str = "ok"
    message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status.endswith("error")


class EventBus:
    """Minimal event bus letting hosts observe dispatched commands."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """Everything a handler needs: the host, options, clock and bus."""

    host: BufferHost
    options: EditorOptions = field(default_factory=EditorOptions)
    bus: EventBus = field(default_factory=EventBus)
    clock: Clock = datetime.now
    extras: Dict[str, object] = field(default_factory=dict)
