"""Textual adapter wiring command dispatch and autocommands into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from vim_helpers.actions import ActionContext, ActionResult, submit_command_line
from vim_helpers.autocmds import AutocmdRegistry
from vim_helpers.buffer import BufferMirror
from vim_helpers.host import MemoryHost


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHelperAdapter:
    """Bridges a ``MemoryHost`` session to a Textual-friendly surface."""

    def __init__(
        self,
        context: ActionContext,
        hooks: TextualUIHooks,
        *,
        autocmds: AutocmdRegistry | None = None,
    ) -> None:
        if not isinstance(context.host, MemoryHost):
            raise TypeError("TextualHelperAdapter requires a MemoryHost context")
        self.context = context
        self.host: MemoryHost = context.host
        self.hooks = hooks
        self.autocmds = autocmds or AutocmdRegistry()
        self.context.extras.setdefault("autocmds", self.autocmds)
        self._subscribe_events()
        self._refresh_buffer()

    def run_command(self, text: str) -> ActionResult:
        """Dispatch a command line typed into the UI."""

        self._log_state("command ->", text=text)
        seen = len(self.host.messages)
        result = submit_command_line(self.context, text)
        self._after_result(result, seen)
        return result

    def fire(self, event: str) -> None:
        """Fire autocommands for ``event`` against the hosted buffer."""

        seen = len(self.host.messages)
        results = self.autocmds.fire(event, self.context)
        self._log_state("autocmd ->", event=event, fired=len(results))
        self._refresh_buffer()
        if len(self.host.messages) > seen:
            self.hooks.update_status(self.host.messages[-1])

    def _after_result(self, result: ActionResult, seen: int) -> None:
        self._log_state("result <-", status=result.status, message=result.message)
        if len(self.host.messages) > seen:
            status = self.host.messages[-1]
        else:
            status = result.message or result.status
        self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        for event in (
            "command.submit",
            "command.error",
            "command.echo",
            "command.write",
        ):
            self.context.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.host.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        buffer = self.host.buffer
        snapshot: Dict[str, object] = {
            "buffer": buffer.name,
            "cursor": buffer.state.cursor,
            "version": buffer.document.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualHelperAdapter", "TextualUIHooks"]
