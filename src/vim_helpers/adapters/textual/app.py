"""Executable Textual app that edits one file through the helpers."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Optional, Sequence

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, Static

from vim_helpers.actions import ActionContext
from vim_helpers.autocmds import AutocmdRegistry, load_default_autocmds
from vim_helpers.buffer import Buffer, BufferMirror
from vim_helpers.config import EditorOptions
from vim_helpers.host import MemoryHost
from vim_helpers.runtime import telemetry

from .controller import TextualHelperAdapter, TextualUIHooks


def open_buffer(path: Optional[Path]) -> tuple[Buffer, bool]:
    """Load ``path`` into a buffer; the flag tells whether the file is new."""

    if path is None:
        return Buffer(), False
    if path.exists():
        return Buffer.from_text(path.read_text(encoding="utf-8"), name=str(path)), False
    return Buffer(name=str(path)), True


class HelperApp(App[None]):
    """Shows the buffer and runs helper commands typed on the command line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        options: Optional[EditorOptions] = None,
    ) -> None:
        super().__init__()
        self.path = path
        self.options = options or EditorOptions.from_env()
        self.adapter: TextualHelperAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("vim_helpers.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Input(placeholder=":TrimBlankLines", id="command-line")
        yield Footer()

    def on_mount(self) -> None:
        buffer, is_new = open_buffer(self.path)
        context = ActionContext(host=MemoryHost(buffer), options=self.options)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualHelperAdapter(
            context, hooks, autocmds=load_default_autocmds(AutocmdRegistry())
        )
        if is_new:
            self.adapter.fire("BufNewFile")
        self.query_one("#command-line", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter is not None:
            self.adapter.run_command(event.value)
        event.input.value = ""

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(mirror.text)
        self.sub_title = mirror.name or "[No Name]"

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "command.write" and self.adapter is not None:
            self._write(self.adapter.host.buffer)

    def _write(self, buffer: Buffer) -> None:
        if not buffer.name:
            self._update_status("E32: No file name")
            return
        Path(buffer.name).write_text(buffer.text() + "\n", encoding="utf-8")
        telemetry.record_event("app.write", data={"path": buffer.name})

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file with vim_helpers.")
    parser.add_argument("path", nargs="?", type=Path, help="File to edit")
    parser.add_argument(
        "--template-path",
        type=Path,
        default=None,
        help="Directory holding template<ext> files",
    )
    parser.add_argument(
        "--report",
        type=int,
        default=None,
        help="Only report line counts above this threshold",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    options = EditorOptions.from_env()
    if args.template_path is not None:
        options.template_path = args.template_path
    if args.report is not None:
        options.report = args.report
    HelperApp(args.path, options=options).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
