"""Ex-style command lines mapped onto the helpers."""

from __future__ import annotations

from contextlib import nullcontext
from typing import Callable, ContextManager, Dict, List

from vim_helpers.buffer import BufferValidationError
from vim_helpers.runtime import telemetry

from .base import ActionContext, ActionResult
from .last_change import update_last_change
from .templates import TemplateNotFoundError, read_template_file, set_header_macros
from .trim import trim_peripheral_blank_lines, trim_trailing_whitespace

CommandHandler = Callable[[ActionContext, List[str]], ActionResult]


def submit_command_line(context: ActionContext, text: str) -> ActionResult:
    """Run one command line such as ``UpdateLastChange %d.%m.%Y``."""

    text = text.strip().lstrip(":").strip()
    context.bus.emit("command.submit", text)
    if not text:
        return ActionResult(status="command_empty")

    command, *args = text.split()
    handler = COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(context, command)
    scope = nullcontext() if handler is _handle_undo else _change(context, command)
    with telemetry.span(
        f"command::{command}", component="commands", metadata={"args": args}
    ), scope:
        return handler(context, args)


def _change(context: ActionContext, label: str) -> ContextManager[object]:
    """One undo step for everything a command edits, where the host supports it."""

    change = getattr(context.host, "change", None)
    if change is None:
        return nullcontext()
    return change(label)


def _unknown_command(context: ActionContext, command: str) -> ActionResult:
    context.bus.emit("command.error", command)
    message = f"E492: Not an editor command: {command}"
    context.host.echo(message)
    return ActionResult(status="command_error", message=message)


def _error(context: ActionContext, message: str) -> ActionResult:
    context.bus.emit("command.error", message)
    context.host.echo(message)
    return ActionResult(status="command_error", message=message)


def _handle_trim_blank_lines(context: ActionContext, args: List[str]) -> ActionResult:
    del args
    message = trim_peripheral_blank_lines(context.host, report=context.options.report)
    return ActionResult(status="trim_blank_lines", message=message)


def _handle_trim_whitespace(context: ActionContext, args: List[str]) -> ActionResult:
    del args
    changed = trim_trailing_whitespace(context.host)
    return ActionResult(status="trim_whitespace", message=f"{changed} lines changed")


def _handle_update_last_change(
    context: ActionContext, args: List[str]
) -> ActionResult:
    date_format = " ".join(args) or context.options.date_format
    updated = update_last_change(
        context.host,
        date_format,
        clock=context.clock,
        limit=context.options.last_change_limit,
    )
    return ActionResult(
        status="update_last_change" if updated else "update_last_change_miss"
    )


def _handle_template(context: ActionContext, args: List[str]) -> ActionResult:
    if not args:
        return _error(context, "E471: Argument required")
    ext = args[0]
    try:
        curpos = (int(args[1]), int(args[2])) if len(args) >= 3 else (1, 0)
    except ValueError:
        return _error(context, f"E474: Invalid argument: {' '.join(args[1:])}")
    try:
        path = read_template_file(
            context.host, ext, curpos, template_dir=context.options.template_dir
        )
    except (TemplateNotFoundError, BufferValidationError) as exc:
        return _error(context, str(exc))
    return ActionResult(status="template", message=str(path))


def _handle_header_macros(context: ActionContext, args: List[str]) -> ActionResult:
    del args
    try:
        macro = set_header_macros(context.host, clock=context.clock)
    except BufferValidationError as exc:
        return _error(context, str(exc))
    return ActionResult(status="header_macros", message=macro)


def _handle_echo(context: ActionContext, args: List[str]) -> ActionResult:
    message = " ".join(args)
    context.bus.emit("command.echo", message)
    context.host.echo(message)
    return ActionResult(status="command_echo", message=message)


def _handle_write(context: ActionContext, args: List[str]) -> ActionResult:
    autocmds = context.extras.get("autocmds")
    if autocmds is not None:
        autocmds.fire("BufWritePre", context)  # type: ignore[attr-defined]
    context.bus.emit(
        "command.write", {"args": list(args), "buffer": context.host.buffer_name}
    )
    return ActionResult(status="command_write", message="write")


def _handle_undo(context: ActionContext, args: List[str]) -> ActionResult:
    del args
    undo = getattr(context.host, "undo", None)
    if undo is None:
        return _error(context, "undo is not supported by this host")
    entry = undo()
    if entry is None:
        context.host.echo("Already at oldest change")
        return ActionResult(status="undo_miss", message="Already at oldest change")
    return ActionResult(status="undo", message=entry.label)


COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "TrimBlankLines": _handle_trim_blank_lines,
    "TrimWhitespace": _handle_trim_whitespace,
    "UpdateLastChange": _handle_update_last_change,
    "Template": _handle_template,
    "HeaderMacros": _handle_header_macros,
    "echo": _handle_echo,
    "write": _handle_write,
    "w": _handle_write,
    "undo": _handle_undo,
    "u": _handle_undo,
}


__all__ = ["COMMAND_HANDLERS", "CommandHandler", "submit_command_line"]
