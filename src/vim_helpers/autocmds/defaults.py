"""Built-in autocommands wiring the helpers to buffer events."""

from __future__ import annotations

from functools import partial
from typing import Tuple

from vim_helpers.actions.base import ActionContext, ActionResult
from vim_helpers.actions.command import submit_command_line

from .registry import Autocmd, AutocmdRegistry

DEFAULT_GROUP = "vim_helpers"


def _run(command: str, context: ActionContext) -> ActionResult:
    return submit_command_line(context, command)


def _new_header(context: ActionContext) -> ActionResult:
    result = submit_command_line(context, "Template .h 3 0")
    if result.failed:
        return result
    return submit_command_line(context, "HeaderMacros")


DEFAULT_AUTOCMDS: Tuple[Autocmd, ...] = (
    Autocmd(
        id="write.last_change",
        event="BufWritePre",
        handler=partial(_run, "UpdateLastChange"),
        group=DEFAULT_GROUP,
        description="Refresh the Last change: date before writing",
    ),
    Autocmd(
        id="write.trailing_whitespace",
        event="BufWritePre",
        handler=partial(_run, "TrimWhitespace"),
        group=DEFAULT_GROUP,
        description="Strip trailing whitespace before writing",
    ),
    Autocmd(
        id="new.c",
        event="BufNewFile",
        pattern="*.c",
        handler=partial(_run, "Template .c 1 0"),
        group=DEFAULT_GROUP,
        description="Start C sources from template.c",
    ),
    Autocmd(
        id="new.h",
        event="BufNewFile",
        pattern="*.h",
        handler=_new_header,
        group=DEFAULT_GROUP,
        description="Start headers from template.h and fill the include guard",
    ),
    Autocmd(
        id="new.mk",
        event="BufNewFile",
        pattern="*.mk",
        handler=partial(_run, "Template .mk 1 0"),
        group=DEFAULT_GROUP,
        description="Start makefiles from template.mk",
    ),
    Autocmd(
        id="new.makefile",
        event="BufNewFile",
        pattern="Makefile",
        handler=partial(_run, "Template .mk 1 0"),
        group=DEFAULT_GROUP,
        description="Start makefiles from template.mk",
    ),
)


def load_default_autocmds(registry: AutocmdRegistry) -> AutocmdRegistry:
    for autocmd in DEFAULT_AUTOCMDS:
        registry.register(autocmd, replace=True)
    return registry


__all__ = ["DEFAULT_AUTOCMDS", "DEFAULT_GROUP", "load_default_autocmds"]
