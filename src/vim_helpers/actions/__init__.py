"""Buffer-editing helpers and their command-line entry points."""

from .base import ActionContext, ActionResult, EventBus
from .command import COMMAND_HANDLERS, submit_command_line
from .last_change import stamp_line, today, update_last_change
from .templates import (
    TemplateNotFoundError,
    header_macro,
    read_template_file,
    set_header_macros,
)
from .trim import (
    NO_LINES_MESSAGE,
    trim_peripheral_blank_lines,
    trim_trailing_whitespace,
)

__all__ = [
    "ActionContext",
    "ActionResult",
    "COMMAND_HANDLERS",
    "EventBus",
    "NO_LINES_MESSAGE",
    "TemplateNotFoundError",
    "header_macro",
    "read_template_file",
    "set_header_macros",
    "stamp_line",
    "submit_command_line",
    "today",
    "trim_peripheral_blank_lines",
    "trim_trailing_whitespace",
    "update_last_change",
]
