"""Textual host for the helpers.

``app`` is imported lazily so the controller stays usable without a terminal.
"""

from .controller import TextualHelperAdapter, TextualUIHooks

__all__ = ["TextualHelperAdapter", "TextualUIHooks"]
