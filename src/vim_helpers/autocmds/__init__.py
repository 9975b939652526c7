"""Event-driven dispatch of the helpers."""

from .registry import Autocmd, AutocmdHandler, AutocmdRegistry
from .defaults import DEFAULT_AUTOCMDS, DEFAULT_GROUP, load_default_autocmds

__all__ = [
    "Autocmd",
    "AutocmdHandler",
    "AutocmdRegistry",
    "DEFAULT_AUTOCMDS",
    "DEFAULT_GROUP",
    "load_default_autocmds",
]
