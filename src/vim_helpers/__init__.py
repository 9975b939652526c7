"""Buffer-editing helpers for Vim-like editors."""

__all__ = [
    "actions",
    "adapters",
    "autocmds",
    "buffer",
    "config",
    "host",
    "runtime",
]

__version__ = "0.1.0"
