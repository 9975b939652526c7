"""Bindings of the ``BufferHost`` protocol.

``vim_helpers.host.vim`` is not imported here; it needs the editor's embedded
``vim`` module and is loaded explicitly from inside the editor.
"""

from .memory import MemoryHost

__all__ = ["MemoryHost"]
