"""Register storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

SEARCH_REGISTER = "/"
UNNAMED_REGISTER = '"'


@dataclass(slots=True)
class RegisterValue:
    text: str
    type: str = "character"  # character, line or block


class RegisterBank:
    """Tracks the unnamed, named and search registers."""

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterValue] = {
            UNNAMED_REGISTER: RegisterValue(text=""),
            SEARCH_REGISTER: RegisterValue(text=""),
        }

    def get(self, name: str) -> RegisterValue:
        return self._registers.get(name, RegisterValue(text=""))

    def set(self, name: str, value: RegisterValue) -> None:
        self._registers[name] = value
        if name not in (UNNAMED_REGISTER, SEARCH_REGISTER):
            self._registers[UNNAMED_REGISTER] = value

    @property
    def last_search(self) -> str:
        return self.get(SEARCH_REGISTER).text

    def set_search(self, pattern: str) -> None:
        self.set(SEARCH_REGISTER, RegisterValue(text=pattern))

    def serialize(self) -> Mapping[str, RegisterValue]:
        return dict(self._registers)
