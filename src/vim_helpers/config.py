"""User-tunable options for the buffer helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "VIM_HELPERS_"

DEFAULT_REPORT = 2
DEFAULT_LAST_CHANGE_LIMIT = 20
DEFAULT_DATE_FORMAT = "%Y %b %d"


def default_template_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Directory holding ``template<ext>`` files when none is configured."""

    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "nvim" / "templates"


def _env_int(env: Mapping[str, str], name: str, fallback: int) -> int:
    key = f"{ENV_PREFIX}{name}"
    raw = env.get(key)
    if raw is None or not raw.strip():
        return fallback
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class EditorOptions:
    """Options consulted by the helpers.

    ``report`` mirrors the editor's ``'report'`` option: line-count messages
    are only shown when more than this many lines changed.
    """

    report: int = DEFAULT_REPORT
    last_change_limit: int = DEFAULT_LAST_CHANGE_LIMIT
    date_format: str = DEFAULT_DATE_FORMAT
    template_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.report < 0:
            raise ValueError("report cannot be negative")
        if self.last_change_limit < 0:
            raise ValueError("last_change_limit cannot be negative")

    @property
    def template_dir(self) -> Path:
        return self.template_path or default_template_dir()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorOptions":
        env = os.environ if environ is None else environ
        template = env.get(f"{ENV_PREFIX}TEMPLATE_PATH")
        return cls(
            report=_env_int(env, "REPORT", DEFAULT_REPORT),
            last_change_limit=_env_int(
                env, "LAST_CHANGE_LIMIT", DEFAULT_LAST_CHANGE_LIMIT
            ),
            date_format=env.get(f"{ENV_PREFIX}DATE_FORMAT") or DEFAULT_DATE_FORMAT,
            template_path=Path(template).expanduser() if template else None,
        )


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_LAST_CHANGE_LIMIT",
    "DEFAULT_REPORT",
    "EditorOptions",
    "default_template_dir",
]
