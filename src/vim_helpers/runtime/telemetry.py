"""Logging and tracing for the helpers, built on telelog.

Public surface:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- cached telelog logger
``record_event(name, ...)`` -- structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "VIM_HELPERS_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "vim_helpers")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _preset_config(preset: str) -> Any:
    config = tl.Config()
    key = preset.lower()
    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
        config.with_json_format(False)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "vim_helpers.log")
        config.with_buffering(True)
    elif key in {"performance", "performance_analysis"}:
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        config.with_buffering(True)
        config.with_file_output(_env("LOG_FILE") or "vim_helpers-performance.log")
    else:
        raise ValueError(f"Unknown preset '{preset}'.")
    config.with_profiling(True)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())

    # Helpers run inside an editor; keep the console quiet unless asked.
    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))

    if _env_flag("LOG_JSON"):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))

    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` and ``preset`` are mutually exclusive; with neither, the
    configuration is rebuilt from ``VIM_HELPERS_*`` environment variables.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = _env_config()
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active config."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _env_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as structured fields."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach results to the span."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of work.

    ``component=True`` tracks the block as a component named after the span;
    a string names the component explicitly. ``metadata`` is pushed as
    logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    serialized = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in serialized.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(serialized),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in serialized:
                log.remove_context(key)


configure()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
