"""telelog wiring for view and handle diagnostics.

Views and handles report through two calls: ``record_event`` for one-off
records (invalid ranges, released buffers, cross-thread access) and
``span`` for profiled operations such as splitting a buffer.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "RC_SUBSTRING_"
LOGGER_NAME = "rc_substring"

_logger: Optional[Any] = None


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in data.items()]


def build_config(level: Optional[str] = None) -> Any:
    """telelog config from ``RC_SUBSTRING_LOG_*`` variables.

    ``level`` wins over ``RC_SUBSTRING_LOG_LEVEL``. Profiling stays on so
    ``span`` timings are recorded.
    """

    config = tl.Config()
    level = level or os.getenv(f"{ENV_PREFIX}LOG_LEVEL") or "INFO"
    config.with_min_level(level.upper())

    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    config.with_profiling(True)
    return config


def configure(config: Optional[Any] = None, *, level: Optional[str] = None) -> Any:
    """Swap the package logger for one built from ``config`` (or the env)."""

    global _logger
    if config is not None and level is not None:
        raise ValueError("Provide either `config` or `level`, not both.")
    if config is None:
        config = build_config(level)
    _logger = tl.Logger.with_config(LOGGER_NAME, config)
    return _logger


def get_logger() -> Any:
    return _logger if _logger is not None else configure()


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    structured = getattr(log, f"{level.lower()}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(log, level.lower(), None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
) -> None:
    _emit(get_logger(), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Lets the body of a ``span`` attach results before it closes."""

    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(get_logger(), "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``, tracked as ``component`` when given.

    ``metadata`` is pushed as logger context while the block runs. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger()
    handle = SpanHandle(name=name, component=component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "SpanHandle",
    "build_config",
    "configure",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
