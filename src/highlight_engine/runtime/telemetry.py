"""Telemetry services for the highlighting pipeline, built on telelog.

Public surface:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``record_stats(name, stats)`` -- emit a stage's counters dataclass as an event
``span(name, ...)`` -- profile a pipeline stage, optionally as a component

Nothing is configured at import time; the first logger request builds the
config from ``HIGHLIGHT_ENGINE_*`` environment variables.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "HIGHLIGHT_ENGINE_"
DEFAULT_LOGGER_NAME = "highlight_engine"
DEFAULT_LEVEL = "WARNING"


@dataclass(frozen=True)
class PresetSettings:
    level: str
    console: bool
    json: bool
    log_file: Optional[str] = None


PRESET_SETTINGS: Dict[str, PresetSettings] = {
    "development": PresetSettings(level="DEBUG", console=True, json=False),
    "production": PresetSettings(
        level="INFO", console=False, json=False, log_file="highlight_engine.log"
    ),
    # Per-keystroke spans and reconcile stats, as JSON lines for later analysis.
    "performance": PresetSettings(
        level="DEBUG",
        console=False,
        json=True,
        log_file="highlight_engine-performance.log",
    ),
}
PRESETS = tuple(PRESET_SETTINGS)

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _preset_config(preset: str) -> Any:
    try:
        settings = PRESET_SETTINGS[preset.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None

    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(True)
    config.with_json_format(settings.json)
    if settings.log_file:
        config.with_file_output(_env("LOG_FILE") or settings.log_file)
        config.with_buffering(True)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or DEFAULT_LEVEL).upper())

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
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Override the active telelog configuration.

    ``config`` is an explicit ``tl.Config``; ``preset`` is one of ``PRESETS``.
    The two are mutually exclusive. With neither, the environment is re-read.
    Profiling is always enabled so pipeline spans carry timings.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = _env_config()

    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` configured for the engine."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or _env("LOGGER") or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _log(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    with_data = getattr(log, f"{name}_with", None)
    if with_data is not None:
        with_data(message, [(str(key), _stringify(val)) for key, val in payload.items()])
        return
    method = getattr(log, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` log line."""

    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


def record_stats(
    name: str,
    stats: Any,
    *,
    level: str = "debug",
    logger_name: Optional[str] = None,
) -> None:
    """Emit the fields of a stage's result dataclass as ``event::<name>``."""

    if not is_dataclass(stats) or isinstance(stats, type):
        raise TypeError(f"stats for '{name}' must be a dataclass instance")
    record_event(name, level=level, data=asdict(stats), logger_name=logger_name)


@dataclass
class SpanHandle:
    """Handle returned from ``span``; metadata is logged when the span closes."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, **extra: Any) -> Dict[str, Any]:
        payload = {"span": self.span_name, **self.metadata, **extra}
        if self.component_name:
            payload["component"] = self.component_name
        return payload

    def done(self) -> None:
        _log(self.logger, "debug", "span::done", self._payload())

    def fail(self, reason: str) -> None:
        _log(self.logger, "error", "span::fail", self._payload(reason=reason))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a pipeline stage, tracked under ``component`` when given.

    ``metadata`` is attached as transient logger context for the duration of
    the block and repeated on the closing ``span::done`` line.
    """

    log = get_logger(logger_name)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log, span_name=name, component_name=component, metadata=dict(context)
    )

    with ExitStack() as stack:
        for key, value in context.items():
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
        handle.done()


__all__ = [
    "PRESETS",
    "PRESET_SETTINGS",
    "PresetSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "record_stats",
    "span",
]
