"""Structured logging and profiling on top of telelog.

The rest of the package only touches four names:

``configure(...)`` -- install a telelog configuration (settings, preset, or explicit)
``get_logger(name)`` -- cached logger bound to the active configuration
``record_event(name, ...)`` -- one structured event line
``span(name, ...)`` -- profile a block, optionally tracked as a component

Console output stays off unless asked for: stdout belongs to the editor.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .settings import EditorSettings, load_settings

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = "ed_engine"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _development(settings: EditorSettings) -> Any:
    config = tl.Config()
    config.with_min_level("DEBUG")
    config.with_console_output(True)
    config.with_colored_output(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    return config


def _production(settings: EditorSettings) -> Any:
    config = tl.Config()
    config.with_min_level("INFO")
    config.with_console_output(False)
    config.with_file_output(settings.log_file or "ed_engine.log")
    config.with_buffering(True)
    return config


def _performance(settings: EditorSettings) -> Any:
    config = tl.Config()
    config.with_min_level("DEBUG")
    config.with_console_output(False)
    config.with_json_format(True)
    config.with_buffering(True)
    config.with_file_output(settings.log_file or "ed_engine-performance.log")
    return config


_PRESETS: Dict[str, Callable[[EditorSettings], Any]] = {
    "development": _development,
    "production": _production,
    "performance": _performance,
}


def build_config(settings: EditorSettings) -> Any:
    """Translate ``EditorSettings`` into a ``telelog.Config``."""

    if settings.log_preset:
        builder = _PRESETS.get(settings.log_preset.lower())
        if builder is None:
            raise ValueError(f"Unknown preset '{settings.log_preset}'.")
        config = builder(settings)
    else:
        config = tl.Config()
        config.with_min_level(settings.log_level)
        config.with_console_output(settings.log_console)
        if settings.log_console:
            config.with_colored_output(True)
        if settings.log_json:
            config.with_json_format(True)
        if settings.log_file:
            config.with_file_output(settings.log_file)

    config.with_profiling(True)
    return config


def configure(
    *,
    settings: Optional[EditorSettings] = None,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
) -> None:
    """Replace the active configuration and drop cached loggers.

    ``config`` wins when given; otherwise ``preset`` (if any) is applied on top
    of ``settings`` (or the environment when ``settings`` is omitted).
    """

    global _ACTIVE_CONFIG
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        resolved = settings or load_settings()
        if preset is not None:
            resolved = EditorSettings(
                encoding=resolved.encoding,
                verbose=resolved.verbose,
                log_level=resolved.log_level,
                log_file=resolved.log_file,
                log_console=resolved.log_console,
                log_json=resolved.log_json,
                log_preset=preset,
            )
        config = build_config(resolved)
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config(load_settings())
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    method, structured = _level_method(log, level)
    if structured:
        method(f"event::{name}", _pairs(payload))
    else:
        method(f"event::{name} {payload}")


@dataclass
class SpanHandle:
    """Yielded by ``span``; lets the block attach metadata or flag failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        method, structured = _level_method(self.logger, "error")
        if structured:
            method("span::fail", _pairs(payload))
        else:
            method(f"span::fail {payload}")


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the enclosed block under ``name``.

    ``component=True`` tracks the block as a component of the same name; a
    string names the component explicitly. ``metadata`` is pushed as logger
    context for the duration of the block.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    context: Dict[str, str] = {
        key: _stringify(value) for key, value in (metadata or {}).items()
    }
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
