"""Telemetry services for the gap editor, built on telelog.

Surface used by the rest of the package:

``load_settings()`` -- read ``GAP_EDITOR_*`` environment variables
``configure(...)`` -- adopt settings, a preset, or an explicit telelog config
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block, optionally tracked as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "GAP_EDITOR_"
DEFAULT_LOGGER_NAME = "gap_editor"
DEFAULT_BUFFER_SIZE = 2048
PRESETS = ("development", "production", "performance")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True)
class TelemetrySettings:
    """Logging knobs resolved from the environment."""

    logger_name: str = DEFAULT_LOGGER_NAME
    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> TelemetrySettings:
    """Build :class:`TelemetrySettings` from ``GAP_EDITOR_*`` variables."""

    env = os.environ if environ is None else environ

    def read(name: str) -> Optional[str]:
        return env.get(f"{ENV_PREFIX}{name}")

    size_raw = read("LOG_BUFFER_SIZE")
    try:
        buffer_size = int(size_raw) if size_raw else DEFAULT_BUFFER_SIZE
    except ValueError:
        buffer_size = DEFAULT_BUFFER_SIZE

    return TelemetrySettings(
        logger_name=read("LOGGER") or DEFAULT_LOGGER_NAME,
        level=(read("LOG_LEVEL") or "INFO").upper(),
        console=not _flag(read("DISABLE_CONSOLE"), False),
        colored=not _flag(read("NO_COLOR"), False),
        json_format=_flag(read("LOG_JSON"), False),
        log_file=read("LOG_FILE") or "",
        buffered=_flag(read("LOG_BUFFERED"), False),
        buffer_size=buffer_size,
    )


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _config_from_settings(settings: TelemetrySettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.json_format:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(True)
    return config


def _config_from_preset(preset: str, settings: TelemetrySettings) -> Any:
    key = preset.lower()
    if key == "development":
        return _config_from_settings(
            TelemetrySettings(
                logger_name=settings.logger_name,
                level="DEBUG",
                colored=True,
            )
        )
    if key == "production":
        return _config_from_settings(
            TelemetrySettings(
                logger_name=settings.logger_name,
                level="INFO",
                console=False,
                log_file=settings.log_file or "gap_editor.log",
                buffered=True,
                buffer_size=settings.buffer_size,
            )
        )
    if key in {"performance", "performance_analysis"}:
        return _config_from_settings(
            TelemetrySettings(
                logger_name=settings.logger_name,
                level="DEBUG",
                console=False,
                json_format=True,
                log_file=settings.log_file or "gap_editor-performance.log",
                buffered=True,
                buffer_size=settings.buffer_size,
            )
        )
    raise ValueError(f"Unknown preset '{preset}'. Expected one of {PRESETS}.")


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[TelemetrySettings] = None,
) -> None:
    """Replace the active telelog configuration.

    ``config`` (an explicit ``telelog.Config``) and ``preset`` are mutually
    exclusive. Without either, ``settings`` (or the environment) decides.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    resolved = settings or load_settings()
    if preset:
        config = _config_from_preset(preset, resolved)
    elif config is None:
        config = _config_from_settings(resolved)
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _config_from_settings(load_settings())
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    logger_name = name or load_settings().logger_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; lets the block attach metadata or report failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        _emit(self.logger, "warning", "span::cancel", self._payload(extra))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block with ``logger.profile(name)``.

    ``component=True`` also tracks the block as a component under ``name``; a
    string names the component explicitly. ``metadata`` is pushed as logger
    context for the duration of the block. Exceptions are reported through
    :meth:`SpanHandle.fail` and re-raised.
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
logger = get_logger()

__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "get_logger",
    "load_settings",
    "record_event",
    "span",
    "logger",
]
