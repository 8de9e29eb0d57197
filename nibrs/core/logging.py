"""
Logging — Channel-aware structured logging.

Every logger belongs to a channel, so a run can be narrowed to the part of
the mapper under inspection:

- PIPELINE: pass start/end and timing
- MAPPING: code classification decisions
- EXTRACT: narrative pulls (arrestees, property, evidence)
- VALIDATION: rule checks
- CODEC: XML output
- SYSTEM: CLI, loaders, anything else

Levels, least to most chatty: SILENT, INFO, VERBOSE, DEBUG. Errors and
warnings are emitted at every level except SILENT.

Environment:
- NIBRS_LOG_LEVEL: silent / info / verbose / debug
- NIBRS_LOG_FORMAT: console / json
- NIBRS_LOG_CHANNELS: comma-separated channels (all when unset)
"""

import logging
import os
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog


# =============================================================================
# Levels and Channels
# =============================================================================

class LogLevel(IntEnum):
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse a level name; stdlib names and unknown values read as INFO."""
        try:
            return cls[s.strip().upper()]
        except KeyError:
            return cls.INFO


class LogChannel(str, Enum):
    PIPELINE = "PIPELINE"
    MAPPING = "MAPPING"
    EXTRACT = "EXTRACT"
    VALIDATION = "VALIDATION"
    CODEC = "CODEC"
    SYSTEM = "SYSTEM"

    @classmethod
    def all(cls) -> list["LogChannel"]:
        return list(cls)

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


# Pass number prefix -> channel
_PASS_CHANNELS = {
    "p10": LogChannel.MAPPING,
    "p20": LogChannel.MAPPING,
    "p30": LogChannel.MAPPING,
    "p40": LogChannel.MAPPING,
    "p50": LogChannel.EXTRACT,
    "p60": LogChannel.MAPPING,
    "p70": LogChannel.EXTRACT,
    "p80": LogChannel.PIPELINE,
}

_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class _LogConfig:
    level: LogLevel = LogLevel.INFO
    format: str = "console"
    channels: set[LogChannel] = field(default_factory=lambda: set(LogChannel.all()))
    configured: bool = False


_config = _LogConfig()

# Bound per request by MappingLogger
_request_context: ContextVar[dict] = ContextVar("nibrs_log_context", default={})


def _parse_channels(channels: Iterable[Union[LogChannel, str]]) -> set[LogChannel]:
    parsed = set()
    for ch in channels:
        if isinstance(ch, LogChannel):
            parsed.add(ch)
        elif ch and ch.strip():
            channel = LogChannel.from_string(ch)
            if channel is not None:
                parsed.add(channel)
    return parsed


def _renderer(format: str):
    if format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[list[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Arguments left as None fall back to the NIBRS_LOG_* environment
    variables, then to INFO / console / all channels. Only the first call
    takes effect unless force is set.
    """
    if _config.configured and not force:
        return

    if level is None:
        level = os.environ.get("NIBRS_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("NIBRS_LOG_FORMAT", "console")

    if channels is None:
        selected = _parse_channels(os.environ.get("NIBRS_LOG_CHANNELS", "").split(","))
        selected = selected or set(LogChannel.all())
    else:
        selected = _parse_channels(channels)

    _config.level = level
    _config.format = format
    _config.channels = selected

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_STDLIB_LEVELS[level],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer(format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _config.configured = True


def get_current_config() -> dict:
    """Active level, format and channels, for tests and --debug output."""
    return {
        "level": _config.level.name,
        "format": _config.format,
        "channels": sorted(ch.value for ch in _config.channels),
    }


# =============================================================================
# Channel Logger
# =============================================================================

class ChannelLogger:
    """
    A structlog logger bound to one channel.

    info / verbose / debug are filtered by level and channel; error and
    warning are filtered only by SILENT.
    """

    def __init__(self, channel: LogChannel, name: Optional[str] = None, pass_name: Optional[str] = None):
        self.channel = channel
        self.name = name or f"nibrs.{channel.value.lower()}"
        self.pass_name = pass_name
        self._logger = structlog.get_logger(self.name)

    def enabled_for(self, level: LogLevel) -> bool:
        return self.channel in _config.channels and _config.level >= level

    def _fields(self, kwargs: dict) -> dict:
        data = {"channel": self.channel.value, **kwargs}
        if self.pass_name:
            data["pass"] = self.pass_name
        data.update(_request_context.get())
        return data

    def info(self, event: str, **kwargs) -> None:
        if self.enabled_for(LogLevel.INFO):
            self._logger.info(event, **self._fields(kwargs))

    def verbose(self, event: str, **kwargs) -> None:
        if self.enabled_for(LogLevel.VERBOSE):
            self._logger.debug(event, **self._fields({"verbosity": "verbose", **kwargs}))

    def debug(self, event: str, **kwargs) -> None:
        if self.enabled_for(LogLevel.DEBUG):
            self._logger.debug(event, **self._fields({"verbosity": "debug", **kwargs}))

    def warning(self, event: str, **kwargs) -> None:
        if _config.level != LogLevel.SILENT:
            self._logger.warning(event, **self._fields(kwargs))

    def error(self, event: str, **kwargs) -> None:
        if _config.level != LogLevel.SILENT:
            self._logger.error(event, **self._fields(kwargs))


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """Logger for a channel; unknown channel names fall back to SYSTEM."""
    configure_logging()
    if isinstance(channel, str):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM
    return ChannelLogger(channel=channel)


def get_pass_logger(pass_name: str, channel: Optional[LogChannel] = None) -> ChannelLogger:
    """
    Logger for a mapping pass.

    The channel is picked from the pass number ("p50_..." logs to EXTRACT)
    unless given.
    """
    configure_logging()
    if channel is None:
        channel = _PASS_CHANNELS.get(pass_name[:3], LogChannel.PIPELINE)
    return ChannelLogger(channel=channel, name=f"nibrs.{pass_name}", pass_name=pass_name)


# =============================================================================
# Request Context
# =============================================================================

def bind_request_context(**kwargs) -> None:
    """Add fields to every log event emitted in this context."""
    _request_context.set({**_request_context.get(), **kwargs})


def clear_request_context() -> None:
    _request_context.set({})


class MappingLogger:
    """Binds a request ID for one mapping run and times its passes."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self._log = get_logger(LogChannel.PIPELINE)
        self._started = time.perf_counter()
        self._pass_started: dict[str, float] = {}
        bind_request_context(request_id=request_id)

    @staticmethod
    def _ms_since(start: float) -> float:
        return round((time.perf_counter() - start) * 1000, 2)

    def pass_start(self, pass_name: str) -> None:
        self._pass_started[pass_name] = time.perf_counter()
        self._log.verbose("pass_started", pass_name=pass_name)

    def pass_end(self, pass_name: str, **metrics: Any) -> None:
        start = self._pass_started.pop(pass_name, time.perf_counter())
        self._log.verbose("pass_completed", pass_name=pass_name, duration_ms=self._ms_since(start), **metrics)

    def pass_error(self, pass_name: str, error: Exception) -> None:
        self._log.error(
            "pass_failed",
            pass_name=pass_name,
            error=str(error),
            error_type=type(error).__name__,
        )

    def mapping_complete(self, status: str, **metrics: Any) -> None:
        """Log the run summary and unbind the request ID."""
        self._log.info(
            "mapping_complete",
            status=status,
            total_duration_ms=self._ms_since(self._started),
            **metrics,
        )
        clear_request_context()
