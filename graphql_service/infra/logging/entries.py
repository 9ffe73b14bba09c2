"""Request log entries and the pluggable ``Logger`` capability.

The GraphQL pipeline never talks to ``logging`` directly for request-level
events. It builds a :class:`LogEntry` and hands it to a :class:`Logger`. The
default :class:`JsonLogger` forwards entries to a named stdlib logger as
structured records (rendered by ``JSONFormatter``). Behavior is changed by
wrapping, not subclassing:

    logger = StacktraceStrippingLogger(JsonLogger("requests", "graphql-service"))
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass(frozen=True)
class LogEntry:
    """A single request-level log event."""

    message: str
    level: str = "INFO"
    timestamp: str = ""
    error_name: str | None = None
    stacktrace: str | None = None
    query: str | None = None
    context: Mapping[str, Any] = field(default_factory=dict)


def create_log_entry(
    message: str,
    level: str = "INFO",
    *,
    error: BaseException | None = None,
    custom_error_name: str | None = None,
    query: str | None = None,
    context: Mapping[str, Any] | None = None,
) -> LogEntry:
    """Build a :class:`LogEntry`, deriving error name and stack trace from ``error``.

    Args:
        message: Human-readable message.
        level: One of DEBUG, INFO, WARNING, ERROR.
        error: Exception that caused the entry, if any.
        custom_error_name: Overrides the exception class name (e.g. ``"fetch-error"``).
        query: GraphQL query text being processed.
        context: Extra structured fields.

    Returns:
        Immutable log entry with a UTC timestamp.
    """
    error_name = custom_error_name
    stacktrace = None
    if error is not None:
        error_name = error_name or type(error).__name__
        if error.__traceback__ is not None:
            stacktrace = "".join(
                traceback.format_exception(type(error), error, error.__traceback__),
            )

    return LogEntry(
        message=message,
        level=level.upper(),
        timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        error_name=error_name,
        stacktrace=stacktrace,
        query=query,
        context=dict(context or {}),
    )


@runtime_checkable
class Logger(Protocol):
    """Capability consumed by the GraphQL pipeline for request log entries."""

    def log_message(self, entry: LogEntry) -> None: ...


class JsonLogger:
    """Default logger: emits entries on a named stdlib logger.

    Entry fields are attached as ``extra`` so ``JSONFormatter`` renders them
    as top-level JSON keys.
    """

    def __init__(self, logger_name: str, service_name: str) -> None:
        self.logger_name = logger_name
        self.service_name = service_name
        self._logger = logging.getLogger(logger_name)

    def log_message(self, entry: LogEntry) -> None:
        extra: dict[str, Any] = {
            "service_name": self.service_name,
            "entry_timestamp": entry.timestamp,
        }
        if entry.error_name:
            extra["error_name"] = entry.error_name
        if entry.stacktrace:
            extra["stacktrace"] = entry.stacktrace
        if entry.query:
            extra["query"] = entry.query
        if entry.context:
            extra["context"] = dict(entry.context)

        self._logger.log(_LEVELS.get(entry.level, logging.INFO), entry.message, extra=extra)


class StacktraceStrippingLogger:
    """Wraps another :class:`Logger` and drops stack traces before delegating."""

    def __init__(self, inner: Logger) -> None:
        self._inner = inner

    def log_message(self, entry: LogEntry) -> None:
        self._inner.log_message(replace(entry, stacktrace=None))


def create_logger(logger_name: str, service_name: str, *, include_stacktrace: bool = True) -> Logger:
    """Build the request logger described by logging settings."""
    json_logger = JsonLogger(logger_name, service_name)
    if include_stacktrace:
        return json_logger
    return StacktraceStrippingLogger(json_logger)


__all__ = [
    "JsonLogger",
    "LogEntry",
    "Logger",
    "StacktraceStrippingLogger",
    "create_log_entry",
    "create_logger",
]
