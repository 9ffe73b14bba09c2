"""Logging infrastructure.

Provides structured logging with:
- JSONL format for Loki/Elasticsearch ingestion
- OpenTelemetry trace correlation
- A pluggable ``Logger`` capability for GraphQL request log entries

Basic usage:
    import logging

    from graphql_service.infra.logging import setup_logging

    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Processing request")
"""

from graphql_service.infra.logging.config import configure_logging, setup_logging
from graphql_service.infra.logging.entries import (
    JsonLogger,
    LogEntry,
    Logger,
    StacktraceStrippingLogger,
    create_log_entry,
    create_logger,
)
from graphql_service.infra.logging.formatters import JSONFormatter

__all__ = [
    "JSONFormatter",
    "JsonLogger",
    "LogEntry",
    "Logger",
    "StacktraceStrippingLogger",
    "configure_logging",
    "create_log_entry",
    "create_logger",
    "setup_logging",
]
