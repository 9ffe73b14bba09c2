"""Request-outcome metrics: error taxonomy, recorders and exposition."""

from __future__ import annotations

from graphql_service.infra.metrics.exposition import CONTENT_TYPE_TEXT, PrometheusTextExposition
from graphql_service.infra.metrics.models import ErrorKind, MetricsSnapshot
from graphql_service.infra.metrics.recorder import (
    MetricsRecorder,
    NoMetricsRecorder,
    PrometheusMetricsRecorder,
)

__all__ = [
    "CONTENT_TYPE_TEXT",
    "ErrorKind",
    "MetricsRecorder",
    "MetricsSnapshot",
    "NoMetricsRecorder",
    "PrometheusMetricsRecorder",
    "PrometheusTextExposition",
]
