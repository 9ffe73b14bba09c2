"""Metrics recorders: the single source of truth for request-outcome metrics.

A recorder owns three pieces of state:

- ``availability``: 0/1 gauge, overwritten on every schema validation pass
- ``request_throughput``: counter, +1 per handled request
- ``errors``: counter per :class:`ErrorKind`, +1 per request classified to it

One instance is created at startup and injected into the GraphQL server.
Nothing here registers with the process-global Prometheus registry.

Usage:
    recorder = PrometheusMetricsRecorder()
    recorder.record_availability(True)
    recorder.record_error(ErrorKind.SYNTAX_ERROR)
    recorder.record_throughput()
    snapshot = recorder.snapshot()
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from prometheus_client import CollectorRegistry, Counter, Gauge

from graphql_service.infra.metrics.models import ErrorKind, MetricsSnapshot

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "graphql_server"
ERROR_CLASS_LABEL = "errorClass"


@runtime_checkable
class MetricsRecorder(Protocol):
    """Capability consumed by the GraphQL pipeline to record outcomes."""

    def record_availability(self, is_valid: bool) -> None:
        """Set the availability gauge to 1 if ``is_valid`` else 0."""
        ...

    def record_throughput(self) -> None:
        """Count one fully handled request."""
        ...

    def record_error(self, kind: ErrorKind | str) -> None:
        """Count one request classified to ``kind``.

        Values outside :class:`ErrorKind` are rejected without raising.
        """
        ...

    def snapshot(self) -> MetricsSnapshot:
        """Read the current state of every metric."""
        ...


class PrometheusMetricsRecorder:
    """Recorder backed by ``prometheus_client`` metrics in a private registry.

    Every metric child guards its value with its own lock, so concurrent
    increments are never lost and unrelated metrics never contend.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """Create zeroed metrics with availability set to 1.

        Args:
            prefix: Metric name prefix.
            registry: Registry to register into. Defaults to a fresh one.
        """
        self.prefix = prefix
        self.registry = registry or CollectorRegistry()

        self._availability = Gauge(
            f"{prefix}_availability",
            "GraphQL server availability. 1 if the active schema is valid, 0 otherwise.",
            registry=self.registry,
        )
        self._throughput = Counter(
            f"{prefix}_request_throughput",
            "Number of GraphQL requests handled, whatever their outcome.",
            registry=self.registry,
        )
        self._errors = Counter(
            f"{prefix}_errors",
            "Number of GraphQL requests per error class.",
            labelnames=[ERROR_CLASS_LABEL],
            registry=self.registry,
        )

        # Pre-create every series so zero counts are exported
        for kind in ErrorKind:
            self._errors.labels(**{ERROR_CLASS_LABEL: kind.value})
        self._availability.set(1)

    def record_availability(self, is_valid: bool) -> None:
        self._availability.set(1 if is_valid else 0)

    def record_throughput(self) -> None:
        self._throughput.inc()

    def record_error(self, kind: ErrorKind | str) -> None:
        error_kind = ErrorKind.parse(kind)
        if error_kind is None:
            logger.warning(
                "Ignoring unknown GraphQL error class",
                extra={"error_class": str(kind)},
            )
            return
        self._errors.labels(**{ERROR_CLASS_LABEL: error_kind.value}).inc()

    def snapshot(self) -> MetricsSnapshot:
        values: dict[tuple[str, str | None], float] = {}
        for family in self.registry.collect():
            for sample in family.samples:
                values[(sample.name, sample.labels.get(ERROR_CLASS_LABEL))] = sample.value

        throughput_sample = f"{self.prefix}_request_throughput_total"
        errors_sample = f"{self.prefix}_errors_total"
        return MetricsSnapshot(
            availability=int(values.get((f"{self.prefix}_availability", None), 1)),
            request_throughput=int(values.get((throughput_sample, None), 0)),
            error_counters={
                kind: int(values.get((errors_sample, kind.value), 0)) for kind in ErrorKind
            },
        )


class NoMetricsRecorder:
    """Recorder used when metrics are disabled.

    Counts nothing, but keeps the last availability so a snapshot never
    reports an invalid schema as available.
    """

    def __init__(self) -> None:
        self._availability = 1

    def record_availability(self, is_valid: bool) -> None:
        self._availability = 1 if is_valid else 0

    def record_throughput(self) -> None:
        pass

    def record_error(self, kind: ErrorKind | str) -> None:
        pass

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(availability=self._availability)


__all__ = [
    "DEFAULT_PREFIX",
    "ERROR_CLASS_LABEL",
    "MetricsRecorder",
    "NoMetricsRecorder",
    "PrometheusMetricsRecorder",
]
