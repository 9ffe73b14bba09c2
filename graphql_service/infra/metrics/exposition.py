"""Prometheus text exposition of a :class:`MetricsSnapshot`.

Output (text format 0.0.4), one line per series, integer values:

    # HELP graphql_server_availability ...
    # TYPE graphql_server_availability gauge
    graphql_server_availability 1
    # HELP graphql_server_request_throughput ...
    # TYPE graphql_server_request_throughput counter
    graphql_server_request_throughput 0
    # HELP graphql_server_errors ...
    # TYPE graphql_server_errors counter
    graphql_server_errors{errorClass="graphql-error"} 0
    ...

Series names carry no ``_total`` suffix so scrapers see the same names the
recorder was configured with.
"""

from __future__ import annotations

from graphql_service.infra.metrics.models import ErrorKind, MetricsSnapshot
from graphql_service.infra.metrics.recorder import DEFAULT_PREFIX, ERROR_CLASS_LABEL

CONTENT_TYPE_TEXT = "text/plain; version=0.0.4; charset=utf-8"


def _escape_label_value(value: str) -> str:
    return value.replace("\\", r"\\").replace("\n", r"\n").replace('"', r"\"")


class PrometheusTextExposition:
    """Renders snapshots for a polling Prometheus collector."""

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self.prefix = prefix

    def content_type(self) -> str:
        """Content type identifying the exposition format version."""
        return CONTENT_TYPE_TEXT

    def render(self, snapshot: MetricsSnapshot) -> str:
        """Render every series of ``snapshot``; zero-valued series included.

        Pure function of ``snapshot``: identical snapshots give identical text.
        """
        availability = f"{self.prefix}_availability"
        throughput = f"{self.prefix}_request_throughput"
        errors = f"{self.prefix}_errors"

        lines = [
            f"# HELP {availability} GraphQL server availability. "
            "1 if the active schema is valid, 0 otherwise.",
            f"# TYPE {availability} gauge",
            f"{availability} {int(snapshot.availability)}",
            f"# HELP {throughput} Number of GraphQL requests handled, whatever their outcome.",
            f"# TYPE {throughput} counter",
            f"{throughput} {int(snapshot.request_throughput)}",
            f"# HELP {errors} Number of GraphQL requests per error class.",
            f"# TYPE {errors} counter",
        ]
        lines.extend(
            f'{errors}{{{ERROR_CLASS_LABEL}="{_escape_label_value(kind.value)}"}} '
            f"{int(snapshot.error_counters.get(kind, 0))}"
            for kind in ErrorKind
        )
        return "\n".join(lines) + "\n"


__all__ = ["CONTENT_TYPE_TEXT", "PrometheusTextExposition"]
