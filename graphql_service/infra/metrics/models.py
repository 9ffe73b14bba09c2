"""Error taxonomy and the point-in-time metrics snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class ErrorKind(str, Enum):
    """Closed set of reasons a GraphQL request did not succeed.

    The value doubles as the ``errorClass`` label of the exposed error series.
    """

    GRAPHQL_ERROR = "graphql-error"
    SCHEMA_VALIDATION_ERROR = "schema-validation-error"
    VALIDATION_ERROR = "validation-error"
    SYNTAX_ERROR = "syntax-error"
    METHOD_NOT_ALLOWED_ERROR = "method-not-allowed-error"
    MISSING_QUERY_PARAMETER_ERROR = "missing-query-parameter-error"
    INVALID_SCHEMA_ERROR = "invalid-schema-error"
    FETCH_ERROR = "fetch-error"

    @classmethod
    def parse(cls, value: ErrorKind | str) -> ErrorKind | None:
        """Return the matching member, or None when ``value`` is outside the set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


def _zero_counters() -> Mapping[ErrorKind, int]:
    return MappingProxyType(dict.fromkeys(ErrorKind, 0))


@dataclass(frozen=True)
class MetricsSnapshot:
    """Observable recorder state at an instant.

    Attributes:
        availability: 1 when the active schema is structurally valid, else 0.
        request_throughput: Requests fully handled, whatever their outcome.
        error_counters: Count per error kind. Every kind is present.
    """

    availability: int = 1
    request_throughput: int = 0
    error_counters: Mapping[ErrorKind, int] = field(default_factory=_zero_counters)

    def __post_init__(self) -> None:
        if self.availability not in (0, 1):
            msg = f"availability must be 0 or 1, got {self.availability!r}"
            raise ValueError(msg)
        # Absent kinds read as zero; freeze the mapping
        counters = {kind: int(self.error_counters.get(kind, 0)) for kind in ErrorKind}
        object.__setattr__(self, "error_counters", MappingProxyType(counters))

    @classmethod
    def initial(cls) -> MetricsSnapshot:
        """State of a freshly initialized recorder."""
        return cls()


__all__ = ["ErrorKind", "MetricsSnapshot"]
