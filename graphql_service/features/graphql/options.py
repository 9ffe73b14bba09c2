"""GraphQL server options and the immutable server state they produce."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from graphql import ExecutionResult, GraphQLSchema, execute, validate_schema
from graphql.validation import ASTValidationRule

from graphql_service.infra.logging.entries import Logger
from graphql_service.infra.metrics.exposition import PrometheusTextExposition
from graphql_service.infra.metrics.recorder import MetricsRecorder

ExecuteFunction = Callable[..., ExecutionResult | Awaitable[ExecutionResult]]
ShouldUpdateSchema = Callable[[GraphQLSchema], bool]


def is_schema_valid(schema: GraphQLSchema) -> bool:
    """Whether ``schema`` passes GraphQL structural validation."""
    return not validate_schema(schema)


@dataclass(frozen=True)
class GraphQLServerOptions:
    """Configuration of a :class:`GraphQLServer`.

    ``logger``, ``metrics_recorder`` and ``exposition`` may be left as None:
    the server then keeps the ones already in use (or creates defaults on
    first use), so replacing options never resets recorded metrics.

    Attributes:
        schema: Schema to serve.
        root_value: Root value passed to the execute function (resolvers).
        context_value: Context passed to resolvers.
        custom_validation_rules: Rules added to the GraphQL specified rules.
        execute_function: Replaces ``graphql.execute`` (sync or async).
        should_update_schema: Decides whether a new schema becomes active.
            Defaults to accepting only structurally valid schemas.
        logger: Receives request log entries.
        metrics_recorder: Records request outcomes and availability.
        exposition: Renders recorded metrics for scraping.
    """

    schema: GraphQLSchema
    root_value: Any = None
    context_value: Any = None
    custom_validation_rules: Sequence[type[ASTValidationRule]] = ()
    execute_function: ExecuteFunction = execute
    should_update_schema: ShouldUpdateSchema = is_schema_valid
    logger: Logger | None = None
    metrics_recorder: MetricsRecorder | None = None
    exposition: PrometheusTextExposition | None = None


@dataclass(frozen=True)
class ServerState:
    """Configuration snapshot read once per request.

    Attributes:
        options: Fully resolved options (no None collaborators).
        schema: Active schema. May differ from ``options.schema`` when an
            update was rejected.
        schema_valid: Result of the last schema validation pass.
        version: Incremented on every swap.
    """

    options: GraphQLServerOptions
    schema: GraphQLSchema
    schema_valid: bool
    version: int = 0

    @property
    def logger(self) -> Logger:
        assert self.options.logger is not None
        return self.options.logger

    @property
    def metrics_recorder(self) -> MetricsRecorder:
        assert self.options.metrics_recorder is not None
        return self.options.metrics_recorder

    @property
    def exposition(self) -> PrometheusTextExposition:
        assert self.options.exposition is not None
        return self.options.exposition


__all__ = [
    "ExecuteFunction",
    "GraphQLServerOptions",
    "ServerState",
    "ShouldUpdateSchema",
    "is_schema_valid",
]
