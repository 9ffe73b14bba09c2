"""Build a :class:`GraphQLServer` from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from graphql import NoSchemaIntrospectionCustomRule, build_schema

from graphql_service.core.settings import (
    get_graphql_settings,
    get_logging_settings,
    get_metrics_settings,
)
from graphql_service.features.graphql.options import GraphQLServerOptions
from graphql_service.features.graphql.server import GraphQLServer
from graphql_service.infra.logging.entries import create_logger
from graphql_service.infra.metrics.exposition import PrometheusTextExposition
from graphql_service.infra.metrics.recorder import NoMetricsRecorder, PrometheusMetricsRecorder

if TYPE_CHECKING:
    from graphql import GraphQLSchema

    from graphql_service.core.settings import GraphQLSettings, LoggingSettings, MetricsSettings
    from graphql_service.infra.metrics.recorder import MetricsRecorder

logger = logging.getLogger(__name__)

DEFAULT_SDL = """
type Query {
  ping: String!
}
"""

DEFAULT_ROOT_VALUE: dict[str, Any] = {"ping": lambda _info: "pong"}


def load_schema(settings: GraphQLSettings) -> GraphQLSchema:
    """Build the schema from ``settings.schema_file`` or the built-in SDL."""
    if settings.schema_file is None:
        return build_schema(DEFAULT_SDL)
    logger.info("Loading GraphQL schema", extra={"schema_file": str(settings.schema_file)})
    return build_schema(settings.schema_file.read_text(encoding="utf-8"))


def create_metrics_recorder(settings: MetricsSettings) -> MetricsRecorder:
    """Prometheus recorder, or a no-op recorder when metrics are disabled."""
    if not settings.enabled:
        return NoMetricsRecorder()
    return PrometheusMetricsRecorder(prefix=settings.prefix)


def create_graphql_server(
    graphql_settings: GraphQLSettings | None = None,
    metrics_settings: MetricsSettings | None = None,
    log_settings: LoggingSettings | None = None,
    *,
    root_value: Any = None,
) -> GraphQLServer:
    """Create the process-wide GraphQL server and its metrics recorder.

    Args:
        graphql_settings: Optional GraphQL settings override.
        metrics_settings: Optional metrics settings override.
        log_settings: Optional logging settings override.
        root_value: Resolvers. Defaults to the built-in ``ping`` resolver when
            no schema file is configured.
    """
    graphql_settings = graphql_settings or get_graphql_settings()
    metrics_settings = metrics_settings or get_metrics_settings()
    log_settings = log_settings or get_logging_settings()

    if root_value is None and graphql_settings.schema_file is None:
        root_value = DEFAULT_ROOT_VALUE

    rules = () if graphql_settings.introspection_enabled else (NoSchemaIntrospectionCustomRule,)

    return GraphQLServer(
        GraphQLServerOptions(
            schema=load_schema(graphql_settings),
            root_value=root_value,
            custom_validation_rules=rules,
            logger=create_logger(
                log_settings.logger_name,
                log_settings.service_name,
                include_stacktrace=log_settings.include_stacktrace,
            ),
            metrics_recorder=create_metrics_recorder(metrics_settings),
            exposition=PrometheusTextExposition(prefix=metrics_settings.prefix),
        ),
    )


__all__ = ["create_graphql_server", "create_metrics_recorder", "load_schema"]
