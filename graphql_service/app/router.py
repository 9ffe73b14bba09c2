"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphql_service.features.graphql.router import create_graphql_router
from graphql_service.features.metrics.router import create_metrics_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from graphql_service.core.settings import GraphQLSettings, MetricsSettings

logger = logging.getLogger(__name__)


def setup_routers(
    app: FastAPI,
    graphql_settings: GraphQLSettings,
    metrics_settings: MetricsSettings,
) -> None:
    """Register the GraphQL and metrics routers with the application.

    Args:
        app: FastAPI application instance.
        graphql_settings: Provides the GraphQL endpoint path.
        metrics_settings: Provides the scrape endpoint path. The endpoint is
            not mounted when metrics are disabled.
    """
    app.include_router(create_graphql_router(graphql_settings.path))
    if metrics_settings.enabled:
        app.include_router(create_metrics_router(metrics_settings.path))
    logger.debug(
        "Routers registered",
        extra={
            "graphql_path": graphql_settings.path,
            "metrics_path": metrics_settings.path if metrics_settings.enabled else None,
        },
    )
