"""FastAPI application factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

from graphql_service.app.lifespan import lifespan
from graphql_service.app.router import setup_routers
from graphql_service.core.settings import (
    get_app_settings,
    get_graphql_settings,
    get_metrics_settings,
)
from graphql_service.features.graphql.factory import create_graphql_server
from graphql_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from graphql_service.features.graphql.server import GraphQLServer


def create_app(server: GraphQLServer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        server: GraphQL server to expose. Built from settings when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    setup_logging()

    app_settings = get_app_settings()
    graphql_settings = get_graphql_settings()
    metrics_settings = get_metrics_settings()

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.graphql_server = server or create_graphql_server(
        graphql_settings=graphql_settings,
        metrics_settings=metrics_settings,
    )

    setup_routers(app, graphql_settings, metrics_settings)
    return app
