"""Application lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from graphql_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and shutdown of the GraphQL service.

    The GraphQL server (and with it the metrics recorder) is created by the
    application factory, so availability is already recorded when the first
    request arrives.
    """
    settings = get_app_settings()
    server = app.state.graphql_server
    logger.info(
        "Starting application",
        extra={
            "service_name": settings.service_name,
            "version": settings.version,
            "environment": settings.environment,
            "schema_valid": server.state.schema_valid,
        },
    )
    yield
    logger.info("Shutting down application", extra={"service_name": settings.service_name})
