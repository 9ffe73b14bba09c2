"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings isolation between tests
    - GraphQL Fixtures: user schema, server and recorder
    - Application Fixtures: FastAPI app and HTTP client
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Iterator

import pytest
from graphql import GraphQLSchema, NoSchemaIntrospectionCustomRule, build_schema
from httpx import ASGITransport, AsyncClient

from graphql_service.core.settings import clear_all_caches
from graphql_service.features.graphql.options import GraphQLServerOptions
from graphql_service.features.graphql.server import GraphQLServer
from graphql_service.infra.metrics.recorder import PrometheusMetricsRecorder
from tests.utils import USER_RESOLVERS, USER_SDL

# Keep test output readable
os.environ.setdefault("LOG_JSON_LOGS", "false")
os.environ.setdefault("APP_ENVIRONMENT", "test")


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_settings() -> Iterator[None]:
    """Reload settings from the environment for every test."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# GraphQL Fixtures
# ============================================================================


@pytest.fixture
def user_schema() -> GraphQLSchema:
    """Valid schema with users, a failing field and mutations."""
    return build_schema(USER_SDL)


@pytest.fixture
def invalid_schema() -> GraphQLSchema:
    """Structurally invalid schema (no query root type)."""
    return GraphQLSchema(description="invalid")


@pytest.fixture
def recorder() -> PrometheusMetricsRecorder:
    """Fresh recorder with its own registry."""
    return PrometheusMetricsRecorder()


@pytest.fixture
def server_options(
    user_schema: GraphQLSchema,
    recorder: PrometheusMetricsRecorder,
) -> GraphQLServerOptions:
    """Initial options: user schema, resolvers, no introspection."""
    return GraphQLServerOptions(
        schema=user_schema,
        root_value=USER_RESOLVERS,
        custom_validation_rules=(NoSchemaIntrospectionCustomRule,),
        metrics_recorder=recorder,
    )


@pytest.fixture
def server(server_options: GraphQLServerOptions) -> GraphQLServer:
    """GraphQL server wired to the ``recorder`` fixture."""
    return GraphQLServer(server_options)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(server: GraphQLServer):
    """Create FastAPI application exposing the ``server`` fixture."""
    from graphql_service.app.main import create_app

    return create_app(server)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the application.

    Example:
        async def test_metrics(client):
            response = await client.get("/metrics")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
