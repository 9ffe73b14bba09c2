"""Tests for the metrics scrape router."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from graphql_service.features.graphql.options import GraphQLServerOptions
from graphql_service.features.graphql.server import GraphQLServer
from graphql_service.features.metrics.router import create_metrics_router
from graphql_service.infra.metrics.recorder import NoMetricsRecorder
from tests.utils import parse_metrics


@pytest.mark.unit
async def test_custom_path_and_disabled_recorder(user_schema):
    app = FastAPI()
    app.state.graphql_server = GraphQLServer(
        GraphQLServerOptions(schema=user_schema, metrics_recorder=NoMetricsRecorder()),
    )
    app.include_router(create_metrics_router("/internal/metrics"))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/internal/metrics")
        missing = await ac.get("/metrics")

    assert response.status_code == 200
    assert parse_metrics(response.text)["graphql_server_request_throughput"] == 0
    assert missing.status_code == 404


@pytest.mark.unit
async def test_disabled_recorder_reports_invalid_schema(invalid_schema):
    app = FastAPI()
    app.state.graphql_server = GraphQLServer(
        GraphQLServerOptions(schema=invalid_schema, metrics_recorder=NoMetricsRecorder()),
    )
    app.include_router(create_metrics_router())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/metrics")

    assert app.state.graphql_server.state.schema_valid is False
    assert parse_metrics(response.text)["graphql_server_availability"] == 0
