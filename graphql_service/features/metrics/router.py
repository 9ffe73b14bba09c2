"""Prometheus metrics endpoint for observability.

Endpoints:
    GET /metrics - Prometheus scrape endpoint (path configurable)

Metrics Exposed:
    - graphql_server_availability - 1 if the active schema is valid, else 0
    - graphql_server_request_throughput - handled GraphQL requests
    - graphql_server_errors{errorClass=...} - requests per error class

Example Prometheus Configuration:
    ```yaml
    scrape_configs:
      - job_name: 'graphql-service'
        static_configs:
          - targets: ['localhost:8000']
        metrics_path: '/metrics'
        scrape_interval: 15s
    ```
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from graphql_service.features.graphql.dependencies import GraphQLServerDep


def create_metrics_router(path: str = "/metrics") -> APIRouter:
    """Create the scrape endpoint router mounted at ``path``."""
    router = APIRouter(tags=["observability"])

    @router.get(path)
    async def metrics(server: GraphQLServerDep) -> Response:
        """Expose request-outcome metrics in Prometheus text format."""
        return Response(
            content=server.get_metrics(),
            media_type=server.get_metrics_content_type(),
            headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
        )

    return router


__all__ = ["create_metrics_router"]
