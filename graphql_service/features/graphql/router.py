"""GraphQL endpoint.

The route accepts every method so that disallowed ones reach the pipeline
and are answered (and counted) as ``method-not-allowed-error``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from graphql_service.features.graphql.dependencies import get_graphql_server
from graphql_service.features.graphql.request import GraphQLRequest

if TYPE_CHECKING:
    from starlette.types import Receive, Scope, Send


class GraphQLEndpoint:
    """ASGI endpoint forwarding every HTTP request to the GraphQL server.

    Starlette only filters methods for function endpoints, so an ASGI
    endpoint mounted without ``methods`` sees HEAD, TRACE and custom verbs.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = await self.handle(request)
        await response(scope, receive, send)

    @staticmethod
    async def handle(request: Request) -> JSONResponse:
        server = get_graphql_server(request)
        graphql_request = GraphQLRequest(
            method=request.method,
            content_type=request.headers.get("content-type"),
            body=await request.body(),
            query_params=dict(request.query_params),
        )
        response = await server.handle_request(graphql_request)
        return JSONResponse(
            content=response.payload,
            status_code=response.status_code,
            headers=dict(response.headers),
        )


def create_graphql_router(path: str = "/graphql") -> APIRouter:
    """Create the GraphQL router mounted at ``path``."""
    router = APIRouter(tags=["graphql"])
    router.add_route(path, GraphQLEndpoint(), include_in_schema=False)
    return router


__all__ = ["GraphQLEndpoint", "create_graphql_router"]
