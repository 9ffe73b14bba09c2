"""FastAPI dependencies for the GraphQL server."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from graphql_service.features.graphql.server import GraphQLServer


def get_graphql_server(request: Request) -> GraphQLServer:
    """Return the server instance created by the application factory."""
    return request.app.state.graphql_server


GraphQLServerDep = Annotated[GraphQLServer, Depends(get_graphql_server)]

__all__ = ["GraphQLServerDep", "get_graphql_server"]
