"""GraphQL request pipeline with request-outcome metrics.

This module provides:
- ``GraphQLServer``: transport-agnostic pipeline built on graphql-core
- ``classify_outcome``: maps a handled request to at most one error kind
"""

from __future__ import annotations

from graphql_service.features.graphql.classifier import (
    FETCH_ERROR_PREFIX,
    RequestOutcome,
    classify_outcome,
)
from graphql_service.features.graphql.options import GraphQLServerOptions, is_schema_valid
from graphql_service.features.graphql.request import GraphQLRequest, GraphQLResponse
from graphql_service.features.graphql.server import GraphQLServer

__all__ = [
    "FETCH_ERROR_PREFIX",
    "GraphQLRequest",
    "GraphQLResponse",
    "GraphQLServer",
    "GraphQLServerOptions",
    "RequestOutcome",
    "classify_outcome",
    "is_schema_valid",
]
