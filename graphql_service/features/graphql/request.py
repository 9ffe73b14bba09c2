"""Transport-agnostic GraphQL request/response types and parameter extraction."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from graphql_service.core.exceptions import RequestParseException

ALLOWED_METHODS = ("GET", "POST")
JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class GraphQLRequest:
    """An inbound request as seen by the GraphQL pipeline.

    Attributes:
        method: HTTP method.
        content_type: Raw ``Content-Type`` header value, if any.
        body: Raw request body.
        query_params: Decoded URL query parameters.
    """

    method: str
    content_type: str | None = None
    body: bytes = b""
    query_params: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphQLResponse:
    """Result of handling a request, ready to be written by a transport."""

    status_code: int
    payload: dict[str, Any]
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphQLParams:
    """GraphQL parameters extracted from a request."""

    query: str | None = None
    variables: dict[str, Any] | None = None
    operation_name: str | None = None


def _media_type(content_type: str | None) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def _parse_variables(raw: Any) -> dict[str, Any] | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            msg = "Variables are invalid JSON."
            raise RequestParseException(msg, type="invalid-variables") from exc
    if raw is None:
        return None
    if not isinstance(raw, dict):
        msg = "Variables must be a JSON object."
        raise RequestParseException(msg, type="invalid-variables")
    return raw


def _optional_str(params: Mapping[str, Any], key: str) -> str | None:
    value = params.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"Parameter '{key}' must be a string."
        raise RequestParseException(msg, type="invalid-parameter", extra={"parameter": key})
    return value


def extract_request_params(request: GraphQLRequest) -> GraphQLParams:
    """Read ``query``, ``variables`` and ``operationName`` from a request.

    GET requests use the URL query string. POST requests must carry a JSON
    object body.

    Raises:
        RequestParseException: The content type is not JSON, the body cannot be
            decoded, or a parameter has the wrong type.
    """
    if request.method.upper() == "GET":
        source: Mapping[str, Any] = request.query_params
    else:
        if _media_type(request.content_type) != JSON_MEDIA_TYPE:
            content_type = request.content_type or ""
            msg = f"POST body contains invalid content type: {content_type!r}."
            raise RequestParseException(
                msg,
                type="invalid-content-type",
                extra={"content_type": request.content_type},
            )
        if not request.body.strip():
            source = {}
        else:
            try:
                source = json.loads(request.body)
            except ValueError as exc:
                msg = "POST body cannot be parsed as JSON."
                raise RequestParseException(msg, type="invalid-body") from exc
            if not isinstance(source, dict):
                msg = "POST body must be a JSON object."
                raise RequestParseException(msg, type="invalid-body")

    return GraphQLParams(
        query=_optional_str(source, "query"),
        variables=_parse_variables(source.get("variables")),
        operation_name=_optional_str(source, "operationName"),
    )


__all__ = [
    "ALLOWED_METHODS",
    "GraphQLParams",
    "GraphQLRequest",
    "GraphQLResponse",
    "extract_request_params",
]
