"""Shared test data and helpers for GraphQL pipeline tests."""

from __future__ import annotations

import json
import re
from typing import Any

from graphql import GraphQLError

from graphql_service.features.graphql.request import GraphQLRequest

USER_SDL = """
schema {
  query: Query
  mutation: Mutation
}

type Query {
  returnError: User
  users: [User]
  user(id: String!): User
}

type Mutation {
  login(userName: String, password: String): LoginData
  logout: LogoutResult
}

type User {
  userId: String
  userName: String
}

type LoginData {
  jwt: String
}

type LogoutResult {
  result: String
}
"""

USER_ONE = {"userId": "1", "userName": "UserOne"}
USER_TWO = {"userId": "2", "userName": "UserTwo"}

USERS_QUERY = "query users{ users { userId userName } }"
RETURN_ERROR_QUERY = "query returnError{ returnError { userId } }"
LOGOUT_MUTATION = "mutation logout{ logout { result } }"
INTROSPECTION_QUERY = "query { __schema { queryType { name } } }"

FETCH_ERROR_MESSAGE = "FetchError: An error occurred while connecting to following endpoint"


def _return_error(_info: Any) -> dict[str, str]:
    raise GraphQLError("Something went wrong!")


def _user(_info: Any, id: str) -> dict[str, str]:
    users = {"1": USER_ONE, "2": USER_TWO}
    if id not in users:
        raise GraphQLError(f"User for userid={id} was not found")
    return users[id]


USER_RESOLVERS: dict[str, Any] = {
    "returnError": _return_error,
    "users": lambda _info: [USER_ONE, USER_TWO],
    "user": _user,
    "login": lambda _info, userName=None, password=None: {"jwt": f"jwt-{userName}"},
    "logout": lambda _info: {"result": "Goodbye!"},
}


def post(query: Any = None, *, content_type: str | None = "application/json", **extra: Any) -> GraphQLRequest:
    """Build a JSON POST request carrying ``query`` and any extra body fields."""
    body: dict[str, Any] = dict(extra)
    if query is not None:
        body["query"] = query
    return GraphQLRequest(
        method="POST",
        content_type=content_type,
        body=json.dumps(body).encode(),
    )


def get(query: str | None = None, **params: str) -> GraphQLRequest:
    """Build a GET request with ``query`` in the URL parameters."""
    if query is not None:
        params["query"] = query
    return GraphQLRequest(method="GET", query_params=params)


_SAMPLE = re.compile(r'^(?P<name>[a-zA-Z_:][a-zA-Z0-9_:]*)(?:\{errorClass="(?P<label>[^"]*)"\})? (?P<value>\S+)$')


def parse_metrics(text: str) -> dict[str, int]:
    """Map series (``name`` or ``name{errorClass}``) to integer values."""
    series: dict[str, int] = {}
    for line in text.splitlines():
        if not line or line.startswith("#"):
            continue
        match = _SAMPLE.match(line)
        assert match is not None, f"malformed sample line: {line!r}"
        key = match["name"]
        if match["label"] is not None:
            key = f"{key}{{{match['label']}}}"
        series[key] = int(match["value"])
    return series


def error_count(text: str, kind: str, prefix: str = "graphql_server") -> int:
    """Value of the error series labelled ``kind`` in exposition ``text``."""
    return parse_metrics(text)[f"{prefix}_errors{{{kind}}}"]
