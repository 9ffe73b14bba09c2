"""Outcome classification for handled GraphQL requests.

Maps a :class:`RequestOutcome` to at most one :class:`ErrorKind`. Stages are
checked in pipeline order and the first match wins:

1. method not allowed
2. missing query text
3. syntax errors
4. query validation errors
5. invalid active schema
6. upstream fetch failures (execution error message starts with ``FetchError``)
7. any other error
8. success (``None``)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from graphql_service.infra.metrics.models import ErrorKind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from graphql import GraphQLError

logger = logging.getLogger(__name__)

FETCH_ERROR_PREFIX = "FetchError"


@dataclass(frozen=True)
class RequestOutcome:
    """What the pipeline observed while handling one request.

    Attributes:
        method_not_allowed: The HTTP method (or GET for a mutation) was rejected.
        missing_query: No query text was supplied.
        syntax_errors: Errors raised while parsing the query.
        validation_errors: Errors from validating the query against the schema.
        invalid_schema: The active schema failed structural validation.
        request_errors: Errors extracting parameters (content type, body, variables).
        execution_errors: Errors produced or raised during execution.
    """

    method_not_allowed: bool = False
    missing_query: bool = False
    syntax_errors: Sequence[GraphQLError] = ()
    validation_errors: Sequence[GraphQLError] = ()
    invalid_schema: bool = False
    request_errors: Sequence[GraphQLError] = ()
    execution_errors: Sequence[GraphQLError] = ()


def is_fetch_error(error: GraphQLError) -> bool:
    """Whether ``error`` reports a failure to reach a backing service."""
    return str(error.message).startswith(FETCH_ERROR_PREFIX)


_STAGES: tuple[tuple[Callable[[RequestOutcome], bool], ErrorKind], ...] = (
    (lambda o: o.method_not_allowed, ErrorKind.METHOD_NOT_ALLOWED_ERROR),
    (lambda o: o.missing_query, ErrorKind.MISSING_QUERY_PARAMETER_ERROR),
    (lambda o: bool(o.syntax_errors), ErrorKind.SYNTAX_ERROR),
    (lambda o: bool(o.validation_errors), ErrorKind.VALIDATION_ERROR),
    (lambda o: o.invalid_schema, ErrorKind.INVALID_SCHEMA_ERROR),
    (lambda o: any(is_fetch_error(e) for e in o.execution_errors), ErrorKind.FETCH_ERROR),
    (lambda o: bool(o.request_errors or o.execution_errors), ErrorKind.GRAPHQL_ERROR),
)


def classify_outcome(outcome: RequestOutcome) -> ErrorKind | None:
    """Return the error kind of ``outcome``, or None for a success.

    A classification failure is logged and treated as a success so that
    metrics never fail a request.
    """
    try:
        for matches, kind in _STAGES:
            if matches(outcome):
                return kind
    except Exception:
        logger.exception("Failed to classify GraphQL request outcome")
    return None


__all__ = ["FETCH_ERROR_PREFIX", "RequestOutcome", "classify_outcome", "is_fetch_error"]
