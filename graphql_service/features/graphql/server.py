"""GraphQL request pipeline instrumented with request-outcome metrics.

Every request flows once through: method check → parameter extraction →
parse → schema check → validate → execute. On completion the pipeline emits
exactly one metrics event sequence: at most one ``record_error`` followed by
one ``record_throughput``. Schema validation passes run independently (on
construction and on every schema or options swap) and drive the availability
gauge.

Usage:
    server = GraphQLServer(GraphQLServerOptions(schema=schema, root_value=resolvers))
    response = await server.handle_request(GraphQLRequest(method="POST", ...))
    body = server.get_metrics()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from graphql import (
    GraphQLError,
    OperationType,
    get_operation_ast,
    parse,
    specified_rules,
    validate,
    validate_schema,
)

from graphql_service.core.exceptions import RequestParseException
from graphql_service.features.graphql.classifier import (
    RequestOutcome,
    classify_outcome,
    is_fetch_error,
)
from graphql_service.features.graphql.options import GraphQLServerOptions, ServerState
from graphql_service.features.graphql.request import (
    ALLOWED_METHODS,
    GraphQLParams,
    GraphQLRequest,
    GraphQLResponse,
    extract_request_params,
)
from graphql_service.infra.logging.entries import JsonLogger, create_log_entry
from graphql_service.infra.metrics.exposition import PrometheusTextExposition
from graphql_service.infra.metrics.models import ErrorKind
from graphql_service.infra.metrics.recorder import PrometheusMetricsRecorder

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from graphql import DocumentNode, GraphQLSchema

    from graphql_service.infra.metrics.recorder import MetricsRecorder

logger = logging.getLogger(__name__)

DEFAULT_LOGGER_NAME = "graphql_service.requests"
DEFAULT_SERVICE_NAME = "graphql-service"

_Result = tuple[GraphQLResponse, RequestOutcome]


def _error_response(
    status_code: int,
    errors: list[GraphQLError],
    headers: Mapping[str, str] | None = None,
) -> GraphQLResponse:
    return GraphQLResponse(
        status_code=status_code,
        payload={"errors": [error.formatted for error in errors]},
        headers=dict(headers or {}),
    )


class GraphQLServer:
    """Serves GraphQL requests and records their outcomes.

    Configuration lives in an immutable :class:`ServerState` replaced behind a
    single attribute. A request reads it once, so it sees either the old or
    the new configuration, never a mix. Writers are serialized by a lock;
    readers never take it.
    """

    def __init__(self, options: GraphQLServerOptions) -> None:
        self._lock = threading.Lock()
        self._state = self._build_state(options, previous=None)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def options(self) -> GraphQLServerOptions:
        return self._state.options

    @property
    def metrics_recorder(self) -> MetricsRecorder:
        return self._state.metrics_recorder

    def set_options(self, options: GraphQLServerOptions) -> None:
        """Replace the whole configuration and run a schema validation pass."""
        with self._lock:
            self._state = self._build_state(options, previous=self._state)

    def set_schema(self, schema: GraphQLSchema) -> None:
        """Hot-swap the schema and run a schema validation pass."""
        with self._lock:
            previous = self._state
            self._state = self._build_state(replace(previous.options, schema=schema), previous)

    def set_metrics_recorder(self, recorder: MetricsRecorder) -> None:
        """Swap the recorder. It immediately receives the current availability."""
        with self._lock:
            previous = self._state
            self._state = replace(
                previous,
                options=replace(previous.options, metrics_recorder=recorder),
                version=previous.version + 1,
            )
        self._safe_record(recorder.record_availability, previous.schema_valid)

    def _build_state(
        self,
        options: GraphQLServerOptions,
        previous: ServerState | None,
    ) -> ServerState:
        options = self._resolve_collaborators(options, previous)
        recorder = options.metrics_recorder
        assert recorder is not None

        candidate = options.schema
        errors = validate_schema(candidate)
        accepted = (
            previous is None
            or candidate is previous.schema
            or options.should_update_schema(candidate)
        )

        if accepted:
            schema, schema_valid = candidate, not errors
            if errors:
                self._log_schema_errors(options, "Active schema is invalid", errors)
        else:
            assert previous is not None
            schema, schema_valid = previous.schema, previous.schema_valid
            if errors:
                self._log_schema_errors(options, "Schema update rejected, schema is invalid", errors)
                self._safe_record(recorder.record_error, ErrorKind.SCHEMA_VALIDATION_ERROR)
            else:
                logger.info("Schema update rejected by should_update_schema")

        self._safe_record(recorder.record_availability, schema_valid)
        return ServerState(
            options=replace(options, schema=schema),
            schema=schema,
            schema_valid=schema_valid,
            version=0 if previous is None else previous.version + 1,
        )

    @staticmethod
    def _resolve_collaborators(
        options: GraphQLServerOptions,
        previous: ServerState | None,
    ) -> GraphQLServerOptions:
        if previous is not None:
            return replace(
                options,
                logger=options.logger or previous.logger,
                metrics_recorder=options.metrics_recorder or previous.metrics_recorder,
                exposition=options.exposition or previous.exposition,
            )
        return replace(
            options,
            logger=options.logger or JsonLogger(DEFAULT_LOGGER_NAME, DEFAULT_SERVICE_NAME),
            metrics_recorder=options.metrics_recorder or PrometheusMetricsRecorder(),
            exposition=options.exposition or PrometheusTextExposition(),
        )

    @staticmethod
    def _log_schema_errors(
        options: GraphQLServerOptions,
        message: str,
        errors: list[GraphQLError],
    ) -> None:
        assert options.logger is not None
        options.logger.log_message(
            create_log_entry(
                f"{message}: {'; '.join(error.message for error in errors)}",
                "ERROR",
                custom_error_name=ErrorKind.SCHEMA_VALIDATION_ERROR.value,
            ),
        )

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def get_metrics_content_type(self) -> str:
        """Content type of :meth:`get_metrics`."""
        return self._state.exposition.content_type()

    def get_metrics(self) -> str:
        """Current metrics in Prometheus text format."""
        state = self._state
        return state.exposition.render(state.metrics_recorder.snapshot())

    @staticmethod
    def _safe_record(record: Callable[..., None], *args: Any) -> None:
        try:
            record(*args)
        except Exception:
            logger.exception("Failed to record GraphQL metrics")

    def _record_outcome(self, state: ServerState, outcome: RequestOutcome) -> ErrorKind | None:
        kind = classify_outcome(outcome)
        recorder = state.metrics_recorder
        if kind is not None:
            self._safe_record(recorder.record_error, kind)
        self._safe_record(recorder.record_throughput)
        return kind

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def handle_request(self, request: GraphQLRequest) -> GraphQLResponse:
        """Handle one GraphQL request and record its outcome.

        Never raises for request-level problems: every failure is turned
        into a GraphQL error response.
        """
        state = self._state
        response, outcome = await self._process(state, request)
        self._record_outcome(state, outcome)
        return response

    async def _process(self, state: ServerState, request: GraphQLRequest) -> _Result:
        method = request.method.upper()
        if method not in ALLOWED_METHODS:
            error = GraphQLError(
                f"GraphQL server allows only GET and POST requests. Used method: {method}",
            )
            self._log_error(state, error, ErrorKind.METHOD_NOT_ALLOWED_ERROR)
            return (
                _error_response(405, [error], {"Allow": ", ".join(ALLOWED_METHODS)}),
                RequestOutcome(method_not_allowed=True),
            )

        try:
            params = extract_request_params(request)
        except RequestParseException as exc:
            error = GraphQLError(exc.detail, original_error=exc)
            self._log_error(state, error, ErrorKind.GRAPHQL_ERROR)
            return _error_response(exc.status_code, [error]), RequestOutcome(request_errors=(error,))

        if not params.query or not params.query.strip():
            error = GraphQLError("Request cannot be processed. No query was found in the request.")
            self._log_error(state, error, ErrorKind.MISSING_QUERY_PARAMETER_ERROR)
            return _error_response(400, [error]), RequestOutcome(missing_query=True)

        try:
            document = parse(params.query)
        except GraphQLError as error:
            self._log_error(state, error, ErrorKind.SYNTAX_ERROR, params.query)
            return _error_response(400, [error]), RequestOutcome(syntax_errors=(error,))

        # Before validate(): graphql-core cannot validate a document against an invalid schema
        if not state.schema_valid:
            error = GraphQLError("Request cannot be processed. Schema in GraphQL server is invalid.")
            self._log_error(state, error, ErrorKind.INVALID_SCHEMA_ERROR, params.query)
            return _error_response(500, [error]), RequestOutcome(invalid_schema=True)

        rules = [*specified_rules, *state.options.custom_validation_rules]
        validation_errors = validate(state.schema, document, rules)
        if validation_errors:
            for error in validation_errors:
                self._log_error(state, error, ErrorKind.VALIDATION_ERROR, params.query)
            return (
                _error_response(400, list(validation_errors)),
                RequestOutcome(validation_errors=tuple(validation_errors)),
            )

        operation = get_operation_ast(document, params.operation_name)
        if method == "GET" and operation is not None and operation.operation == OperationType.MUTATION:
            error = GraphQLError("Only queries can be executed with GET requests. Use POST for mutations.")
            self._log_error(state, error, ErrorKind.METHOD_NOT_ALLOWED_ERROR, params.query)
            return (
                _error_response(405, [error], {"Allow": "POST"}),
                RequestOutcome(method_not_allowed=True),
            )

        data, execution_errors = await self._execute(state, document, params)
        for error in execution_errors:
            kind = ErrorKind.FETCH_ERROR if is_fetch_error(error) else ErrorKind.GRAPHQL_ERROR
            self._log_error(state, error, kind, params.query)

        payload: dict[str, Any] = {"data": data}
        if execution_errors:
            payload["errors"] = [error.formatted for error in execution_errors]
        return GraphQLResponse(200, payload), RequestOutcome(execution_errors=tuple(execution_errors))

    @staticmethod
    async def _execute(
        state: ServerState,
        document: DocumentNode,
        params: GraphQLParams,
    ) -> tuple[Any, list[GraphQLError]]:
        options = state.options
        try:
            result = options.execute_function(
                schema=state.schema,
                document=document,
                root_value=options.root_value,
                context_value=options.context_value,
                variable_values=params.variables,
                operation_name=params.operation_name,
            )
            if isawaitable(result):
                result = await result
        except GraphQLError as error:
            return None, [error]
        except Exception as exc:
            return None, [GraphQLError(str(exc), original_error=exc)]
        return result.data, list(result.errors or [])

    @staticmethod
    def _log_error(
        state: ServerState,
        error: GraphQLError,
        kind: ErrorKind,
        query: str | None = None,
    ) -> None:
        state.logger.log_message(
            create_log_entry(
                error.message,
                "ERROR",
                error=error.original_error or error,
                custom_error_name=kind.value,
                query=query,
            ),
        )


__all__ = ["DEFAULT_LOGGER_NAME", "DEFAULT_SERVICE_NAME", "GraphQLServer"]
