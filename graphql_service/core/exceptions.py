"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        extra: Additional context-specific information about the error.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            405: "Method Not Allowed",
            415: "Unsupported Media Type",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class RequestParseException(AppException):
    """Raised when GraphQL parameters cannot be extracted from a request.

    Covers unsupported content types, undecodable bodies and malformed
    ``variables``. The pipeline turns it into a GraphQL error response.

    Example:
        raise RequestParseException(
            detail="POST body contains invalid content type: text/plain",
            type="invalid-content-type",
            extra={"content_type": "text/plain"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "invalid-request",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Bad Request",
            extra=extra,
        )


__all__ = ["AppException", "RequestParseException"]
